"""Read-through cache in front of the GuildSettings repository.

Reads are served from a per-store ``TTLCache``; writes go through the
``UpdateGuildSettings`` command and evict the guild's entry, so a reader in
this process never sees settings older than the last update it made. Other
processes may see stale settings for up to the cache TTL.
"""

import json
import threading
import time

import structlog
from cachetools import TTLCache
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewdesk.domain import custom_setting
from reviewdesk.settings.management import UpdateGuildSettings
from reviewdesk.settings.settings import GuildSettings

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 300
DEFAULT_MAXSIZE = 1024


class GuildSettingsStore:
    def __init__(self, ttl: float | None = None, maxsize: int | None = None, timer=time.monotonic):
        self.ttl = ttl if ttl is not None else custom_setting("SETTINGS_CACHE_TTL", DEFAULT_TTL_SECONDS)
        maxsize = maxsize if maxsize is not None else custom_setting("SETTINGS_CACHE_SIZE", DEFAULT_MAXSIZE)
        self._cache = TTLCache(maxsize=int(maxsize), ttl=float(self.ttl), timer=timer)
        self._lock = threading.Lock()

    def get(self, guild_id) -> GuildSettings:
        """Settings for the guild, created with defaults if the guild has none yet."""
        guild_id = str(guild_id)
        with self._lock:
            cached = self._cache.get(guild_id)
        if cached is not None:
            return cached

        settings = self._load_or_create(guild_id)
        with self._lock:
            self._cache[guild_id] = settings
        return settings

    def update(self, guild_id, changes: dict, updated_by) -> GuildSettings:
        """Apply a partial update, evict the cached entry and return fresh settings."""
        guild_id = str(guild_id)
        current_domain.process(
            UpdateGuildSettings(
                guild_id=guild_id,
                changes=json.dumps(changes),
                updated_by=str(updated_by),
            ),
            asynchronous=False,
        )
        self.invalidate(guild_id)
        logger.info("Guild settings updated", guild_id=guild_id, updated_by=str(updated_by), groups=sorted(changes))
        return self.get(guild_id)

    def invalidate(self, guild_id) -> None:
        with self._lock:
            self._cache.pop(str(guild_id), None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __contains__(self, guild_id) -> bool:
        with self._lock:
            return str(guild_id) in self._cache

    def _load_or_create(self, guild_id: str) -> GuildSettings:
        repo = current_domain.repository_for(GuildSettings)
        try:
            return repo.get(guild_id)
        except ObjectNotFoundError:
            settings = GuildSettings.create_default(guild_id)
            repo.add(settings)
            logger.info("Created default guild settings", guild_id=guild_id)
            return settings


_store: GuildSettingsStore | None = None


def get_settings_store() -> GuildSettingsStore:
    """Process-wide settings store (singleton)."""
    global _store
    if _store is None:
        _store = GuildSettingsStore()
    return _store


def reset_settings_store() -> None:
    global _store
    _store = None


def get_guild_settings(guild_id) -> GuildSettings:
    return get_settings_store().get(guild_id)
