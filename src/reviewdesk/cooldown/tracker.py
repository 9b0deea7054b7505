"""Cooldown checks for requesting and submitting reviews.

Remaining time is ``configured duration - (now - last stamp)``, clamped at
zero. Everything is allowed, and stamping is a no-op, while the guild has
cooldowns disabled. Stamps are never rolled back once recorded.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewdesk.cooldown.cooldown import UserCooldown, cooldown_key
from reviewdesk.settings.store import get_guild_settings
from reviewdesk.utils.durations import as_utc, format_hours_minutes, format_minutes

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CooldownCheck:
    allowed: bool
    remaining: timedelta = timedelta(0)
    human_readable: str = ""


ALLOWED = CooldownCheck(allowed=True)


def _load(guild_id, user_id) -> UserCooldown | None:
    try:
        return current_domain.repository_for(UserCooldown).get(cooldown_key(guild_id, user_id))
    except ObjectNotFoundError:
        return None


def remaining_cooldown(last: datetime | None, duration_ms: int, now: datetime | None = None) -> timedelta:
    if last is None:
        return timedelta(0)
    now = now or datetime.now(UTC)
    elapsed = now - as_utc(last)
    return max(timedelta(milliseconds=duration_ms or 0) - elapsed, timedelta(0))


def can_request(user_id, guild_id, now: datetime | None = None) -> CooldownCheck:
    settings = get_guild_settings(guild_id)
    if not settings.cooldowns_enabled:
        return ALLOWED

    record = _load(guild_id, user_id)
    remaining = remaining_cooldown(
        record.last_review_request if record else None,
        settings.group("cooldowns").review_request,
        now,
    )
    if remaining <= timedelta(0):
        return ALLOWED
    return CooldownCheck(allowed=False, remaining=remaining, human_readable=format_hours_minutes(remaining))


def can_submit(user_id, guild_id, now: datetime | None = None) -> CooldownCheck:
    settings = get_guild_settings(guild_id)
    if not settings.cooldowns_enabled:
        return ALLOWED

    record = _load(guild_id, user_id)
    remaining = remaining_cooldown(
        record.last_review_submission if record else None,
        settings.group("cooldowns").review_submission,
        now,
    )
    if remaining <= timedelta(0):
        return ALLOWED
    return CooldownCheck(allowed=False, remaining=remaining, human_readable=format_minutes(remaining))


def _stamp(user_id, guild_id, attribute: str, at: datetime | None):
    if not get_guild_settings(guild_id).cooldowns_enabled:
        return

    repo = current_domain.repository_for(UserCooldown)
    record = _load(guild_id, user_id) or UserCooldown.start(guild_id, user_id)
    getattr(record, attribute)(at)
    repo.add(record)
    logger.debug("Cooldown stamped", guild_id=str(guild_id), user_id=str(user_id), kind=attribute)


def record_request(user_id, guild_id, at: datetime | None = None) -> None:
    _stamp(user_id, guild_id, "stamp_request", at)


def record_submission(user_id, guild_id, at: datetime | None = None) -> None:
    _stamp(user_id, guild_id, "stamp_submission", at)
