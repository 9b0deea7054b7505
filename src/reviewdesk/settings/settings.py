"""GuildSettings aggregate — per-guild configuration of the review workflow.

Settings are created lazily with defaults the first time a guild is seen and
are only ever changed through a partial update: each nested group is merged
key by key, so an update touching ``features.allow_anonymous`` leaves every
other flag alone. Settings are never deleted.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, ValueObject

from reviewdesk.domain import reviewdesk
from reviewdesk.settings.events import GuildSettingsCreated, GuildSettingsUpdated

DEFAULT_REQUEST_COOLDOWN_MS = 24 * 60 * 60 * 1000
DEFAULT_SUBMISSION_COOLDOWN_MS = 60 * 60 * 1000


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@reviewdesk.value_object(part_of="GuildSettings")
class ChannelRoutes:
    """Where the bot posts: staff panels, public reviews and the staff log."""

    staff_review_channel = Identifier()
    reviews_channel = Identifier()
    logs_channel = Identifier()


@reviewdesk.value_object(part_of="GuildSettings")
class StaffRoles:
    staff_role = Identifier()


@reviewdesk.value_object(part_of="GuildSettings")
class FeatureFlags:
    allow_anonymous = Boolean(default=False)
    enable_cooldowns = Boolean(default=True)
    # Stored and reported, but no workflow reads them yet.
    auto_approval = Boolean(default=False)
    allow_review_edits = Boolean(default=False)


@reviewdesk.value_object(part_of="GuildSettings")
class CooldownDurations:
    """Cooldowns in milliseconds."""

    review_request = Integer(default=DEFAULT_REQUEST_COOLDOWN_MS, min_value=0)
    review_submission = Integer(default=DEFAULT_SUBMISSION_COOLDOWN_MS, min_value=0)


@reviewdesk.value_object(part_of="GuildSettings")
class ReviewConstraints:
    min_text_length = Integer(default=10, min_value=0)
    max_text_length = Integer(default=2000, min_value=1)
    min_rating = Integer(default=1, min_value=1, max_value=5)
    max_rating = Integer(default=5, min_value=1, max_value=5)
    max_reviews_per_user = Integer(min_value=1)  # None means unlimited

    @invariant.post
    def text_bounds_must_be_ordered(self):
        if self.min_text_length is not None and self.max_text_length is not None:
            if self.min_text_length > self.max_text_length:
                raise ValidationError(
                    {"min_text_length": ["Minimum text length cannot exceed maximum text length"]}
                )

    @invariant.post
    def rating_bounds_must_be_ordered(self):
        if self.min_rating is not None and self.max_rating is not None:
            if self.min_rating > self.max_rating:
                raise ValidationError({"min_rating": ["Minimum rating cannot exceed maximum rating"]})


_GROUPS = {
    "channels": ChannelRoutes,
    "roles": StaffRoles,
    "features": FeatureFlags,
    "cooldowns": CooldownDurations,
    "review": ReviewConstraints,
}
_TOP_LEVEL = ("default_language",)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@reviewdesk.aggregate
class GuildSettings:
    """Configuration for one guild. The guild id is the identity."""

    guild_id = Identifier(identifier=True)

    channels = ValueObject(ChannelRoutes)
    roles = ValueObject(StaffRoles)
    features = ValueObject(FeatureFlags)
    cooldowns = ValueObject(CooldownDurations)
    review = ValueObject(ReviewConstraints)

    default_language = String(max_length=10, default="en")
    last_updated_by = Identifier()

    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create_default(cls, guild_id):
        now = datetime.now(UTC)
        settings = cls(
            guild_id=str(guild_id),
            channels=ChannelRoutes(),
            roles=StaffRoles(),
            features=FeatureFlags(),
            cooldowns=CooldownDurations(),
            review=ReviewConstraints(),
            default_language="en",
            created_at=now,
            updated_at=now,
        )
        settings.raise_(GuildSettingsCreated(guild_id=str(guild_id), created_at=now))
        return settings

    # -------------------------------------------------------------------
    # Group accessors
    # -------------------------------------------------------------------
    # A group that was never set may come back from storage as None, so every
    # read goes through these. A value object whose fields are all falsy is
    # itself falsy, hence the explicit None check.
    def group(self, name: str):
        value = getattr(self, name)
        return value if value is not None else _GROUPS[name]()

    @property
    def staff_role(self):
        return self.group("roles").staff_role

    @property
    def staff_review_channel(self):
        return self.group("channels").staff_review_channel

    @property
    def reviews_channel(self):
        return self.group("channels").reviews_channel

    @property
    def logs_channel(self):
        return self.group("channels").logs_channel

    @property
    def cooldowns_enabled(self) -> bool:
        return bool(self.group("features").enable_cooldowns)

    @property
    def allow_anonymous(self) -> bool:
        return bool(self.group("features").allow_anonymous)

    # -------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------
    def apply_changes(self, changes: dict, updated_by):
        """Merge a partial update into the settings.

        ``changes`` maps group names to dicts of keys to overwrite, plus the
        top-level ``default_language``. Keys not named keep their value.
        """
        errors = {}
        for key, values in changes.items():
            if key in _TOP_LEVEL:
                continue
            if key not in _GROUPS:
                errors[key] = ["Unknown settings group"]
            elif not isinstance(values, dict):
                errors[key] = ["Settings group changes must be an object"]
            else:
                known = set(self.group(key).to_dict())
                unknown = sorted(set(values) - known)
                if unknown:
                    errors[key] = [f"Unknown setting: {name}" for name in unknown]
        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC)
        with atomic_change(self):
            for key, values in changes.items():
                if key in _TOP_LEVEL:
                    setattr(self, key, values)
                    continue
                merged = {**self.group(key).to_dict(), **values}
                setattr(self, key, _GROUPS[key](**merged))

            self.last_updated_by = str(updated_by)
            self.updated_at = now

        self.raise_(
            GuildSettingsUpdated(
                guild_id=str(self.guild_id),
                changes=json.dumps(changes),
                updated_by=str(updated_by),
                updated_at=now,
            )
        )

    def to_view(self) -> dict:
        """Plain nested dict of every setting, for API responses."""
        return {
            "guild_id": str(self.guild_id),
            **{name: self.group(name).to_dict() for name in _GROUPS},
            "default_language": self.default_language,
            "last_updated_by": self.last_updated_by,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
