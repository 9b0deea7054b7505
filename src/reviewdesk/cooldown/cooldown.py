"""UserCooldown aggregate — when a member last requested and last submitted.

One record per (guild, user), keyed ``"{guild_id}:{user_id}"`` so the pair
can never be duplicated. Created on first stamp.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier

from reviewdesk.domain import reviewdesk


def cooldown_key(guild_id, user_id) -> str:
    return f"{guild_id}:{user_id}"


@reviewdesk.aggregate
class UserCooldown:
    key = Identifier(identifier=True)
    guild_id = Identifier(required=True)
    user_id = Identifier(required=True)

    last_review_request = DateTime()
    last_review_submission = DateTime()

    @classmethod
    def start(cls, guild_id, user_id):
        return cls(
            key=cooldown_key(guild_id, user_id),
            guild_id=str(guild_id),
            user_id=str(user_id),
        )

    def stamp_request(self, at=None):
        self.last_review_request = at or datetime.now(UTC)

    def stamp_submission(self, at=None):
        self.last_review_submission = at or datetime.now(UTC)
