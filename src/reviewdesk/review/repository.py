from reviewdesk.domain import reviewdesk
from reviewdesk.review.review import Review

QUERY_LIMIT = 100_000


@reviewdesk.repository(part_of=Review)
class ReviewRepository:
    def _matching(self, **filters) -> list[Review]:
        return self._dao.query.filter(**filters).limit(QUERY_LIMIT).all().items

    def for_guild(self, guild_id) -> list[Review]:
        """Every review of the guild, deleted ones included."""
        return self._matching(guild_id=str(guild_id))

    def visible_for_product(self, product_id) -> list[Review]:
        return [r for r in self._matching(product_id=str(product_id)) if r.is_visible]

    def visible_for_user(self, guild_id, user_id) -> list[Review]:
        """Approved, non-deleted reviews by a member, newest first."""
        reviews = [r for r in self._matching(guild_id=str(guild_id), user_id=str(user_id)) if r.is_visible]
        return sorted(reviews, key=lambda r: r.submitted_at, reverse=True)
