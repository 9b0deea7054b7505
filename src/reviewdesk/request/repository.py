from reviewdesk.domain import reviewdesk
from reviewdesk.request.request import RequestStatus, ReviewRequest

QUERY_LIMIT = 100_000


@reviewdesk.repository(part_of=ReviewRequest)
class ReviewRequestRepository:
    def _matching(self, **filters) -> list[ReviewRequest]:
        return self._dao.query.filter(**filters).limit(QUERY_LIMIT).all().items

    def for_guild(self, guild_id) -> list[ReviewRequest]:
        return self._matching(guild_id=str(guild_id))

    def pending_for_user(self, guild_id, user_id) -> ReviewRequest | None:
        pending = self._matching(
            guild_id=str(guild_id),
            user_id=str(user_id),
            status=RequestStatus.PENDING.value,
        )
        return pending[0] if pending else None

    def find_by_message(self, guild_id, request_message_id) -> ReviewRequest | None:
        found = self._matching(guild_id=str(guild_id), request_message_id=str(request_message_id))
        return found[0] if found else None

    def latest_unfulfilled_approval(self, guild_id, user_id) -> ReviewRequest | None:
        """The member's most recently processed approval that has not produced a review yet."""
        approved = [
            r
            for r in self._matching(
                guild_id=str(guild_id),
                user_id=str(user_id),
                status=RequestStatus.APPROVED.value,
            )
            if not r.is_fulfilled
        ]
        if not approved:
            return None
        return max(approved, key=lambda r: r.processed_at)
