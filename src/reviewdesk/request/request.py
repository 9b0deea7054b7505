"""ReviewRequest aggregate — a member's request for permission to review.

State Machine (3 states):
    PENDING → APPROVED | DENIED
    APPROVED → (terminal)
    DENIED → (terminal)

An approval can be used for exactly one review; ``review_id`` records the
review it produced.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from reviewdesk.domain import reviewdesk
from reviewdesk.exceptions import AlreadyProcessed
from reviewdesk.request.events import (
    ReviewRequestApproved,
    ReviewRequestDenied,
    ReviewRequested,
    ReviewRequestFulfilled,
)
from reviewdesk.utils.durations import as_utc, milliseconds


class RequestStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


_VALID_TRANSITIONS = {
    RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.DENIED},
    RequestStatus.APPROVED: set(),
    RequestStatus.DENIED: set(),
}


@reviewdesk.aggregate
class ReviewRequest:
    guild_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String(max_length=100)

    # Staff panel
    request_message_id = Identifier(required=True, unique=True)
    request_channel_id = Identifier(required=True)

    status = String(choices=RequestStatus, default=RequestStatus.PENDING.value)

    # Decision
    staff_member_id = Identifier()
    staff_note = String(max_length=500)
    product_id = Identifier()
    denial_reason = String(max_length=1000)

    # Set once the approval has produced a review
    review_id = Identifier()

    created_at = DateTime()
    processed_at = DateTime()

    @invariant.post
    def approved_requests_name_a_product(self):
        if self.status == RequestStatus.APPROVED.value and not self.product_id:
            raise ValidationError({"product_id": ["An approved request must reference a product"]})

    @invariant.post
    def denied_requests_carry_a_reason(self):
        if self.status == RequestStatus.DENIED.value and not (self.denial_reason or "").strip():
            raise ValidationError({"denial_reason": ["A denial reason is required"]})

    @classmethod
    def open(cls, guild_id, user_id, request_message_id, request_channel_id, username=None, id=None):
        now = datetime.now(UTC)
        attributes = {
            "guild_id": str(guild_id),
            "user_id": str(user_id),
            "username": username,
            "request_message_id": str(request_message_id),
            "request_channel_id": str(request_channel_id),
            "status": RequestStatus.PENDING.value,
            "created_at": now,
        }
        if id is not None:
            attributes["id"] = str(id)
        request = cls(**attributes)

        request.raise_(
            ReviewRequested(
                request_id=str(request.id),
                guild_id=str(guild_id),
                user_id=str(user_id),
                username=username,
                request_message_id=str(request_message_id),
                request_channel_id=str(request_channel_id),
                requested_at=now,
            )
        )
        return request

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING.value

    def _assert_can_transition(self, target_status):
        current = RequestStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise AlreadyProcessed(request_id=str(self.id), status=current.value)

    def processing_time_ms(self, at: datetime) -> int:
        if self.created_at is None:
            return 0
        return max(milliseconds(at - as_utc(self.created_at)), 0)

    def approve(self, staff_member_id, product_id, staff_note=None, product_name=None, staff_member_username=None):
        """Approve for the given product. Returns the processing time in milliseconds."""
        self._assert_can_transition(RequestStatus.APPROVED)

        now = datetime.now(UTC)
        elapsed = self.processing_time_ms(now)

        with atomic_change(self):
            self.status = RequestStatus.APPROVED.value
            self.staff_member_id = str(staff_member_id)
            self.product_id = str(product_id)
            self.staff_note = staff_note
            self.processed_at = now

        self.raise_(
            ReviewRequestApproved(
                request_id=str(self.id),
                guild_id=str(self.guild_id),
                user_id=str(self.user_id),
                username=self.username,
                product_id=str(product_id),
                product_name=product_name,
                staff_member_id=str(staff_member_id),
                staff_member_username=staff_member_username,
                staff_note=staff_note,
                request_message_id=self.request_message_id,
                request_channel_id=self.request_channel_id,
                processing_time_ms=elapsed,
                approved_at=now,
            )
        )
        return elapsed

    def deny(self, staff_member_id, reason, staff_member_username=None):
        """Deny with a reason. Returns the processing time in milliseconds."""
        self._assert_can_transition(RequestStatus.DENIED)
        if not (reason or "").strip():
            raise ValidationError({"reason": ["A denial reason is required"]})

        now = datetime.now(UTC)
        elapsed = self.processing_time_ms(now)

        with atomic_change(self):
            self.status = RequestStatus.DENIED.value
            self.staff_member_id = str(staff_member_id)
            self.denial_reason = reason.strip()
            self.processed_at = now

        self.raise_(
            ReviewRequestDenied(
                request_id=str(self.id),
                guild_id=str(self.guild_id),
                user_id=str(self.user_id),
                username=self.username,
                staff_member_id=str(staff_member_id),
                staff_member_username=staff_member_username,
                reason=self.denial_reason,
                request_message_id=self.request_message_id,
                request_channel_id=self.request_channel_id,
                processing_time_ms=elapsed,
                denied_at=now,
            )
        )
        return elapsed

    # -------------------------------------------------------------------
    # Fulfillment
    # -------------------------------------------------------------------
    @property
    def is_fulfilled(self) -> bool:
        return self.review_id is not None

    def mark_fulfilled(self, review_id):
        if self.status != RequestStatus.APPROVED.value:
            raise ValidationError({"status": ["Only approved requests can be fulfilled"]})
        if self.is_fulfilled:
            raise ValidationError({"review_id": ["This approval has already been used"]})

        self.review_id = str(review_id)
        self.raise_(
            ReviewRequestFulfilled(
                request_id=str(self.id),
                review_id=str(review_id),
                fulfilled_at=datetime.now(UTC),
            )
        )
