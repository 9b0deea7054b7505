"""Review aggregate — a member's rating and text for one product.

Reviews are created already approved (the staff decision happened on the
request). Deletion is soft: ``deleted_at`` is stamped and the status moves to
DELETED, after which the review drops out of every listing and aggregate.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from reviewdesk.domain import reviewdesk
from reviewdesk.exceptions import AlreadyDeleted
from reviewdesk.review.events import (
    ReviewDeleted,
    ReviewEdited,
    ReviewPostAttached,
    ReviewSubmitted,
)


class ReviewStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    DELETED = "deleted"


@reviewdesk.aggregate
class Review:
    guild_id = Identifier(required=True)
    product_id = Identifier(required=True)
    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String(max_length=100)  # snapshot at submission

    text = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    anonymous = Boolean(default=False)

    status = String(choices=ReviewStatus, default=ReviewStatus.APPROVED.value)
    staff_approver_id = Identifier()
    submitted_at = DateTime()

    # Public post
    message_id = Identifier()
    channel_id = Identifier()

    last_edited_by = Identifier()
    last_edited_at = DateTime()
    deleted_at = DateTime()

    @invariant.post
    def text_must_not_be_blank(self):
        if self.text is not None and not self.text.strip():
            raise ValidationError({"text": ["Review text cannot be empty"]})

    @classmethod
    def submit(
        cls,
        guild_id,
        product_id,
        request_id,
        user_id,
        text,
        rating,
        username=None,
        staff_approver_id=None,
        anonymous=False,
    ):
        now = datetime.now(UTC)
        review = cls(
            guild_id=str(guild_id),
            product_id=str(product_id),
            request_id=str(request_id),
            user_id=str(user_id),
            username=username,
            text=text,
            rating=rating,
            anonymous=anonymous,
            status=ReviewStatus.APPROVED.value,
            staff_approver_id=str(staff_approver_id) if staff_approver_id else None,
            submitted_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                guild_id=str(guild_id),
                product_id=str(product_id),
                request_id=str(request_id),
                user_id=str(user_id),
                rating=rating,
                anonymous=anonymous,
                submitted_at=now,
            )
        )
        return review

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None or self.status == ReviewStatus.DELETED.value

    @property
    def is_visible(self) -> bool:
        """Counts toward aggregates and listings."""
        return self.status == ReviewStatus.APPROVED.value and self.deleted_at is None

    def attach_post(self, message_id, channel_id):
        self.message_id = str(message_id)
        self.channel_id = str(channel_id)
        self.raise_(
            ReviewPostAttached(
                review_id=str(self.id),
                message_id=str(message_id),
                channel_id=str(channel_id),
            )
        )

    def edit(self, text, rating, edited_by) -> int:
        """Replace text and rating. Returns the previous rating."""
        if self.is_deleted:
            raise ValidationError({"status": ["Deleted reviews cannot be edited"]})

        old_rating = self.rating
        now = datetime.now(UTC)
        with atomic_change(self):
            self.text = text
            self.rating = rating
            self.last_edited_by = str(edited_by)
            self.last_edited_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                guild_id=str(self.guild_id),
                product_id=str(self.product_id),
                old_rating=old_rating,
                new_rating=rating,
                text=text,
                edited_by=str(edited_by),
                message_id=self.message_id,
                channel_id=self.channel_id,
                edited_at=now,
            )
        )
        return old_rating

    def soft_delete(self, deleted_by):
        if self.is_deleted:
            raise AlreadyDeleted(review_id=str(self.id))

        now = datetime.now(UTC)
        with atomic_change(self):
            self.deleted_at = now
            self.status = ReviewStatus.DELETED.value
            self.last_edited_by = str(deleted_by)
            self.last_edited_at = now

        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                guild_id=str(self.guild_id),
                product_id=str(self.product_id),
                deleted_by=str(deleted_by),
                message_id=self.message_id,
                channel_id=self.channel_id,
                deleted_at=now,
            )
        )
