"""DeleteReview — staff soft-delete a review.

The review is kept with ``deleted_at`` stamped and drops out of every
aggregate. The product rating is recomputed afterwards.
"""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.audit.log import ActionType, TargetType
from reviewdesk.audit.recording import record_staff_action
from reviewdesk.domain import reviewdesk
from reviewdesk.permissions import require_staff
from reviewdesk.product.rating import recompute_product_rating
from reviewdesk.review.lookup import load_review
from reviewdesk.review.review import Review


@reviewdesk.command(part_of="Review")
class DeleteReview:
    guild_id = Identifier(required=True)
    review_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)


@reviewdesk.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        require_staff(command.guild_id, command.staff_member_id)
        review = load_review(command.guild_id, command.review_id, include_deleted=True)

        review.soft_delete(deleted_by=command.staff_member_id)
        current_domain.repository_for(Review).add(review)

        record_staff_action(
            guild_id=command.guild_id,
            staff_member_id=command.staff_member_id,
            staff_member_username=command.staff_member_username,
            action_type=ActionType.DELETE.value,
            target_type=TargetType.REVIEW.value,
            target_id=review.id,
            details={
                "review_user_id": str(review.user_id),
                "review_username": review.username,
                "product_id": str(review.product_id),
            },
        )
        return str(review.product_id)


def delete_review(guild_id, review_id, staff_member_id, staff_member_username=None) -> None:
    product_id = current_domain.process(
        DeleteReview(
            guild_id=str(guild_id),
            review_id=str(review_id),
            staff_member_id=str(staff_member_id),
            staff_member_username=staff_member_username,
        ),
        asynchronous=False,
    )
    recompute_product_rating(product_id)
