"""EditReview — staff correct a review's text and rating.

The product rating is recomputed afterwards, in its own unit of work.
"""

from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.audit.log import ActionType, TargetType
from reviewdesk.audit.recording import record_staff_action
from reviewdesk.domain import reviewdesk
from reviewdesk.permissions import require_staff
from reviewdesk.product.rating import recompute_product_rating
from reviewdesk.review.content import check_review_content
from reviewdesk.review.lookup import load_review
from reviewdesk.review.review import Review
from reviewdesk.settings.store import get_guild_settings


@reviewdesk.command(part_of="Review")
class EditReview:
    guild_id = Identifier(required=True)
    review_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)
    text = Text(required=True)
    rating = Integer(required=True)


@reviewdesk.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        require_staff(command.guild_id, command.staff_member_id)
        review = load_review(command.guild_id, command.review_id)
        check_review_content(get_guild_settings(command.guild_id), command.text, command.rating)

        old_rating = review.edit(
            text=command.text.strip(),
            rating=command.rating,
            edited_by=command.staff_member_id,
        )
        current_domain.repository_for(Review).add(review)

        record_staff_action(
            guild_id=command.guild_id,
            staff_member_id=command.staff_member_id,
            staff_member_username=command.staff_member_username,
            action_type=ActionType.EDIT.value,
            target_type=TargetType.REVIEW.value,
            target_id=review.id,
            details={
                "old_rating": old_rating,
                "new_rating": command.rating,
                "review_user_id": str(review.user_id),
            },
        )
        return str(review.product_id)


def edit_review(guild_id, review_id, staff_member_id, text, rating, staff_member_username=None) -> Review:
    product_id = current_domain.process(
        EditReview(
            guild_id=str(guild_id),
            review_id=str(review_id),
            staff_member_id=str(staff_member_id),
            staff_member_username=staff_member_username,
            text=text,
            rating=rating,
        ),
        asynchronous=False,
    )
    recompute_product_rating(product_id)
    return current_domain.repository_for(Review).get(str(review_id))
