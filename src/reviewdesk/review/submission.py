"""SubmitReview — an approved member writes their review.

The member's most recent unused approval decides the product. Submitting
uses the approval up, so each approval yields at most one review.

``submit_review`` runs the follow-up steps as separate units of work:
recompute the product rating, post the review publicly, link the post, and
stamp the submission cooldown.
"""

import structlog
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.cooldown.tracker import can_submit, record_submission
from reviewdesk.domain import reviewdesk
from reviewdesk.exceptions import (
    ChannelNotConfigured,
    CooldownActive,
    MissingProduct,
    NoApprovedRequest,
)
from reviewdesk.product.catalog import load_product
from reviewdesk.product.rating import recompute_product_rating
from reviewdesk.request.request import ReviewRequest
from reviewdesk.review.content import check_review_content
from reviewdesk.review.publication import AttachReviewPost, publish_review
from reviewdesk.review.review import Review
from reviewdesk.settings.store import get_guild_settings

logger = structlog.get_logger(__name__)


@reviewdesk.command(part_of="Review")
class SubmitReview:
    guild_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String(max_length=100)
    text = Text(required=True)
    rating = Integer(required=True)
    anonymous = Boolean(default=False)


@reviewdesk.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        guild_id, user_id = str(command.guild_id), str(command.user_id)

        request_repo = current_domain.repository_for(ReviewRequest)
        request = request_repo.latest_unfulfilled_approval(guild_id, user_id)
        if request is None:
            raise NoApprovedRequest()
        if not request.product_id:
            raise MissingProduct(request_id=str(request.id))

        cooldown = can_submit(user_id, guild_id)
        if not cooldown.allowed:
            raise CooldownActive(cooldown.remaining, cooldown.human_readable, action="submit")

        settings = get_guild_settings(guild_id)
        check_review_content(settings, command.text, command.rating)

        if not settings.reviews_channel:
            raise ChannelNotConfigured("reviews_channel")

        product = load_product(guild_id, request.product_id, active_only=False)

        review = Review.submit(
            guild_id=guild_id,
            product_id=product.id,
            request_id=request.id,
            user_id=user_id,
            username=command.username,
            text=command.text.strip(),
            rating=command.rating,
            staff_approver_id=request.staff_member_id,
            anonymous=bool(command.anonymous) and settings.allow_anonymous,
        )
        current_domain.repository_for(Review).add(review)

        request.mark_fulfilled(review.id)
        request_repo.add(request)
        return str(review.id)


def submit_review(guild_id, user_id, text, rating, username=None, anonymous=False) -> Review:
    """Submit, then recompute, publish, link and stamp the cooldown. Returns the stored review."""
    review_id = current_domain.process(
        SubmitReview(
            guild_id=str(guild_id),
            user_id=str(user_id),
            username=username,
            text=text,
            rating=rating,
            anonymous=anonymous,
        ),
        asynchronous=False,
    )

    repo = current_domain.repository_for(Review)
    review = repo.get(review_id)
    recompute_product_rating(review.product_id)

    posted = publish_review(review)
    current_domain.process(
        AttachReviewPost(
            review_id=review_id,
            message_id=posted["message_id"],
            channel_id=posted["channel_id"],
        ),
        asynchronous=False,
    )
    record_submission(user_id, guild_id)

    logger.info(
        "Review submitted",
        guild_id=str(guild_id),
        user_id=str(user_id),
        review_id=review_id,
        product_id=str(review.product_id),
        rating=review.rating,
    )
    return repo.get(review_id)
