"""The public post of a review: creating it, linking it, keeping it in sync.

Posting a new review is required (the submission fails without it). Updating
or removing the post after staff edits or deletes the review is best-effort.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.domain import reviewdesk
from reviewdesk.exceptions import ChannelNotConfigured
from reviewdesk.gateway import attempt, ensure_sent, get_platform
from reviewdesk.messages import ReviewPostTemplate
from reviewdesk.product.product import Product
from reviewdesk.review.events import ReviewDeleted, ReviewEdited
from reviewdesk.review.review import Review
from reviewdesk.settings.store import get_guild_settings

logger = structlog.get_logger(__name__)


def _render(review: Review, product_name: str) -> dict:
    return ReviewPostTemplate.render(
        {
            "product_name": product_name,
            "text": review.text,
            "rating": review.rating,
            "username": review.username or str(review.user_id),
            "anonymous": review.anonymous,
            "submitted_at": review.submitted_at.isoformat() if review.submitted_at else None,
            "edited": review.last_edited_at is not None,
        }
    )


def _product_name(product_id) -> str:
    try:
        return current_domain.repository_for(Product).get(str(product_id)).name
    except ObjectNotFoundError:
        return "Unknown product"


def publish_review(review: Review) -> dict:
    """Post the review to the guild's reviews channel. Raises PlatformError on failure."""
    channel_id = get_guild_settings(review.guild_id).reviews_channel
    if not channel_id:
        raise ChannelNotConfigured("reviews_channel")

    return ensure_sent(
        get_platform().post_message(str(channel_id), _render(review, _product_name(review.product_id))),
        "post the review",
    )


@reviewdesk.command(part_of="Review")
class AttachReviewPost:
    review_id = Identifier(required=True)
    message_id = Identifier(required=True)
    channel_id = Identifier(required=True)


@reviewdesk.command_handler(part_of=Review)
class AttachReviewPostHandler:
    @handle(AttachReviewPost)
    def attach_review_post(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.attach_post(command.message_id, command.channel_id)
        repo.add(review)


@reviewdesk.event_handler(part_of=Review)
class ReviewPostSync:
    @handle(ReviewEdited)
    def on_review_edited(self, event: ReviewEdited) -> None:
        if not (event.message_id and event.channel_id):
            return
        try:
            review = current_domain.repository_for(Review).get(str(event.review_id))
        except ObjectNotFoundError:
            logger.warning("Edited review vanished before its post was updated", review_id=str(event.review_id))
            return

        attempt(
            "update review post",
            get_platform().edit_message,
            str(event.channel_id),
            str(event.message_id),
            _render(review, _product_name(review.product_id)),
        )

    @handle(ReviewDeleted)
    def on_review_deleted(self, event: ReviewDeleted) -> None:
        if not (event.message_id and event.channel_id):
            return
        attempt("delete review post", get_platform().delete_message, str(event.channel_id), str(event.message_id))
