from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewdesk.exceptions import ReviewNotFound
from reviewdesk.review.review import Review


def load_review(guild_id, review_id, include_deleted: bool = False) -> Review:
    try:
        review = current_domain.repository_for(Review).get(str(review_id))
    except ObjectNotFoundError:
        raise ReviewNotFound(review_id=review_id)

    if str(review.guild_id) != str(guild_id) or (review.is_deleted and not include_deleted):
        raise ReviewNotFound(review_id=review_id)
    return review
