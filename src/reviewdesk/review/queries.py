"""Read side for reviews: a member's history and rating summary."""

from collections import Counter
from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from reviewdesk.product.catalog import load_product
from reviewdesk.product.rating import round_rating
from reviewdesk.review.review import Review

RECENT_REVIEWS_LIMIT = 10


@dataclass
class UserReviewSummary:
    user_id: str
    total_reviews: int = 0
    average_rating: float = 0.0
    reviews_by_product: dict[str, int] = field(default_factory=dict)


def user_reviews(guild_id, user_id, limit: int = RECENT_REVIEWS_LIMIT) -> list[Review]:
    """A member's approved, non-deleted reviews, newest first."""
    return current_domain.repository_for(Review).visible_for_user(guild_id, user_id)[:limit]


def user_summary(guild_id, user_id) -> UserReviewSummary:
    reviews = current_domain.repository_for(Review).visible_for_user(guild_id, user_id)
    return UserReviewSummary(
        user_id=str(user_id),
        total_reviews=len(reviews),
        average_rating=round_rating(sum(r.rating for r in reviews), len(reviews)),
        reviews_by_product=dict(Counter(str(r.product_id) for r in reviews)),
    )


def product_reviews(guild_id, product_id, limit: int | None = None) -> list[Review]:
    load_product(guild_id, product_id, active_only=False)
    reviews = current_domain.repository_for(Review).visible_for_product(product_id)
    reviews.sort(key=lambda r: r.submitted_at, reverse=True)
    return reviews[:limit] if limit else reviews
