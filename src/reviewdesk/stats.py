"""Guild-level statistics: overview, per-product and per-member views."""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from reviewdesk.product.catalog import list_products
from reviewdesk.product.product import Product
from reviewdesk.product.rating import recompute_product_rating, round_rating
from reviewdesk.request.request import RequestStatus, ReviewRequest
from reviewdesk.review.queries import user_reviews, user_summary
from reviewdesk.review.review import Review, ReviewStatus


@dataclass
class GuildOverview:
    guild_id: str
    total_reviews: int = 0
    approved_reviews: int = 0
    pending_reviews: int = 0
    denied_reviews: int = 0
    average_rating: float = 0.0
    active_products: int = 0
    total_requests: int = 0
    pending_requests: int = 0
    approved_requests: int = 0
    denied_requests: int = 0
    approval_rate: float = 0.0  # percent of decided requests that were approved


@dataclass
class ProductOverview:
    guild_id: str
    products: list[Product] = field(default_factory=list)
    total_products: int = 0
    total_reviews: int = 0
    average_rating: float = 0.0  # mean of per-product averages, reviewed products only


@dataclass
class UserOverview:
    guild_id: str
    user_id: str
    total_reviews: int = 0
    average_rating: float = 0.0
    recent_reviews: list[Review] = field(default_factory=list)
    reviews_by_product: dict[str, int] = field(default_factory=dict)


def guild_overview(guild_id) -> GuildOverview:
    reviews = [r for r in current_domain.repository_for(Review).for_guild(guild_id) if not r.is_deleted]
    by_status = {status: [r for r in reviews if r.status == status.value] for status in ReviewStatus}
    approved = by_status[ReviewStatus.APPROVED]

    requests = current_domain.repository_for(ReviewRequest).for_guild(guild_id)
    request_counts = {status: sum(1 for r in requests if r.status == status.value) for status in RequestStatus}
    decided = request_counts[RequestStatus.APPROVED] + request_counts[RequestStatus.DENIED]

    return GuildOverview(
        guild_id=str(guild_id),
        total_reviews=len(reviews),
        approved_reviews=len(approved),
        pending_reviews=len(by_status[ReviewStatus.PENDING]),
        denied_reviews=len(by_status[ReviewStatus.DENIED]),
        average_rating=round_rating(sum(r.rating for r in approved), len(approved)),
        active_products=len(list_products(guild_id)),
        total_requests=len(requests),
        pending_requests=request_counts[RequestStatus.PENDING],
        approved_requests=request_counts[RequestStatus.APPROVED],
        denied_requests=request_counts[RequestStatus.DENIED],
        approval_rate=round(request_counts[RequestStatus.APPROVED] * 100 / decided, 1) if decided else 0.0,
    )


def product_overview(guild_id) -> ProductOverview:
    """Recompute every active product's aggregates, then summarize them."""
    for product in list_products(guild_id):
        recompute_product_rating(product.id)

    products = list_products(guild_id)
    reviewed = [p for p in products if p.review_count]
    mean_of_averages = sum(p.average_rating for p in reviewed) / len(reviewed) if reviewed else 0.0

    return ProductOverview(
        guild_id=str(guild_id),
        products=products,
        total_products=len(products),
        total_reviews=sum(p.review_count for p in products),
        average_rating=round(mean_of_averages, 1),
    )


def user_overview(guild_id, user_id) -> UserOverview:
    summary = user_summary(guild_id, user_id)
    return UserOverview(
        guild_id=str(guild_id),
        user_id=str(user_id),
        total_reviews=summary.total_reviews,
        average_rating=summary.average_rating,
        recent_reviews=user_reviews(guild_id, user_id),
        reviews_by_product=summary.reviews_by_product,
    )
