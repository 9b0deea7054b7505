"""RecomputeProductRating — re-derive a product's rating aggregates from scratch.

The aggregate is never adjusted incrementally. Every recompute reads all of
the product's approved, non-deleted reviews, so running it twice changes
nothing and running it after a partial failure heals the numbers.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.domain import reviewdesk
from reviewdesk.product.product import Product
from reviewdesk.review.review import Review

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RatingSummary:
    review_count: int = 0
    average_rating: float = 0.0
    total_rating_sum: int = 0


def round_rating(total: int, count: int) -> float:
    """Mean rounded half-up to one decimal. 0.0 when there is nothing to average."""
    if not count:
        return 0.0
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize_ratings(ratings) -> RatingSummary:
    ratings = [int(r) for r in ratings]
    total = sum(ratings)
    return RatingSummary(
        review_count=len(ratings),
        average_rating=round_rating(total, len(ratings)),
        total_rating_sum=total,
    )


@reviewdesk.command(part_of="Product")
class RecomputeProductRating:
    product_id = Identifier(required=True)


@reviewdesk.command_handler(part_of=Product)
class RecomputeProductRatingHandler:
    @handle(RecomputeProductRating)
    def recompute_product_rating(self, command):
        product_repo = current_domain.repository_for(Product)
        product = product_repo.get(command.product_id)

        reviews = current_domain.repository_for(Review).visible_for_product(command.product_id)
        summary = summarize_ratings(r.rating for r in reviews)

        product.apply_rating_summary(summary)
        product_repo.add(product)
        return summary


def recompute_product_rating(product_id) -> RatingSummary:
    summary = current_domain.process(RecomputeProductRating(product_id=str(product_id)), asynchronous=False)
    logger.debug(
        "Product rating recomputed",
        product_id=str(product_id),
        review_count=summary.review_count,
        average_rating=summary.average_rating,
    )
    return summary
