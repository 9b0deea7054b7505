"""Product aggregate — something a guild's members can review.

Products are soft-deleted: deactivation hides them from the catalog and
from approval, but their reviews stay. ``review_count``, ``average_rating``
and ``total_rating_sum`` are derived data, only ever written by a full
recompute over the product's approved, non-deleted reviews.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from reviewdesk.domain import reviewdesk
from reviewdesk.product.events import (
    ProductCreated,
    ProductDeactivated,
    ProductRatingRecomputed,
    ProductUpdated,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@reviewdesk.aggregate
class Product:
    guild_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = String(max_length=500, default="")
    price = Float(required=True, min_value=0.0)

    # Rating aggregates
    review_count = Integer(default=0, min_value=0)
    average_rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    total_rating_sum = Integer(default=0, min_value=0)

    created_by = Identifier(required=True)
    active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be empty"]})

    @classmethod
    def create(cls, guild_id, name, price, created_by, description=""):
        now = datetime.now(UTC)
        product = cls(
            guild_id=str(guild_id),
            name=name,
            description=description or "",
            price=price,
            created_by=str(created_by),
            active=True,
            review_count=0,
            average_rating=0.0,
            total_rating_sum=0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                guild_id=str(guild_id),
                name=name,
                price=price,
                created_by=str(created_by),
                created_at=now,
            )
        )
        return product

    def update_details(self, name=_UNSET, description=_UNSET, price=_UNSET):
        """Change any of name, description and price. Returns the fields that changed."""
        changed = {}
        now = datetime.now(UTC)
        with atomic_change(self):
            if name is not _UNSET and name != self.name:
                changed["name"] = (self.name, name)
                self.name = name
            if description is not _UNSET and (description or "") != self.description:
                changed["description"] = (self.description, description or "")
                self.description = description or ""
            if price is not _UNSET and price != self.price:
                changed["price"] = (self.price, price)
                self.price = price
            self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                guild_id=str(self.guild_id),
                name=self.name,
                description=self.description,
                price=self.price,
                updated_at=now,
            )
        )
        return changed

    def deactivate(self):
        now = datetime.now(UTC)
        self.active = False
        self.updated_at = now
        self.raise_(
            ProductDeactivated(
                product_id=str(self.id),
                guild_id=str(self.guild_id),
                deactivated_at=now,
            )
        )

    def apply_rating_summary(self, summary):
        now = datetime.now(UTC)
        with atomic_change(self):
            self.review_count = summary.review_count
            self.average_rating = summary.average_rating
            self.total_rating_sum = summary.total_rating_sum
            self.updated_at = now

        self.raise_(
            ProductRatingRecomputed(
                product_id=str(self.id),
                review_count=summary.review_count,
                average_rating=summary.average_rating,
                total_rating_sum=summary.total_rating_sum,
                recomputed_at=now,
            )
        )
