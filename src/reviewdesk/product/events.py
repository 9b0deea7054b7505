"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from reviewdesk.domain import reviewdesk


@reviewdesk.event(part_of="Product")
class ProductCreated:
    """Staff added a product that reviews can be written about."""

    __version__ = 1

    product_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    created_by = Identifier(required=True)
    created_at = DateTime(required=True)


@reviewdesk.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    name = String(required=True)
    description = String()
    price = Float(required=True)
    updated_at = DateTime(required=True)


@reviewdesk.event(part_of="Product")
class ProductDeactivated:
    """The product was soft-deleted. Its reviews are kept."""

    __version__ = 1

    product_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@reviewdesk.event(part_of="Product")
class ProductRatingRecomputed:
    __version__ = 1

    product_id = Identifier(required=True)
    review_count = Integer(required=True)
    average_rating = Float(required=True)
    total_rating_sum = Integer(required=True)
    recomputed_at = DateTime(required=True)
