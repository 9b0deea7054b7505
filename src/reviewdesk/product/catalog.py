"""Read side of the product registry."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewdesk.exceptions import ProductNotFound
from reviewdesk.product.product import Product
from reviewdesk.product.rating import recompute_product_rating


def load_product(guild_id, product_id, active_only: bool = True) -> Product:
    """Fetch a guild's product, raising ProductNotFound for other guilds and, by default, inactive ones."""
    try:
        product = current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise ProductNotFound(product_id=product_id)

    if str(product.guild_id) != str(guild_id) or (active_only and not product.active):
        raise ProductNotFound(product_id=product_id)
    return product


def list_products(guild_id, include_inactive: bool = False) -> list[Product]:
    return current_domain.repository_for(Product).for_guild(guild_id, include_inactive=include_inactive)


def view_product(guild_id, product_id) -> Product:
    """A product with freshly recomputed rating aggregates."""
    load_product(guild_id, product_id, active_only=False)
    recompute_product_rating(product_id)
    return load_product(guild_id, product_id, active_only=False)
