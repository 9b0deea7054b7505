from reviewdesk.domain import reviewdesk
from reviewdesk.product.product import Product

QUERY_LIMIT = 100_000


@reviewdesk.repository(part_of=Product)
class ProductRepository:
    def for_guild(self, guild_id, include_inactive: bool = False) -> list[Product]:
        """Products of a guild ordered by name. Active only unless asked otherwise."""
        filters = {"guild_id": str(guild_id)}
        if not include_inactive:
            filters["active"] = True
        items = self._dao.query.filter(**filters).limit(QUERY_LIMIT).all().items
        return sorted(items, key=lambda p: p.name)

    def find_active_by_name(self, guild_id, name: str, exclude_id=None) -> Product | None:
        for product in self.for_guild(guild_id):
            if product.name == name and str(product.id) != str(exclude_id):
                return product
        return None
