"""Staff management of the product catalog: create, edit, delete.

Names are unique among a guild's active products (exact match). Each change
appends an audit entry in the same unit of work.
"""

from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.audit.log import ActionType, TargetType
from reviewdesk.audit.recording import record_staff_action
from reviewdesk.domain import reviewdesk
from reviewdesk.exceptions import DuplicateProductName
from reviewdesk.permissions import require_staff
from reviewdesk.product.catalog import load_product
from reviewdesk.product.product import Product


@reviewdesk.command(part_of="Product")
class CreateProduct:
    guild_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = String(max_length=500)
    price = Float(required=True, min_value=0.0)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)


@reviewdesk.command(part_of="Product")
class EditProduct:
    guild_id = Identifier(required=True)
    product_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)
    name = String(max_length=100)
    description = String(max_length=500)
    price = Float(min_value=0.0)


@reviewdesk.command(part_of="Product")
class DeleteProduct:
    guild_id = Identifier(required=True)
    product_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)


def _name_taken(guild_id, name, exclude_id=None) -> bool:
    repo = current_domain.repository_for(Product)
    return repo.find_active_by_name(guild_id, name, exclude_id=exclude_id) is not None


@reviewdesk.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        require_staff(command.guild_id, command.staff_member_id)

        name = command.name.strip()
        if _name_taken(command.guild_id, name):
            raise DuplicateProductName(name=name)

        product = Product.create(
            guild_id=command.guild_id,
            name=name,
            description=command.description or "",
            price=command.price,
            created_by=command.staff_member_id,
        )
        current_domain.repository_for(Product).add(product)

        record_staff_action(
            guild_id=command.guild_id,
            staff_member_id=command.staff_member_id,
            staff_member_username=command.staff_member_username,
            action_type=ActionType.PRODUCT_CREATE.value,
            target_type=TargetType.PRODUCT.value,
            target_id=product.id,
            details={"name": name, "price": command.price},
        )
        return str(product.id)

    @handle(EditProduct)
    def edit_product(self, command):
        require_staff(command.guild_id, command.staff_member_id)
        product = load_product(command.guild_id, command.product_id)

        updates = {}
        if command.name is not None:
            updates["name"] = command.name.strip()
            if _name_taken(command.guild_id, updates["name"], exclude_id=product.id):
                raise DuplicateProductName(name=updates["name"])
        if command.description is not None:
            updates["description"] = command.description
        if command.price is not None:
            updates["price"] = command.price
        if not updates:
            raise ValidationError({"product": ["Nothing to update"]})

        changed = product.update_details(**updates)
        current_domain.repository_for(Product).add(product)

        record_staff_action(
            guild_id=command.guild_id,
            staff_member_id=command.staff_member_id,
            staff_member_username=command.staff_member_username,
            action_type=ActionType.PRODUCT_EDIT.value,
            target_type=TargetType.PRODUCT.value,
            target_id=product.id,
            details={field: {"old": old, "new": new} for field, (old, new) in changed.items()},
        )
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        require_staff(command.guild_id, command.staff_member_id)
        product = load_product(command.guild_id, command.product_id)

        product.deactivate()
        current_domain.repository_for(Product).add(product)

        record_staff_action(
            guild_id=command.guild_id,
            staff_member_id=command.staff_member_id,
            staff_member_username=command.staff_member_username,
            action_type=ActionType.PRODUCT_DELETE.value,
            target_type=TargetType.PRODUCT.value,
            target_id=product.id,
            details={"name": product.name},
        )
        return str(product.id)
