"""Two-step staff approval of a review request.

1. ``begin_approval`` checks the request is still pending and lists the
   guild's active products to choose from.
2. ``select_product`` returns a signed token naming the chosen product.
3. ``finalize_approval`` takes the token plus an optional staff note and
   processes ApproveReviewRequest.

The request stays pending until step 3; abandoning the flow has no effect.
"""

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.audit.log import ActionType, TargetType
from reviewdesk.audit.recording import record_staff_action
from reviewdesk.domain import custom_setting, reviewdesk
from reviewdesk.exceptions import Forbidden, NoProductsAvailable
from reviewdesk.permissions import require_staff
from reviewdesk.product.catalog import list_products, load_product
from reviewdesk.product.product import Product
from reviewdesk.request.lookup import load_pending_request
from reviewdesk.request.request import ReviewRequest
from reviewdesk.request.tokens import issue_approval_token, read_approval_token

logger = structlog.get_logger(__name__)

# Selection menus on the platform hold at most this many options
DEFAULT_PRODUCT_CHOICES = 25


@reviewdesk.command(part_of="ReviewRequest")
class ApproveReviewRequest:
    guild_id = Identifier(required=True)
    request_id = Identifier(required=True)
    product_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)
    staff_note = String(max_length=500)


@reviewdesk.command_handler(part_of=ReviewRequest)
class ApproveReviewRequestHandler:
    @handle(ApproveReviewRequest)
    def approve_review_request(self, command):
        require_staff(command.guild_id, command.staff_member_id)

        request = load_pending_request(command.guild_id, command.request_id)
        product = load_product(command.guild_id, command.product_id)

        note = (command.staff_note or "").strip() or None
        processing_time = request.approve(
            staff_member_id=command.staff_member_id,
            product_id=product.id,
            staff_note=note,
            product_name=product.name,
            staff_member_username=command.staff_member_username,
        )
        current_domain.repository_for(ReviewRequest).add(request)

        record_staff_action(
            guild_id=command.guild_id,
            staff_member_id=command.staff_member_id,
            staff_member_username=command.staff_member_username,
            action_type=ActionType.APPROVE.value,
            target_type=TargetType.REVIEW_REQUEST.value,
            target_id=request.id,
            details={
                "user_id": str(request.user_id),
                "product_id": str(product.id),
                "product_name": product.name,
                "staff_note": note,
            },
            processing_time_ms=processing_time,
        )
        return str(request.id)


def begin_approval(guild_id, request_id, staff_member_id) -> list[Product]:
    """Products staff can pick from for this request."""
    require_staff(guild_id, staff_member_id)
    load_pending_request(guild_id, request_id)

    products = list_products(guild_id)
    if not products:
        raise NoProductsAvailable()
    return products[: int(custom_setting("APPROVAL_PRODUCT_CHOICES", DEFAULT_PRODUCT_CHOICES))]


def select_product(guild_id, request_id, staff_member_id, product_id) -> str:
    """Validate the chosen product and return the token that finalizes the approval."""
    require_staff(guild_id, staff_member_id)
    load_pending_request(guild_id, request_id)
    product = load_product(guild_id, product_id)
    return issue_approval_token(guild_id, request_id, product.id, staff_member_id)


def finalize_approval(token: str, staff_member_id, staff_member_username=None, staff_note=None) -> str:
    payload = read_approval_token(token)
    if payload["staff_member_id"] != str(staff_member_id):
        raise Forbidden("This approval was started by another staff member.")

    request_id = current_domain.process(
        ApproveReviewRequest(
            guild_id=payload["guild_id"],
            request_id=payload["request_id"],
            product_id=payload["product_id"],
            staff_member_id=str(staff_member_id),
            staff_member_username=staff_member_username,
            staff_note=staff_note,
        ),
        asynchronous=False,
    )
    logger.info(
        "Review request approved",
        guild_id=payload["guild_id"],
        request_id=request_id,
        product_id=payload["product_id"],
        staff_member_id=str(staff_member_id),
    )
    return request_id
