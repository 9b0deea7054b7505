"""FastAPI routes for the ReviewDesk bounded context.

Each route translates between Pydantic schemas (external contract) and the
reviewdesk commands and workflows. Every route is scoped to one guild.
"""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from reviewdesk.api.schemas import (
    ApprovalChoicesResponse,
    ApprovalTokenResponse,
    CreateProductRequest,
    DenyRequestRequest,
    EditProductRequest,
    EditReviewRequest,
    FinalizeApprovalRequest,
    GuildOverviewResponse,
    OpenRequestRequest,
    ProductIdResponse,
    ProductOverviewResponse,
    ProductResponse,
    RequestIdResponse,
    ReviewResponse,
    SelectProductRequest,
    StaffActor,
    StaffStatsResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateSettingsRequest,
    UserOverviewResponse,
)
from reviewdesk.audit.stats import staff_stats
from reviewdesk.permissions import require_administrator, require_staff
from reviewdesk.product.catalog import list_products, view_product
from reviewdesk.product.management import CreateProduct, DeleteProduct, EditProduct
from reviewdesk.request.approval import begin_approval, finalize_approval, select_product
from reviewdesk.request.creation import request_review
from reviewdesk.request.denial import DenyReviewRequest
from reviewdesk.review.editing import edit_review
from reviewdesk.review.queries import product_reviews
from reviewdesk.review.removal import delete_review
from reviewdesk.review.submission import submit_review
from reviewdesk.settings.store import get_guild_settings, get_settings_store
from reviewdesk.stats import guild_overview, product_overview, user_overview

router = APIRouter(prefix="/guilds/{guild_id}", tags=["reviewdesk"])


def _product(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        review_count=product.review_count or 0,
        average_rating=product.average_rating or 0.0,
        total_rating_sum=product.total_rating_sum or 0,
        active=product.active,
    )


def _review(review) -> ReviewResponse:
    return ReviewResponse(
        review_id=str(review.id),
        product_id=str(review.product_id),
        user_id=str(review.user_id),
        username=review.username,
        text=review.text,
        rating=review.rating,
        anonymous=bool(review.anonymous),
        status=review.status,
        submitted_at=review.submitted_at,
        message_id=review.message_id,
    )


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
@router.get("/settings")
async def get_settings(guild_id: str) -> dict:
    return get_guild_settings(guild_id).to_view()


@router.patch("/settings")
async def update_settings(guild_id: str, body: UpdateSettingsRequest) -> dict:
    """Partially update settings. Administrators only."""
    require_administrator(guild_id, body.updated_by)
    settings = get_settings_store().update(guild_id, body.as_changes(), updated_by=body.updated_by)
    return settings.to_view()


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@router.get("/products", response_model=list[ProductResponse])
async def get_products(guild_id: str, include_inactive: bool = False) -> list[ProductResponse]:
    return [_product(p) for p in list_products(guild_id, include_inactive=include_inactive)]


@router.post("/products", status_code=201, response_model=ProductIdResponse)
async def create_product(guild_id: str, body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        guild_id=guild_id,
        name=body.name,
        description=body.description,
        price=body.price,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(guild_id: str, product_id: str) -> ProductResponse:
    return _product(view_product(guild_id, product_id))


@router.get("/products/{product_id}/reviews", response_model=list[ReviewResponse])
async def get_product_reviews(guild_id: str, product_id: str, limit: int | None = None) -> list[ReviewResponse]:
    return [_review(r) for r in product_reviews(guild_id, product_id, limit=limit)]


@router.put("/products/{product_id}", response_model=StatusResponse)
async def edit_product(guild_id: str, product_id: str, body: EditProductRequest) -> StatusResponse:
    command = EditProduct(
        guild_id=guild_id,
        product_id=product_id,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
        name=body.name,
        description=body.description,
        price=body.price,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/products/{product_id}/remove", response_model=StatusResponse)
async def remove_product(guild_id: str, product_id: str, body: StaffActor) -> StatusResponse:
    command = DeleteProduct(
        guild_id=guild_id,
        product_id=product_id,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Review requests
# ---------------------------------------------------------------------------
@router.post("/review-requests", status_code=201, response_model=RequestIdResponse)
async def open_request(guild_id: str, body: OpenRequestRequest) -> RequestIdResponse:
    request_id = request_review(guild_id, body.user_id, username=body.username)
    return RequestIdResponse(request_id=request_id)


@router.post("/review-requests/{request_id}/approval", response_model=ApprovalChoicesResponse)
async def start_approval(guild_id: str, request_id: str, body: StaffActor) -> ApprovalChoicesResponse:
    """Begin approving: returns the products staff can choose from."""
    products = begin_approval(guild_id, request_id, body.staff_member_id)
    return ApprovalChoicesResponse(request_id=request_id, products=[_product(p) for p in products])


@router.post("/review-requests/{request_id}/approval/product", response_model=ApprovalTokenResponse)
async def choose_product(guild_id: str, request_id: str, body: SelectProductRequest) -> ApprovalTokenResponse:
    token = select_product(guild_id, request_id, body.staff_member_id, body.product_id)
    return ApprovalTokenResponse(approval_token=token)


@router.post("/review-requests/approval/finalize", response_model=RequestIdResponse)
async def complete_approval(guild_id: str, body: FinalizeApprovalRequest) -> RequestIdResponse:
    # The guild comes from the signed token; the path only scopes the staff check.
    require_staff(guild_id, body.staff_member_id)
    request_id = finalize_approval(
        body.approval_token,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
        staff_note=body.staff_note,
    )
    return RequestIdResponse(request_id=request_id)


@router.put("/review-requests/{request_id}/deny", response_model=RequestIdResponse)
async def deny_request(guild_id: str, request_id: str, body: DenyRequestRequest) -> RequestIdResponse:
    command = DenyReviewRequest(
        guild_id=guild_id,
        request_id=request_id,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
        reason=body.reason,
    )
    return RequestIdResponse(request_id=current_domain.process(command, asynchronous=False))


@router.put("/review-requests/by-message/{message_id}/deny", response_model=RequestIdResponse)
async def deny_request_by_message(guild_id: str, message_id: str, body: DenyRequestRequest) -> RequestIdResponse:
    command = DenyReviewRequest(
        guild_id=guild_id,
        request_message_id=message_id,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
        reason=body.reason,
    )
    return RequestIdResponse(request_id=current_domain.process(command, asynchronous=False))


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@router.post("/reviews", status_code=201, response_model=ReviewResponse)
async def post_review(guild_id: str, body: SubmitReviewRequest) -> ReviewResponse:
    review = submit_review(
        guild_id,
        body.user_id,
        text=body.text,
        rating=body.rating,
        username=body.username,
        anonymous=body.anonymous,
    )
    return _review(review)


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review(guild_id: str, review_id: str, body: EditReviewRequest) -> ReviewResponse:
    review = edit_review(
        guild_id,
        review_id,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
        text=body.text,
        rating=body.rating,
    )
    return _review(review)


@router.put("/reviews/{review_id}/remove", response_model=StatusResponse)
async def remove_review(guild_id: str, review_id: str, body: StaffActor) -> StatusResponse:
    delete_review(
        guild_id,
        review_id,
        staff_member_id=body.staff_member_id,
        staff_member_username=body.staff_member_username,
    )
    return StatusResponse()


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------
@router.get("/stats/overview", response_model=GuildOverviewResponse)
async def get_overview(guild_id: str) -> GuildOverviewResponse:
    overview = guild_overview(guild_id)
    return GuildOverviewResponse(**{k: v for k, v in vars(overview).items() if k != "guild_id"})


@router.get("/stats/products", response_model=ProductOverviewResponse)
async def get_product_stats(guild_id: str) -> ProductOverviewResponse:
    overview = product_overview(guild_id)
    return ProductOverviewResponse(
        products=[_product(p) for p in overview.products],
        total_products=overview.total_products,
        total_reviews=overview.total_reviews,
        average_rating=overview.average_rating,
    )


@router.get("/stats/staff", response_model=list[StaffStatsResponse])
async def get_staff_stats(
    guild_id: str,
    requested_by: str,
    staff_member_id: str | None = None,
    days: int = 30,
) -> list[StaffStatsResponse]:
    require_staff(guild_id, requested_by)
    return [StaffStatsResponse(**vars(row)) for row in staff_stats(guild_id, staff_member_id, window_days=days)]


@router.get("/stats/users/{user_id}", response_model=UserOverviewResponse)
async def get_user_stats(guild_id: str, user_id: str) -> UserOverviewResponse:
    overview = user_overview(guild_id, user_id)
    return UserOverviewResponse(
        user_id=overview.user_id,
        total_reviews=overview.total_reviews,
        average_rating=overview.average_rating,
        recent_reviews=[_review(r) for r in overview.recent_reviews],
        reviews_by_product=overview.reviews_by_product,
    )
