"""Pydantic request/response schemas for the ReviewDesk API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

HOUR_MS = 60 * 60 * 1000


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
class ChannelChanges(BaseModel):
    staff_review_channel: str | None = None
    reviews_channel: str | None = None
    logs_channel: str | None = None


class RoleChanges(BaseModel):
    staff_role: str | None = None


class FeatureChanges(BaseModel):
    allow_anonymous: bool | None = None
    enable_cooldowns: bool | None = None
    auto_approval: bool | None = None
    allow_review_edits: bool | None = None


class CooldownChanges(BaseModel):
    """Cooldowns in hours, as administrators set them."""

    review_request_hours: float | None = Field(default=None, ge=0, le=168)
    review_submission_hours: float | None = Field(default=None, ge=0, le=168)

    def as_milliseconds(self) -> dict:
        changes = {}
        if self.review_request_hours is not None:
            changes["review_request"] = int(self.review_request_hours * HOUR_MS)
        if self.review_submission_hours is not None:
            changes["review_submission"] = int(self.review_submission_hours * HOUR_MS)
        return changes


class ReviewLimitChanges(BaseModel):
    min_text_length: int | None = Field(default=None, ge=0)
    max_text_length: int | None = Field(default=None, ge=1)
    min_rating: int | None = Field(default=None, ge=1, le=5)
    max_rating: int | None = Field(default=None, ge=1, le=5)
    max_reviews_per_user: int | None = Field(default=None, ge=1)


class UpdateSettingsRequest(BaseModel):
    updated_by: str
    channels: ChannelChanges | None = None
    roles: RoleChanges | None = None
    features: FeatureChanges | None = None
    cooldowns: CooldownChanges | None = None
    review: ReviewLimitChanges | None = None
    default_language: str | None = Field(default=None, max_length=10)

    def as_changes(self) -> dict:
        """Only the keys the caller actually sent, shaped as settings groups."""
        changes = {}
        for group in ("channels", "roles", "features", "review"):
            value = getattr(self, group)
            if value is not None:
                sent = value.model_dump(exclude_unset=True)
                if sent:
                    changes[group] = sent
        if self.cooldowns is not None and self.cooldowns.as_milliseconds():
            changes["cooldowns"] = self.cooldowns.as_milliseconds()
        if self.default_language is not None:
            changes["default_language"] = self.default_language
        return changes


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class StaffActor(BaseModel):
    staff_member_id: str
    staff_member_username: str | None = None


class CreateProductRequest(StaffActor):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float = Field(ge=0)


class EditProductRequest(StaffActor):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float | None = Field(default=None, ge=0)


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    review_count: int
    average_rating: float
    total_rating_sum: int
    active: bool


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Review requests
# ---------------------------------------------------------------------------
class OpenRequestRequest(BaseModel):
    user_id: str
    username: str | None = None


class RequestIdResponse(BaseModel):
    request_id: str


class SelectProductRequest(StaffActor):
    product_id: str


class ApprovalTokenResponse(BaseModel):
    approval_token: str


class FinalizeApprovalRequest(StaffActor):
    approval_token: str
    staff_note: str | None = Field(default=None, max_length=500)


class DenyRequestRequest(StaffActor):
    reason: str = Field(min_length=1, max_length=1000)


class ApprovalChoicesResponse(BaseModel):
    request_id: str
    products: list[ProductResponse]


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    user_id: str
    username: str | None = None
    text: str
    rating: int
    anonymous: bool = False


class EditReviewRequest(StaffActor):
    text: str
    rating: int


class ReviewResponse(BaseModel):
    review_id: str
    product_id: str
    user_id: str
    username: str | None = None
    text: str
    rating: int
    anonymous: bool
    status: str
    submitted_at: datetime | None = None
    message_id: str | None = None


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------
class GuildOverviewResponse(BaseModel):
    total_reviews: int
    approved_reviews: int
    pending_reviews: int
    denied_reviews: int
    average_rating: float
    active_products: int
    total_requests: int
    pending_requests: int
    approved_requests: int
    denied_requests: int
    approval_rate: float


class ProductOverviewResponse(BaseModel):
    products: list[ProductResponse]
    total_products: int
    total_reviews: int
    average_rating: float


class StaffStatsResponse(BaseModel):
    staff_member_id: str
    staff_member_username: str | None = None
    total_actions: int
    approvals: int
    denials: int
    edits: int
    deletes: int
    product_changes: int
    average_processing_time_ms: float | None = None


class UserOverviewResponse(BaseModel):
    user_id: str
    total_reviews: int
    average_rating: float
    recent_reviews: list[ReviewResponse]
    reviews_by_product: dict[str, int]


class StatusResponse(BaseModel):
    status: str = "ok"
