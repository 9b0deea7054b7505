"""Workflow errors for the reviewdesk domain.

Input problems are raised as ``protean.exceptions.ValidationError`` like
everywhere else in Protean. The classes below cover the remaining failure
categories; the API layer maps ``category`` onto an HTTP status.
"""

from datetime import timedelta


class ReviewDeskError(Exception):
    """Base class. ``message`` is safe to show to the end user."""

    category = "error"

    def __init__(self, message: str | None = None, **context):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    default_message = "Something went wrong"

    def to_dict(self) -> dict:
        payload = {"error": self.__class__.__name__, "message": self.message}
        if self.context:
            payload["context"] = {k: str(v) for k, v in self.context.items()}
        return payload


# ---------------------------------------------------------------------------
# Conflict
# ---------------------------------------------------------------------------
class Conflict(ReviewDeskError):
    category = "conflict"


class DuplicatePendingRequest(Conflict):
    default_message = "You already have a pending review request. Please wait for staff to process it."


class DuplicateProductName(Conflict):
    default_message = "A product with that name already exists."


class AlreadyProcessed(Conflict):
    default_message = "This review request has already been processed."


class AlreadyDeleted(Conflict):
    default_message = "This review has already been deleted."


class MaxReviewsReached(Conflict):
    default_message = "You have reached the maximum number of reviews for this server."


class NoProductsAvailable(Conflict):
    default_message = "No products available. Please create products first."


class MissingProduct(Conflict):
    default_message = "Your approved request has no product attached. Please contact staff."


class ApprovalExpired(Conflict):
    default_message = "This approval session has expired. Please start the approval again."


class CooldownActive(Conflict):
    """The caller must wait ``remaining`` before trying again."""

    def __init__(self, remaining: timedelta, human_readable: str, action: str = "request"):
        self.remaining = remaining
        self.human_readable = human_readable
        self.action = action
        verb = "requesting another review" if action == "request" else "submitting another review"
        super().__init__(
            f"Please wait {human_readable} before {verb}.",
            remaining_seconds=int(remaining.total_seconds()),
        )


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------
class NotFound(ReviewDeskError):
    category = "not_found"


class RequestNotFound(NotFound):
    default_message = "Review request not found."


class ProductNotFound(NotFound):
    default_message = "Product not found."


class ReviewNotFound(NotFound):
    default_message = "Review not found."


class NoApprovedRequest(NotFound):
    default_message = "You don't have an approved review request. Please request a review first."


class ChannelNotConfigured(NotFound):
    def __init__(self, channel: str):
        self.channel = channel
        label = channel.replace("_", " ")
        super().__init__(f"The {label} is not configured. Please ask an administrator to set it up.")


# ---------------------------------------------------------------------------
# Forbidden
# ---------------------------------------------------------------------------
class Forbidden(ReviewDeskError):
    category = "forbidden"
    default_message = "You don't have permission to do that."


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------
class PlatformError(ReviewDeskError):
    """A required chat platform operation reported failure."""

    category = "platform"
    default_message = "The chat platform rejected the operation."
