"""ReviewDesk bounded context — moderated product reviews for chat communities.

Users ask permission to review a product, staff approve (picking the product)
or deny the request, and approved users submit a rating and text that gets
posted publicly. Product rating aggregates are re-derived from approved
reviews, and every staff decision lands in an append-only audit log.
"""

import os

import structlog
from protean.domain import Domain

reviewdesk = Domain(name="reviewdesk")

logger = structlog.get_logger(__name__)


def custom_setting(name: str, default):
    """Read an application setting from the environment or the ``[custom]`` config table."""
    raw = os.getenv(name)
    if raw is not None:
        return type(default)(raw) if default is not None else raw
    custom = reviewdesk.config.get("custom", {}) or {}
    return custom.get(name, default)
