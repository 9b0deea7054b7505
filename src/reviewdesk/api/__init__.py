"""ReviewDesk API package."""

from reviewdesk.api.errors import register_error_handlers
from reviewdesk.api.routes import router

__all__ = ["router", "register_error_handlers"]
