"""Chat platform adapter registry.

Hands out a process-wide adapter. The in-memory fake is used until the bot
process installs its real client adapter with ``set_platform``.
"""

import structlog

from reviewdesk.exceptions import PlatformError
from reviewdesk.gateway.port import ChatPlatformPort

logger = structlog.get_logger(__name__)

_platform: ChatPlatformPort | None = None


def get_platform() -> ChatPlatformPort:
    """Return the configured platform adapter (singleton)."""
    global _platform
    if _platform is None:
        from reviewdesk.gateway.fake import FakeChatPlatform

        _platform = FakeChatPlatform()
    return _platform


def set_platform(adapter: ChatPlatformPort) -> None:
    global _platform
    _platform = adapter


def reset_platform() -> None:
    """Drop the adapter singleton (useful for testing)."""
    global _platform
    _platform = None


def ensure_sent(result: dict, operation: str) -> dict:
    """Raise ``PlatformError`` unless a required platform operation succeeded."""
    if result.get("status") != "sent":
        logger.error("Platform operation failed", operation=operation, error=result.get("error"))
        raise PlatformError(f"Could not {operation}: {result.get('error', 'unknown error')}")
    return result


def attempt(operation: str, call, *args, **kwargs) -> dict | None:
    """Run a best-effort platform call. Failures are logged, never raised."""
    try:
        result = call(*args, **kwargs)
    except Exception as exc:
        logger.warning("Best-effort platform call raised", operation=operation, error=str(exc))
        return None

    if result.get("status") != "sent":
        logger.warning("Best-effort platform call failed", operation=operation, error=result.get("error"))
        return None
    return result
