"""Signed continuation tokens for the two-step approval.

Selecting a product hands staff a Fernet token that embeds guild, request,
product and staff ids. Finalizing presents the token back, so nothing about
the half-finished approval has to live in memory between the two steps.
Tokens expire after ``APPROVAL_TOKEN_TTL`` seconds.
"""

import json
import os

import structlog
from cryptography.fernet import Fernet, InvalidToken

from reviewdesk.domain import custom_setting
from reviewdesk.exceptions import ApprovalExpired

logger = structlog.get_logger(__name__)

KEY_VARIABLE = "REVIEWDESK_APPROVAL_KEY"
DEFAULT_TTL_SECONDS = 900

_fernet: Fernet | None = None


def _is_production() -> bool:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "").lower() == "production"


def get_signing_key() -> Fernet:
    global _fernet
    if _fernet is None:
        key = os.environ.get(KEY_VARIABLE)
        if not key:
            if _is_production():
                raise RuntimeError(
                    f"{KEY_VARIABLE} environment variable is required in production. "
                    'Generate one with: python -c "from cryptography.fernet import Fernet; '
                    'print(Fernet.generate_key().decode())"'
                )
            logger.warning(
                "Approval key not set, generating a temporary key. Pending approvals will not survive a restart.",
                variable=KEY_VARIABLE,
            )
            key = Fernet.generate_key().decode()
        _fernet = Fernet(key.encode())
    return _fernet


def reset_signing_key() -> None:
    global _fernet
    _fernet = None


def issue_approval_token(guild_id, request_id, product_id, staff_member_id) -> str:
    payload = {
        "guild_id": str(guild_id),
        "request_id": str(request_id),
        "product_id": str(product_id),
        "staff_member_id": str(staff_member_id),
    }
    return get_signing_key().encrypt(json.dumps(payload).encode()).decode()


def read_approval_token(token: str, ttl: int | None = None) -> dict:
    """Decode a token, raising ApprovalExpired if it is tampered with or too old."""
    ttl = ttl if ttl is not None else int(custom_setting("APPROVAL_TOKEN_TTL", DEFAULT_TTL_SECONDS))
    try:
        raw = get_signing_key().decrypt(token.encode(), ttl=ttl)
    except (InvalidToken, AttributeError):
        logger.info("Rejected approval token")
        raise ApprovalExpired()
    return json.loads(raw)
