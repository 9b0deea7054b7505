"""Staff and administrator checks.

Administrators are always staff. Otherwise a member is staff when they hold
the guild's configured staff role; with no staff role configured only
administrators count.
"""

from reviewdesk.exceptions import Forbidden
from reviewdesk.gateway import get_platform
from reviewdesk.settings.store import get_guild_settings


def is_administrator(guild_id, user_id) -> bool:
    return bool(get_platform().is_administrator(str(guild_id), str(user_id)))


def is_staff(guild_id, user_id) -> bool:
    if is_administrator(guild_id, user_id):
        return True

    staff_role = get_guild_settings(guild_id).staff_role
    if not staff_role:
        return False
    return str(staff_role) in {str(r) for r in get_platform().member_role_ids(str(guild_id), str(user_id))}


def require_staff(guild_id, user_id) -> None:
    if not is_staff(guild_id, user_id):
        raise Forbidden("You need the staff role to do that.", user_id=user_id)


def require_administrator(guild_id, user_id) -> None:
    if not is_administrator(guild_id, user_id):
        raise Forbidden("Only server administrators can change review settings.", user_id=user_id)
