"""Appending audit entries, and mirroring them to the guild's logs channel.

``record_staff_action`` is called from inside command handlers so the entry
commits in the same unit of work as the decision it describes. The mirror
runs after commit and is best-effort.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.audit.events import StaffActionRecorded
from reviewdesk.audit.log import StaffActionLog
from reviewdesk.domain import reviewdesk
from reviewdesk.gateway import attempt, get_platform
from reviewdesk.messages import StaffActionTemplate
from reviewdesk.settings.store import get_guild_settings

logger = structlog.get_logger(__name__)


def record_staff_action(
    guild_id,
    staff_member_id,
    action_type,
    target_type=None,
    target_id=None,
    details=None,
    processing_time_ms=None,
    staff_member_username=None,
) -> StaffActionLog:
    entry = StaffActionLog.record(
        guild_id=guild_id,
        staff_member_id=staff_member_id,
        staff_member_username=staff_member_username,
        action_type=action_type,
        target_type=target_type,
        target_id=target_id,
        details=details,
        processing_time_ms=processing_time_ms,
    )
    current_domain.repository_for(StaffActionLog).add(entry)
    logger.info(
        "Staff action recorded",
        guild_id=str(guild_id),
        staff_member_id=str(staff_member_id),
        action_type=entry.action_type,
        target_id=entry.target_id,
    )
    return entry


@reviewdesk.event_handler(part_of=StaffActionLog)
class StaffActionLogMirror:
    """Posts a summary of each audit entry to the guild's logs channel, if one is set."""

    @handle(StaffActionRecorded)
    def on_staff_action_recorded(self, event: StaffActionRecorded) -> None:
        try:
            logs_channel = get_guild_settings(event.guild_id).logs_channel
        except Exception as exc:
            logger.warning("Could not load settings for logs mirror", guild_id=str(event.guild_id), error=str(exc))
            return
        if not logs_channel:
            return

        embed = StaffActionTemplate.render(
            {
                "action_type": event.action_type,
                "staff_member_id": str(event.staff_member_id),
                "staff_member_username": event.staff_member_username,
                "target_type": event.target_type,
                "target_id": str(event.target_id) if event.target_id else None,
                "details": event.details,
                "processing_time_ms": event.processing_time_ms,
                "recorded_at": event.recorded_at.isoformat() if event.recorded_at else None,
            }
        )
        attempt("post staff log", get_platform().post_message, str(logs_channel), embed)
