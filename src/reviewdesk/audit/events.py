from protean.fields import DateTime, Identifier, Integer, String, Text

from reviewdesk.domain import reviewdesk


@reviewdesk.event(part_of="StaffActionLog")
class StaffActionRecorded:
    """A staff decision was appended to the audit log."""

    __version__ = 1

    entry_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String()
    action_type = String(required=True)
    target_type = String()
    target_id = Identifier()
    details = Text()
    processing_time_ms = Integer()
    recorded_at = DateTime(required=True)
