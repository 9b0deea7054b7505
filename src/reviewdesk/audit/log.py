"""StaffActionLog aggregate — append-only record of staff decisions.

Entries are written once by ``StaffActionLog.record`` and never changed;
the aggregate exposes no mutating behavior.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, Integer, String, Text

from reviewdesk.audit.events import StaffActionRecorded
from reviewdesk.domain import reviewdesk


class ActionType(Enum):
    APPROVE = "approve"
    DENY = "deny"
    EDIT = "edit"
    DELETE = "delete"
    PRODUCT_CREATE = "product_create"
    PRODUCT_EDIT = "product_edit"
    PRODUCT_DELETE = "product_delete"


class TargetType(Enum):
    REVIEW = "review"
    REVIEW_REQUEST = "review_request"
    PRODUCT = "product"


@reviewdesk.aggregate
class StaffActionLog:
    guild_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)
    action_type = String(choices=ActionType, required=True)
    target_type = String(choices=TargetType)
    target_id = Identifier()
    details = Text()  # JSON object, action specific
    processing_time_ms = Integer(min_value=0)  # approve/deny only
    created_at = DateTime(required=True)

    @classmethod
    def record(
        cls,
        guild_id,
        staff_member_id,
        action_type,
        target_type=None,
        target_id=None,
        details=None,
        processing_time_ms=None,
        staff_member_username=None,
    ):
        now = datetime.now(UTC)
        entry = cls(
            guild_id=str(guild_id),
            staff_member_id=str(staff_member_id),
            staff_member_username=staff_member_username,
            action_type=ActionType(action_type).value,
            target_type=TargetType(target_type).value if target_type else None,
            target_id=str(target_id) if target_id else None,
            details=json.dumps(details or {}, default=str),
            processing_time_ms=processing_time_ms,
            created_at=now,
        )
        entry.raise_(
            StaffActionRecorded(
                entry_id=str(entry.id),
                guild_id=entry.guild_id,
                staff_member_id=entry.staff_member_id,
                staff_member_username=staff_member_username,
                action_type=entry.action_type,
                target_type=entry.target_type,
                target_id=entry.target_id,
                details=entry.details,
                processing_time_ms=processing_time_ms,
                recorded_at=now,
            )
        )
        return entry

    @property
    def details_dict(self) -> dict:
        return json.loads(self.details) if self.details else {}
