"""Tests for the StaffActionLog aggregate."""

import pytest
from protean.exceptions import ValidationError
from reviewdesk.audit.log import ActionType, StaffActionLog, TargetType


class TestRecord:
    def test_serializes_details(self):
        entry = StaffActionLog.record(
            guild_id="guild-1",
            staff_member_id="staff-1",
            action_type=ActionType.APPROVE.value,
            target_type=TargetType.REVIEW_REQUEST.value,
            target_id="req-1",
            details={"product_name": "Widget"},
            processing_time_ms=1200,
        )
        assert entry.details_dict == {"product_name": "Widget"}
        assert entry.processing_time_ms == 1200
        assert entry.created_at is not None

    def test_details_default_to_empty(self):
        entry = StaffActionLog.record(guild_id="guild-1", staff_member_id="staff-1", action_type="product_create")
        assert entry.details_dict == {}
        assert entry.target_type is None

    def test_unknown_action_rejected(self):
        with pytest.raises(ValueError):
            StaffActionLog.record(guild_id="guild-1", staff_member_id="staff-1", action_type="ban")

    def test_raises_recorded_event(self):
        entry = StaffActionLog.record(guild_id="guild-1", staff_member_id="staff-1", action_type="deny")
        event = entry._events[0]
        assert event.__class__.__name__ == "StaffActionRecorded"
        assert event.action_type == "deny"

    def test_negative_processing_time_rejected(self):
        with pytest.raises(ValidationError):
            StaffActionLog.record(
                guild_id="guild-1", staff_member_id="staff-1", action_type="deny", processing_time_ms=-5
            )
