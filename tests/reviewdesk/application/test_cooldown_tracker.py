"""Application tests for request and submission cooldowns."""

from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from reviewdesk.cooldown.cooldown import UserCooldown, cooldown_key
from reviewdesk.cooldown.tracker import can_request, can_submit, record_request, record_submission
from reviewdesk.settings.store import get_settings_store

ADMIN_ID = "admin-1"
USER_ID = "user-1"
STAMPED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def _update_settings(guild, changes):
    get_settings_store().update(guild, changes, updated_by=ADMIN_ID)


class TestRequestCooldown:
    def test_first_request_allowed(self, guild):
        check = can_request(USER_ID, guild)
        assert check.allowed
        assert check.remaining == timedelta(0)

    def test_blocked_after_recent_request(self, guild):
        record_request(USER_ID, guild, at=STAMPED_AT)
        check = can_request(USER_ID, guild, now=STAMPED_AT + timedelta(hours=1))

        assert not check.allowed
        assert check.remaining == timedelta(hours=23)
        assert check.human_readable == "23h 0m"

    def test_allowed_once_cooldown_elapsed(self, guild):
        record_request(USER_ID, guild, at=STAMPED_AT)
        assert can_request(USER_ID, guild, now=STAMPED_AT + timedelta(hours=24)).allowed

    def test_cooldowns_are_per_user(self, guild):
        record_request(USER_ID, guild, at=STAMPED_AT)
        assert can_request("user-other", guild, now=STAMPED_AT + timedelta(minutes=1)).allowed

    def test_zero_duration_never_blocks(self, guild):
        _update_settings(guild, {"cooldowns": {"review_request": 0}})
        record_request(USER_ID, guild, at=STAMPED_AT)
        assert can_request(USER_ID, guild, now=STAMPED_AT).allowed


class TestSubmissionCooldown:
    def test_blocked_in_minutes(self, guild):
        record_submission(USER_ID, guild, at=STAMPED_AT)
        check = can_submit(USER_ID, guild, now=STAMPED_AT + timedelta(minutes=15))

        assert not check.allowed
        assert check.human_readable == "45m"

    def test_request_stamp_does_not_block_submission(self, guild):
        record_request(USER_ID, guild, at=STAMPED_AT)
        assert can_submit(USER_ID, guild, now=STAMPED_AT + timedelta(minutes=1)).allowed


class TestStamps:
    def test_one_record_per_member(self, guild):
        record_request(USER_ID, guild, at=STAMPED_AT)
        record_submission(USER_ID, guild, at=STAMPED_AT + timedelta(hours=2))

        record = current_domain.repository_for(UserCooldown).get(cooldown_key(guild, USER_ID))
        assert record.last_review_request is not None
        assert record.last_review_submission is not None


class TestDisabledCooldowns:
    def test_everything_allowed(self, guild):
        record_request(USER_ID, guild, at=STAMPED_AT)
        _update_settings(guild, {"features": {"enable_cooldowns": False}})

        assert can_request(USER_ID, guild, now=STAMPED_AT).allowed
        assert can_submit(USER_ID, guild, now=STAMPED_AT).allowed

    def test_stamping_is_skipped(self, guild):
        _update_settings(guild, {"features": {"enable_cooldowns": False}})
        record_request(USER_ID, guild)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(UserCooldown).get(cooldown_key(guild, USER_ID))
