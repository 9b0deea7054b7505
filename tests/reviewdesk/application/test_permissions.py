"""Application tests for staff and administrator checks."""

import pytest
from reviewdesk.exceptions import Forbidden
from reviewdesk.permissions import is_administrator, is_staff, require_administrator, require_staff

ADMIN_ID = "admin-1"
STAFF_ID = "staff-1"
USER_ID = "user-1"


class TestIsStaff:
    def test_administrator_is_staff(self, guild):
        assert is_administrator(guild, ADMIN_ID)
        assert is_staff(guild, ADMIN_ID)

    def test_staff_role_holder_is_staff(self, guild):
        assert is_staff(guild, STAFF_ID)
        assert not is_administrator(guild, STAFF_ID)

    def test_member_without_role_is_not_staff(self, guild):
        assert not is_staff(guild, USER_ID)

    def test_other_roles_do_not_count(self, guild, platform):
        platform.grant_roles(guild, USER_ID, "role-vip")
        assert not is_staff(guild, USER_ID)

    def test_without_staff_role_only_administrators(self, platform):
        platform.make_administrator("guild-bare", "admin-bare")
        platform.grant_roles("guild-bare", "member-bare", "role-staff")

        assert is_staff("guild-bare", "admin-bare")
        assert not is_staff("guild-bare", "member-bare")


class TestRequire:
    def test_require_staff_rejects_members(self, guild):
        with pytest.raises(Forbidden):
            require_staff(guild, USER_ID)

    def test_require_staff_accepts_staff(self, guild):
        require_staff(guild, STAFF_ID)

    def test_require_administrator_rejects_staff(self, guild):
        with pytest.raises(Forbidden) as exc:
            require_administrator(guild, STAFF_ID)
        assert exc.value.category == "forbidden"
