"""Tests for chat message templates."""

from reviewdesk.messages import (
    ApprovalNoticeTemplate,
    DenialNoticeTemplate,
    RequestApprovedPanelTemplate,
    RequestDeniedPanelTemplate,
    RequestPanelTemplate,
    ReviewPostTemplate,
    StaffActionTemplate,
)
from reviewdesk.messages.palette import stars


def _fields(embed):
    return {f["name"]: f["value"] for f in embed["fields"]}


class TestRequestPanel:
    def test_render_names_requester(self):
        embed = RequestPanelTemplate.render({"user_id": "user-1", "username": "Uma", "request_id": "req-1"})
        assert "<@user-1>" in embed["description"]
        assert _fields(embed)["Request ID"] == "req-1"

    def test_controls_carry_request_id(self):
        controls = RequestPanelTemplate.components("req-1")
        assert [c["custom_id"] for c in controls] == [
            "review_request:approve:req-1",
            "review_request:deny:req-1",
        ]
        assert not any(c["disabled"] for c in controls)

    def test_controls_can_be_locked(self):
        assert all(c["disabled"] for c in RequestPanelTemplate.components("req-1", disabled=True))

    def test_approved_state_shows_note(self):
        embed = RequestApprovedPanelTemplate.render(
            {"user_id": "user-1", "product_name": "Widget", "staff_note": "vip"}
        )
        fields = _fields(embed)
        assert fields["Product"] == "Widget"
        assert fields["Staff note"] == "vip"

    def test_denied_state_shows_reason(self):
        embed = RequestDeniedPanelTemplate.render({"user_id": "user-1", "reason": "Not a customer"})
        assert _fields(embed)["Reason"] == "Not a customer"


class TestNotices:
    def test_approval_notice_without_note(self):
        embed = ApprovalNoticeTemplate.render({"product_name": "Widget"})
        assert list(_fields(embed)) == ["Product"]

    def test_approval_notice_submit_control(self):
        (control,) = ApprovalNoticeTemplate.components("req-9")
        assert control["custom_id"] == "review:submit:req-9"

    def test_denial_notice_reason(self):
        embed = DenialNoticeTemplate.render({"reason": "Duplicate"})
        assert _fields(embed)["Reason"] == "Duplicate"


class TestReviewPost:
    def _context(self, **overrides):
        context = {"product_name": "Widget", "text": "Lovely", "rating": 4, "username": "Uma"}
        context.update(overrides)
        return context

    def test_shows_stars_and_reviewer(self):
        fields = _fields(ReviewPostTemplate.render(self._context()))
        assert fields["Rating"] == "⭐⭐⭐⭐☆ (4/5)"
        assert fields["Reviewer"] == "Uma"

    def test_anonymous_hides_username(self):
        fields = _fields(ReviewPostTemplate.render(self._context(anonymous=True)))
        assert fields["Reviewer"] == "Anonymous"

    def test_edited_footer(self):
        assert "footer" not in ReviewPostTemplate.render(self._context())
        assert ReviewPostTemplate.render(self._context(edited=True))["footer"] == "Edited by staff"


class TestStaffAction:
    def test_approve_includes_processing_time_and_details(self):
        embed = StaffActionTemplate.render(
            {
                "action_type": "approve",
                "staff_member_id": "staff-1",
                "target_type": "review_request",
                "target_id": "req-1",
                "processing_time_ms": 65_000,
                "details": '{"product_name": "Widget"}',
            }
        )
        fields = _fields(embed)
        assert embed["title"] == "✅ Review Request Approved"
        assert fields["Processing time"] == "1m 5s"
        assert fields["Product name"] == "Widget"
        assert fields["Target"] == "review_request req-1"


class TestStars:
    def test_clamped(self):
        assert stars(7) == "⭐" * 5
        assert stars(0) == "☆" * 5
