"""Tests for the Review aggregate — submission, edits and soft deletion."""

import pytest
from protean.exceptions import ValidationError
from reviewdesk.exceptions import AlreadyDeleted
from reviewdesk.review.review import Review, ReviewStatus


def _make_review(**overrides):
    defaults = {
        "guild_id": "guild-1",
        "product_id": "prod-1",
        "request_id": "req-1",
        "user_id": "user-1",
        "username": "Uma",
        "text": "Great widget, works well",
        "rating": 5,
        "staff_approver_id": "staff-1",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestSubmit:
    def test_created_approved_and_visible(self):
        review = _make_review()
        assert review.status == ReviewStatus.APPROVED.value
        assert review.is_visible
        assert review.submitted_at is not None

    def test_rating_above_five_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_review(rating=6)
        assert "rating" in exc.value.messages

    def test_rating_below_one_rejected(self):
        with pytest.raises(ValidationError):
            _make_review(rating=0)

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError):
            _make_review(text="    ")

    def test_raises_submitted_event(self):
        review = _make_review()
        event = review._events[0]
        assert event.__class__.__name__ == "ReviewSubmitted"
        assert event.rating == 5


class TestEdit:
    def test_returns_previous_rating(self):
        review = _make_review(rating=2)
        assert review.edit(text="Better than I first thought", rating=4, edited_by="staff-1") == 2
        assert review.rating == 4
        assert review.last_edited_by == "staff-1"

    def test_edit_event_carries_post_reference(self):
        review = _make_review()
        review.attach_post("msg-9", "chan-reviews")
        review._events.clear()
        review.edit(text="Edited text here", rating=3, edited_by="staff-1")

        event = review._events[0]
        assert event.__class__.__name__ == "ReviewEdited"
        assert (event.old_rating, event.new_rating) == (5, 3)
        assert str(event.message_id) == "msg-9"


class TestSoftDelete:
    def test_stamps_deleted_at_and_status(self):
        review = _make_review()
        review.soft_delete(deleted_by="staff-1")

        assert review.deleted_at is not None
        assert review.status == ReviewStatus.DELETED.value
        assert not review.is_visible

    def test_second_delete_fails(self):
        review = _make_review()
        review.soft_delete(deleted_by="staff-1")
        with pytest.raises(AlreadyDeleted):
            review.soft_delete(deleted_by="staff-1")

    def test_deleted_review_cannot_be_edited(self):
        review = _make_review()
        review.soft_delete(deleted_by="staff-1")
        with pytest.raises(ValidationError):
            review.edit(text="Trying to edit", rating=3, edited_by="staff-1")
