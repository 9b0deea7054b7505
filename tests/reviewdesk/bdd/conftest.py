"""Shared BDD fixtures and step definitions for ReviewDesk."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from reviewdesk.request.events import (
    ReviewRequestApproved,
    ReviewRequestDenied,
    ReviewRequested,
    ReviewRequestFulfilled,
)
from reviewdesk.request.request import ReviewRequest
from reviewdesk.review.events import ReviewDeleted, ReviewEdited, ReviewSubmitted
from reviewdesk.review.review import Review

_REQUEST_EVENT_CLASSES = {
    "ReviewRequested": ReviewRequested,
    "ReviewRequestApproved": ReviewRequestApproved,
    "ReviewRequestDenied": ReviewRequestDenied,
    "ReviewRequestFulfilled": ReviewRequestFulfilled,
}

_REVIEW_EVENT_CLASSES = {
    "ReviewSubmitted": ReviewSubmitted,
    "ReviewEdited": ReviewEdited,
    "ReviewDeleted": ReviewDeleted,
}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


def _open_request():
    request = ReviewRequest.open(
        guild_id="guild-bdd",
        user_id="user-bdd",
        username="Bea",
        request_message_id="msg-bdd",
        request_channel_id="chan-staff",
    )
    request._events.clear()
    return request


def _submit_review(rating):
    review = Review.submit(
        guild_id="guild-bdd",
        product_id="prod-bdd",
        request_id="req-bdd",
        user_id="user-bdd",
        username="Bea",
        text="A BDD review that is long enough",
        rating=rating,
        staff_approver_id="staff-1",
    )
    review._events.clear()
    return review


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending review request", target_fixture="review_request")
def pending_request():
    return _open_request()


@given("an approved review request", target_fixture="review_request")
def approved_request():
    request = _open_request()
    request.approve(staff_member_id="staff-1", product_id="prod-bdd")
    request._events.clear()
    return request


@given(parsers.cfparse("a submitted review with rating {rating:d}"), target_fixture="review")
def submitted_review(rating):
    return _submit_review(rating)


@given("a deleted review", target_fixture="review")
def deleted_review():
    review = _submit_review(4)
    review.soft_delete(deleted_by="staff-1")
    review._events.clear()
    return review


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request status is "{status}"'))
def request_status_is(review_request, status):
    assert review_request.status == status


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(request, event_type):
    if event_type in _REQUEST_EVENT_CLASSES:
        aggregate = request.getfixturevalue("review_request")
        event_cls = _REQUEST_EVENT_CLASSES[event_type]
    else:
        aggregate = request.getfixturevalue("review")
        event_cls = _REVIEW_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in aggregate._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in aggregate._events]}"


@then("the request action fails with a validation error")
@then("the review action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
