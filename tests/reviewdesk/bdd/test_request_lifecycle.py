"""BDD tests for the review request lifecycle."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when
from reviewdesk.exceptions import AlreadyProcessed

scenarios("features/request_lifecycle.feature")


@when(
    parsers.cfparse('the request is approved by "{staff_member_id}" for product "{product_id}"'),
    target_fixture="review_request",
)
def approve_request(review_request, staff_member_id, product_id, error):
    try:
        review_request.approve(staff_member_id=staff_member_id, product_id=product_id)
    except (AlreadyProcessed, ValidationError) as exc:
        error["exc"] = exc
    return review_request


@when(
    parsers.cfparse('the request is denied by "{staff_member_id}" with reason "{reason}"'),
    target_fixture="review_request",
)
def deny_request(review_request, staff_member_id, reason, error):
    try:
        review_request.deny(staff_member_id=staff_member_id, reason=reason)
    except (AlreadyProcessed, ValidationError) as exc:
        error["exc"] = exc
    return review_request


@when(
    parsers.cfparse('the approval is used for review "{review_id}"'),
    target_fixture="review_request",
)
def use_approval(review_request, review_id, error):
    try:
        review_request.mark_fulfilled(review_id)
    except ValidationError as exc:
        error["exc"] = exc
    return review_request


@then("the request action fails because it was already processed")
def already_processed(error):
    assert isinstance(error["exc"], AlreadyProcessed)


@then(parsers.cfparse('the request records review "{review_id}"'))
def records_review(review_request, review_id):
    assert review_request.review_id == review_id
