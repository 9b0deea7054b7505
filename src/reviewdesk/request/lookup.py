from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewdesk.exceptions import AlreadyProcessed, RequestNotFound
from reviewdesk.request.request import ReviewRequest


def load_request(guild_id, request_id) -> ReviewRequest:
    try:
        request = current_domain.repository_for(ReviewRequest).get(str(request_id))
    except ObjectNotFoundError:
        raise RequestNotFound(request_id=request_id)
    if str(request.guild_id) != str(guild_id):
        raise RequestNotFound(request_id=request_id)
    return request


def load_pending_request(guild_id, request_id) -> ReviewRequest:
    request = load_request(guild_id, request_id)
    if not request.is_pending:
        raise AlreadyProcessed(request_id=str(request.id), status=request.status)
    return request
