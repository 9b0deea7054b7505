"""DenyReviewRequest — staff turn a request down, with a reason.

The request is named either by its id or by the id of its staff panel
message (what a button interaction carries).
"""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.audit.log import ActionType, TargetType
from reviewdesk.audit.recording import record_staff_action
from reviewdesk.domain import reviewdesk
from reviewdesk.exceptions import RequestNotFound
from reviewdesk.permissions import require_staff
from reviewdesk.request.lookup import load_request
from reviewdesk.request.request import ReviewRequest


@reviewdesk.command(part_of="ReviewRequest")
class DenyReviewRequest:
    guild_id = Identifier(required=True)
    staff_member_id = Identifier(required=True)
    staff_member_username = String(max_length=100)
    reason = String(required=True, max_length=1000)
    request_id = Identifier()
    request_message_id = Identifier()


@reviewdesk.command_handler(part_of=ReviewRequest)
class DenyReviewRequestHandler:
    @handle(DenyReviewRequest)
    def deny_review_request(self, command):
        require_staff(command.guild_id, command.staff_member_id)

        repo = current_domain.repository_for(ReviewRequest)
        if command.request_id:
            request = load_request(command.guild_id, command.request_id)
        elif command.request_message_id:
            request = repo.find_by_message(command.guild_id, command.request_message_id)
            if request is None:
                raise RequestNotFound(request_message_id=command.request_message_id)
        else:
            raise ValidationError({"request_id": ["A request id or request message id is required"]})

        processing_time = request.deny(
            staff_member_id=command.staff_member_id,
            reason=command.reason,
            staff_member_username=command.staff_member_username,
        )
        repo.add(request)

        record_staff_action(
            guild_id=command.guild_id,
            staff_member_id=command.staff_member_id,
            staff_member_username=command.staff_member_username,
            action_type=ActionType.DENY.value,
            target_type=TargetType.REVIEW_REQUEST.value,
            target_id=request.id,
            details={"user_id": str(request.user_id), "denial_reason": request.denial_reason},
            processing_time_ms=processing_time,
        )
        return str(request.id)
