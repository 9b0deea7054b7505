"""Tells staff and the requester about decisions on review requests.

Runs after the decision has committed. Every platform call here is
best-effort: the staff panel may be gone and members may have DMs closed.
"""

import structlog
from protean.utils.mixins import handle

from reviewdesk.domain import reviewdesk
from reviewdesk.gateway import attempt, get_platform
from reviewdesk.messages import (
    ApprovalNoticeTemplate,
    DenialNoticeTemplate,
    RequestApprovedPanelTemplate,
    RequestDeniedPanelTemplate,
    RequestPanelTemplate,
)
from reviewdesk.request.events import ReviewRequestApproved, ReviewRequestDenied
from reviewdesk.request.request import ReviewRequest

logger = structlog.get_logger(__name__)


def _lock_panel(event, embed: dict) -> None:
    if not (event.request_channel_id and event.request_message_id):
        return
    attempt(
        "update review request panel",
        get_platform().edit_message,
        str(event.request_channel_id),
        str(event.request_message_id),
        embed,
        RequestPanelTemplate.components(str(event.request_id), disabled=True),
    )


@reviewdesk.event_handler(part_of=ReviewRequest)
class ReviewRequestNotifier:
    @handle(ReviewRequestApproved)
    def on_request_approved(self, event: ReviewRequestApproved) -> None:
        context = {
            "user_id": str(event.user_id),
            "username": event.username,
            "product_name": event.product_name,
            "staff_member_username": event.staff_member_username or str(event.staff_member_id),
            "staff_note": event.staff_note,
            "processed_at": event.approved_at.isoformat() if event.approved_at else None,
        }
        _lock_panel(event, RequestApprovedPanelTemplate.render(context))

        sent = attempt(
            "send approval notice",
            get_platform().send_direct_message,
            str(event.user_id),
            ApprovalNoticeTemplate.render(context),
            ApprovalNoticeTemplate.components(str(event.request_id)),
        )
        if sent is None:
            logger.info("Requester could not be notified of approval", request_id=str(event.request_id))

    @handle(ReviewRequestDenied)
    def on_request_denied(self, event: ReviewRequestDenied) -> None:
        context = {
            "user_id": str(event.user_id),
            "username": event.username,
            "staff_member_username": event.staff_member_username or str(event.staff_member_id),
            "reason": event.reason,
            "processed_at": event.denied_at.isoformat() if event.denied_at else None,
        }
        _lock_panel(event, RequestDeniedPanelTemplate.render(context))

        sent = attempt(
            "send denial notice",
            get_platform().send_direct_message,
            str(event.user_id),
            DenialNoticeTemplate.render(context),
        )
        if sent is None:
            logger.info("Requester could not be notified of denial", request_id=str(event.request_id))
