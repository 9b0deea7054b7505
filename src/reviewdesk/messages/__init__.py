"""Renderers for everything the bot posts to the chat platform.

Each template renders a context dict into a platform-neutral embed dict
(``title``, ``description``, ``color``, ``fields``...). Templates that carry
interactive controls expose a ``components`` helper as well.
"""

from reviewdesk.messages.notices import ApprovalNoticeTemplate, DenialNoticeTemplate
from reviewdesk.messages.request_panel import (
    RequestApprovedPanelTemplate,
    RequestDeniedPanelTemplate,
    RequestPanelTemplate,
)
from reviewdesk.messages.review_post import ReviewPostTemplate
from reviewdesk.messages.staff_log import StaffActionTemplate

__all__ = [
    "ApprovalNoticeTemplate",
    "DenialNoticeTemplate",
    "RequestApprovedPanelTemplate",
    "RequestDeniedPanelTemplate",
    "RequestPanelTemplate",
    "ReviewPostTemplate",
    "StaffActionTemplate",
]
