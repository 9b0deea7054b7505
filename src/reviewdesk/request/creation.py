"""RequestReview — a member asks permission to write a review.

Checks run in order: existing pending request, request cooldown, the guild's
per-user review cap, and a configured staff channel. The staff panel is
posted before the request is stored, so a failed post leaves nothing behind.
The request cooldown is stamped afterwards as a separate step.
"""

import threading
from contextlib import contextmanager
from datetime import UTC, datetime
from uuid import uuid4

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.cooldown.tracker import can_request, record_request
from reviewdesk.domain import reviewdesk
from reviewdesk.exceptions import (
    ChannelNotConfigured,
    CooldownActive,
    DuplicatePendingRequest,
    MaxReviewsReached,
)
from reviewdesk.gateway import ensure_sent, get_platform
from reviewdesk.messages import RequestPanelTemplate
from reviewdesk.request.request import ReviewRequest
from reviewdesk.review.review import Review
from reviewdesk.settings.store import get_guild_settings

logger = structlog.get_logger(__name__)


@reviewdesk.command(part_of="ReviewRequest")
class RequestReview:
    guild_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String(max_length=100)


@reviewdesk.command_handler(part_of=ReviewRequest)
class RequestReviewHandler:
    @handle(RequestReview)
    def request_review(self, command):
        guild_id, user_id = str(command.guild_id), str(command.user_id)

        repo = current_domain.repository_for(ReviewRequest)
        if repo.pending_for_user(guild_id, user_id) is not None:
            raise DuplicatePendingRequest()

        cooldown = can_request(user_id, guild_id)
        if not cooldown.allowed:
            raise CooldownActive(cooldown.remaining, cooldown.human_readable, action="request")

        settings = get_guild_settings(guild_id)
        limit = settings.group("review").max_reviews_per_user
        if limit is not None:
            written = len(current_domain.repository_for(Review).visible_for_user(guild_id, user_id))
            if written >= limit:
                raise MaxReviewsReached(
                    f"You have reached the maximum of {limit} review(s) for this server.",
                    limit=limit,
                )

        channel_id = settings.staff_review_channel
        if not channel_id:
            raise ChannelNotConfigured("staff_review_channel")

        request_id = str(uuid4())
        panel = RequestPanelTemplate.render(
            {
                "user_id": user_id,
                "username": command.username,
                "request_id": request_id,
                "requested_at": datetime.now(UTC).isoformat(),
            }
        )
        posted = ensure_sent(
            get_platform().post_message(str(channel_id), panel, RequestPanelTemplate.components(request_id)),
            "post the review request to staff",
        )

        request = ReviewRequest.open(
            id=request_id,
            guild_id=guild_id,
            user_id=user_id,
            username=command.username,
            request_message_id=posted["message_id"],
            request_channel_id=posted["channel_id"] or str(channel_id),
        )
        repo.add(request)
        return request_id


# Request creation is serialized per (guild, user) within this process.
# Entries hold [lock, holders] and are dropped once nobody holds or waits.
_locks: dict[tuple[str, str], list] = {}
_locks_guard = threading.Lock()


@contextmanager
def _serialized(guild_id, user_id):
    key = (str(guild_id), str(user_id))
    with _locks_guard:
        entry = _locks.setdefault(key, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _locks[key]


def request_review(guild_id, user_id, username=None) -> str:
    """Open a review request and stamp the request cooldown. Returns the request id."""
    with _serialized(guild_id, user_id):
        request_id = current_domain.process(
            RequestReview(guild_id=str(guild_id), user_id=str(user_id), username=username),
            asynchronous=False,
        )
        record_request(user_id, guild_id)

    logger.info("Review requested", guild_id=str(guild_id), user_id=str(user_id), request_id=request_id)
    return request_id
