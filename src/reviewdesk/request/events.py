"""Domain events for the ReviewRequest aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from reviewdesk.domain import reviewdesk


@reviewdesk.event(part_of="ReviewRequest")
class ReviewRequested:
    """A member asked permission to write a review."""

    __version__ = 1

    request_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String()
    request_message_id = Identifier(required=True)
    request_channel_id = Identifier(required=True)
    requested_at = DateTime(required=True)


@reviewdesk.event(part_of="ReviewRequest")
class ReviewRequestApproved:
    """Staff approved the request and chose the product to be reviewed."""

    __version__ = 1

    request_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String()
    product_id = Identifier(required=True)
    product_name = String()
    staff_member_id = Identifier(required=True)
    staff_member_username = String()
    staff_note = String()
    request_message_id = Identifier()
    request_channel_id = Identifier()
    processing_time_ms = Integer(required=True)
    approved_at = DateTime(required=True)


@reviewdesk.event(part_of="ReviewRequest")
class ReviewRequestDenied:
    """Staff denied the request, giving a reason."""

    __version__ = 1

    request_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String()
    staff_member_id = Identifier(required=True)
    staff_member_username = String()
    reason = String(required=True)
    request_message_id = Identifier()
    request_channel_id = Identifier()
    processing_time_ms = Integer(required=True)
    denied_at = DateTime(required=True)


@reviewdesk.event(part_of="ReviewRequest")
class ReviewRequestFulfilled:
    """The approved member submitted their review; the approval is used up."""

    __version__ = 1

    request_id = Identifier(required=True)
    review_id = Identifier(required=True)
    fulfilled_at = DateTime(required=True)
