"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, Text

from reviewdesk.domain import reviewdesk


@reviewdesk.event(part_of="Review")
class ReviewSubmitted:
    """An approved member submitted their review."""

    __version__ = 1

    review_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    product_id = Identifier(required=True)
    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    anonymous = Boolean(default=False)
    submitted_at = DateTime(required=True)


@reviewdesk.event(part_of="Review")
class ReviewPostAttached:
    """The review's public post was created and linked."""

    __version__ = 1

    review_id = Identifier(required=True)
    message_id = Identifier(required=True)
    channel_id = Identifier(required=True)


@reviewdesk.event(part_of="Review")
class ReviewEdited:
    """Staff changed the text or rating of a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    product_id = Identifier(required=True)
    old_rating = Integer(required=True)
    new_rating = Integer(required=True)
    text = Text(required=True)
    edited_by = Identifier(required=True)
    message_id = Identifier()
    channel_id = Identifier()
    edited_at = DateTime(required=True)


@reviewdesk.event(part_of="Review")
class ReviewDeleted:
    """Staff soft-deleted a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    guild_id = Identifier(required=True)
    product_id = Identifier(required=True)
    deleted_by = Identifier(required=True)
    message_id = Identifier()
    channel_id = Identifier()
    deleted_at = DateTime(required=True)
