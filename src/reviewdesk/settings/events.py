from protean.fields import DateTime, Identifier, Text

from reviewdesk.domain import reviewdesk


@reviewdesk.event(part_of="GuildSettings")
class GuildSettingsCreated:
    """Default settings were created for a guild on first access."""

    __version__ = 1

    guild_id = Identifier(required=True)
    created_at = DateTime(required=True)


@reviewdesk.event(part_of="GuildSettings")
class GuildSettingsUpdated:
    """An administrator changed one or more settings groups."""

    __version__ = 1

    guild_id = Identifier(required=True)
    changes = Text(required=True)  # JSON: the merged-in partial update
    updated_by = Identifier(required=True)
    updated_at = DateTime(required=True)
