"""UpdateGuildSettings — merge a partial settings update for a guild.

The handler trusts its caller for authorization; the API checks
administrator capability before issuing the command.
"""

import json

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviewdesk.domain import reviewdesk
from reviewdesk.settings.settings import GuildSettings


@reviewdesk.command(part_of="GuildSettings")
class UpdateGuildSettings:
    guild_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object of group -> {key: value}
    updated_by = Identifier(required=True)


@reviewdesk.command_handler(part_of=GuildSettings)
class UpdateGuildSettingsHandler:
    @handle(UpdateGuildSettings)
    def update_guild_settings(self, command):
        try:
            changes = json.loads(command.changes)
        except ValueError:
            raise ValidationError({"changes": ["Settings changes must be valid JSON"]})
        if not isinstance(changes, dict):
            raise ValidationError({"changes": ["Settings changes must be an object"]})

        repo = current_domain.repository_for(GuildSettings)
        try:
            settings = repo.get(command.guild_id)
        except ObjectNotFoundError:
            settings = GuildSettings.create_default(command.guild_id)

        settings.apply_changes(changes, updated_by=command.updated_by)
        repo.add(settings)
        return str(settings.guild_id)
