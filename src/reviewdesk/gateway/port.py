"""Chat platform port — abstract interface to the bot's chat client."""

from abc import ABC, abstractmethod


class ChatPlatformPort(ABC):
    """Abstract interface for chat platform adapters.

    Message operations return a dict with keys: ``message_id``, ``channel_id``,
    ``status`` ("sent" or "failed") and ``error`` on failure. Adapters report
    failures through the result rather than raising.
    """

    @abstractmethod
    def post_message(self, channel_id: str, embed: dict, components: list | None = None) -> dict:
        """Post an embed (plus optional interactive components) to a channel."""
        ...

    @abstractmethod
    def edit_message(
        self,
        channel_id: str,
        message_id: str,
        embed: dict,
        components: list | None = None,
    ) -> dict: ...

    @abstractmethod
    def delete_message(self, channel_id: str, message_id: str) -> dict: ...

    @abstractmethod
    def send_direct_message(self, user_id: str, embed: dict, components: list | None = None) -> dict:
        """Send a private message to a user. Users may have DMs closed."""
        ...

    @abstractmethod
    def member_role_ids(self, guild_id: str, user_id: str) -> list[str]:
        """Role identifiers the member currently holds in the guild."""
        ...

    @abstractmethod
    def is_administrator(self, guild_id: str, user_id: str) -> bool: ...
