"""Fake chat platform — records every call in memory for test assertions."""

from collections import defaultdict
from uuid import uuid4

from reviewdesk.gateway.port import ChatPlatformPort

_OPERATIONS = ("post_message", "edit_message", "delete_message", "send_direct_message")


class FakeChatPlatform(ChatPlatformPort):
    """Chat platform adapter that keeps posted, edited and deleted messages in memory."""

    def __init__(self):
        self.posted: list[dict] = []
        self.edited: list[dict] = []
        self.deleted: list[dict] = []
        self.direct_messages: list[dict] = []
        self._roles: dict[tuple[str, str], set[str]] = defaultdict(set)
        self._administrators: set[tuple[str, str]] = set()
        self.failing: set[str] = set()
        self.failure_reason = "Platform request failed"

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Platform request failed",
        operations: tuple[str, ...] | None = None,
    ):
        """Make some (default: all) message operations fail."""
        self.failure_reason = failure_reason
        self.failing = set() if should_succeed else set(operations or _OPERATIONS)

    def grant_roles(self, guild_id: str, user_id: str, *role_ids: str):
        self._roles[(str(guild_id), str(user_id))].update(str(r) for r in role_ids)

    def make_administrator(self, guild_id: str, user_id: str):
        self._administrators.add((str(guild_id), str(user_id)))

    def _failed(self, operation: str) -> dict | None:
        if operation in self.failing:
            return {"message_id": None, "channel_id": None, "status": "failed", "error": self.failure_reason}
        return None

    def post_message(self, channel_id, embed, components=None) -> dict:
        failed = self._failed("post_message")
        if failed:
            return failed

        message_id = f"msg-{uuid4().hex[:12]}"
        self.posted.append(
            {
                "message_id": message_id,
                "channel_id": str(channel_id),
                "embed": embed,
                "components": components,
            }
        )
        return {"message_id": message_id, "channel_id": str(channel_id), "status": "sent"}

    def edit_message(self, channel_id, message_id, embed, components=None) -> dict:
        failed = self._failed("edit_message")
        if failed:
            return failed

        self.edited.append(
            {
                "message_id": str(message_id),
                "channel_id": str(channel_id),
                "embed": embed,
                "components": components,
            }
        )
        return {"message_id": str(message_id), "channel_id": str(channel_id), "status": "sent"}

    def delete_message(self, channel_id, message_id) -> dict:
        failed = self._failed("delete_message")
        if failed:
            return failed

        self.deleted.append({"message_id": str(message_id), "channel_id": str(channel_id)})
        return {"message_id": str(message_id), "channel_id": str(channel_id), "status": "sent"}

    def send_direct_message(self, user_id, embed, components=None) -> dict:
        failed = self._failed("send_direct_message")
        if failed:
            return failed

        message_id = f"dm-{uuid4().hex[:12]}"
        self.direct_messages.append(
            {
                "message_id": message_id,
                "user_id": str(user_id),
                "embed": embed,
                "components": components,
            }
        )
        return {"message_id": message_id, "channel_id": None, "status": "sent"}

    def member_role_ids(self, guild_id, user_id) -> list[str]:
        return sorted(self._roles.get((str(guild_id), str(user_id)), set()))

    def is_administrator(self, guild_id, user_id) -> bool:
        return (str(guild_id), str(user_id)) in self._administrators

    def reset(self):
        """Clear recorded calls, grants and failure settings (useful between tests)."""
        self.posted.clear()
        self.edited.clear()
        self.deleted.clear()
        self.direct_messages.clear()
        self._roles.clear()
        self._administrators.clear()
        self.failing = set()
        self.failure_reason = "Platform request failed"
