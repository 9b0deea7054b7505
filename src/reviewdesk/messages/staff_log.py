"""Logs-channel summary of a staff action."""

import json

from reviewdesk.messages.palette import BLURPLE, GREEN, RED, YELLOW, field
from reviewdesk.utils.durations import format_duration

_ACTION_STYLE = {
    "approve": ("✅ Review Request Approved", GREEN),
    "deny": ("❌ Review Request Denied", RED),
    "edit": ("✏️ Review Edited", YELLOW),
    "delete": ("🗑️ Review Deleted", RED),
    "product_create": ("📦 Product Created", BLURPLE),
    "product_edit": ("📦 Product Edited", YELLOW),
    "product_delete": ("📦 Product Deleted", RED),
}


class StaffActionTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        title, color = _ACTION_STYLE.get(context["action_type"], ("Staff Action", BLURPLE))
        fields = [
            field("Staff member", context.get("staff_member_username") or context.get("staff_member_id")),
            field("Target", f"{context.get('target_type') or '—'} {context.get('target_id') or ''}".strip()),
        ]
        if context.get("processing_time_ms") is not None:
            fields.append(field("Processing time", format_duration(context["processing_time_ms"])))

        details = context.get("details") or {}
        if isinstance(details, str):
            details = json.loads(details)
        for key, value in details.items():
            fields.append(field(key.replace("_", " ").capitalize(), value))

        return {
            "title": title,
            "color": color,
            "fields": fields,
            "timestamp": context.get("recorded_at"),
        }
