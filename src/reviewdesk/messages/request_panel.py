"""Staff-channel panel for a review request, and its approved/denied states.

The panel's buttons carry the request id, so staff interactions resolve the
request directly instead of parsing it back out of the embed.
"""

from reviewdesk.messages.palette import BLURPLE, GREEN, RED, button, field


def approve_control_id(request_id: str) -> str:
    return f"review_request:approve:{request_id}"


def deny_control_id(request_id: str) -> str:
    return f"review_request:deny:{request_id}"


class RequestPanelTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "📝 New Review Request",
            "description": f"<@{context['user_id']}> would like to leave a review.",
            "color": BLURPLE,
            "fields": [
                field("User", context.get("username")),
                field("User ID", context["user_id"]),
                field("Request ID", context["request_id"], inline=False),
            ],
            "footer": "Approve to pick the product, or deny with a reason",
            "timestamp": context.get("requested_at"),
        }

    @staticmethod
    def components(request_id: str, disabled: bool = False) -> list[dict]:
        return [
            button(approve_control_id(request_id), "Approve", style="success", disabled=disabled),
            button(deny_control_id(request_id), "Deny", style="danger", disabled=disabled),
        ]


class RequestApprovedPanelTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        fields = [
            field("User", context.get("username")),
            field("Product", context.get("product_name")),
            field("Approved by", context.get("staff_member_username")),
        ]
        if context.get("staff_note"):
            fields.append(field("Staff note", context["staff_note"], inline=False))

        return {
            "title": "✅ Review Request Approved",
            "description": f"<@{context['user_id']}> may now submit their review.",
            "color": GREEN,
            "fields": fields,
            "timestamp": context.get("processed_at"),
        }


class RequestDeniedPanelTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "❌ Review Request Denied",
            "description": f"The review request from <@{context['user_id']}> was denied.",
            "color": RED,
            "fields": [
                field("User", context.get("username")),
                field("Denied by", context.get("staff_member_username")),
                field("Reason", context.get("reason"), inline=False),
            ],
            "timestamp": context.get("processed_at"),
        }
