"""Direct messages sent to requesters once staff have decided."""

from reviewdesk.messages.palette import GREEN, RED, button, field


def submit_control_id(request_id: str) -> str:
    return f"review:submit:{request_id}"


class ApprovalNoticeTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        fields = [field("Product", context.get("product_name"))]
        if context.get("staff_note"):
            fields.append(field("Note from staff", context["staff_note"], inline=False))

        return {
            "title": "✅ Your review request was approved",
            "description": (
                "You can now write your review. Use the button below to open the "
                "review form. It works once."
            ),
            "color": GREEN,
            "fields": fields,
        }

    @staticmethod
    def components(request_id: str) -> list[dict]:
        return [button(submit_control_id(request_id), "Submit Review", style="primary")]


class DenialNoticeTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "❌ Your review request was denied",
            "description": "A staff member looked at your request and could not approve it this time.",
            "color": RED,
            "fields": [field("Reason", context.get("reason"), inline=False)],
        }
