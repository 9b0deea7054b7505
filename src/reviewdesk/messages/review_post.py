"""Public post announcing a submitted review."""

from reviewdesk.messages.palette import YELLOW, field, stars

ANONYMOUS_LABEL = "Anonymous"


class ReviewPostTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        reviewer = ANONYMOUS_LABEL if context.get("anonymous") else context.get("username")
        embed = {
            "title": f"Review: {context['product_name']}",
            "description": context["text"],
            "color": YELLOW,
            "fields": [
                field("Rating", f"{stars(context['rating'])} ({context['rating']}/5)"),
                field("Reviewer", reviewer),
            ],
            "timestamp": context.get("submitted_at"),
        }
        if context.get("edited"):
            embed["footer"] = "Edited by staff"
        return embed
