BLURPLE = 0x5865F2
GREEN = 0x57F287
RED = 0xED4245
YELLOW = 0xFEE75C
GREY = 0x95A5A6


def stars(rating: int, out_of: int = 5) -> str:
    rating = max(0, min(int(rating or 0), out_of))
    return "⭐" * rating + "☆" * (out_of - rating)


def field(name: str, value, inline: bool = True) -> dict:
    return {"name": name, "value": str(value) if value not in (None, "") else "—", "inline": inline}


def button(custom_id: str, label: str, style: str = "secondary", disabled: bool = False) -> dict:
    return {"type": "button", "custom_id": custom_id, "label": label, "style": style, "disabled": disabled}
