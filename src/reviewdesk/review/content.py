from protean.exceptions import ValidationError


def check_review_content(settings, text: str | None, rating: int | None) -> None:
    """Enforce the guild's rating range and text length limits."""
    limits = settings.group("review")
    errors = {}

    if rating is None or not (limits.min_rating <= rating <= limits.max_rating):
        errors["rating"] = [f"Rating must be between {limits.min_rating} and {limits.max_rating}"]

    length = len((text or "").strip())
    if length < limits.min_text_length:
        errors["text"] = [f"Review must be at least {limits.min_text_length} characters"]
    elif length > limits.max_text_length:
        errors["text"] = [f"Review cannot be longer than {limits.max_text_length} characters"]

    if errors:
        raise ValidationError(errors)
