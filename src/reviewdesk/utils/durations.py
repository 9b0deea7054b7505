"""Human-readable renderings of time spans used in replies and staff stats."""

from datetime import UTC, datetime, timedelta


def _as_timedelta(span) -> timedelta:
    if isinstance(span, timedelta):
        return span
    return timedelta(milliseconds=span or 0)


def format_duration(span) -> str:
    """Render a span (timedelta or milliseconds) as ``1d 2h 3m 4s``, largest unit first.

    Zero-valued units are dropped; a span under a second renders as ``0s``.
    """
    total = max(int(_as_timedelta(span).total_seconds()), 0)
    days, rest = divmod(total, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, seconds = divmod(rest, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds:
        parts.append(f"{seconds}s")
    return " ".join(parts) or "0s"


def format_hours_minutes(span) -> str:
    """``23h 0m`` style, as shown to users hitting the request cooldown."""
    total = max(int(_as_timedelta(span).total_seconds()), 0)
    hours, rest = divmod(total, 3_600)
    return f"{hours}h {rest // 60}m"


def format_minutes(span) -> str:
    """``45m`` style for short waits, ``1h 5m`` once the wait reaches an hour."""
    total = max(int(_as_timedelta(span).total_seconds()), 0)
    if total >= 3_600:
        return format_hours_minutes(span)
    return f"{total // 60}m"


def milliseconds(span: timedelta) -> int:
    return int(span.total_seconds() * 1000)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes coming back from storage as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=UTC)
