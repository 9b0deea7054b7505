"""Per-staff activity statistics over a trailing window."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from reviewdesk.audit.log import ActionType, StaffActionLog
from reviewdesk.utils.durations import as_utc

DEFAULT_WINDOW_DAYS = 30


@dataclass
class StaffStats:
    staff_member_id: str
    staff_member_username: str | None = None
    total_actions: int = 0
    approvals: int = 0
    denials: int = 0
    edits: int = 0
    deletes: int = 0
    product_changes: int = 0
    average_processing_time_ms: float | None = None


def staff_stats(guild_id, staff_member_id=None, window_days: int = DEFAULT_WINDOW_DAYS) -> list[StaffStats]:
    """Summarize audit entries from the last ``window_days`` days, one row per staff member.

    Rows are ordered by total actions, busiest first. The average processing
    time covers approve actions only and is None when there were none.
    """
    since = datetime.now(UTC) - timedelta(days=window_days)
    repo = current_domain.repository_for(StaffActionLog)

    filters = {"guild_id": str(guild_id)}
    if staff_member_id is not None:
        filters["staff_member_id"] = str(staff_member_id)
    entries = [e for e in repo.entries(**filters) if as_utc(e.created_at) >= since]

    rows: dict[str, StaffStats] = {}
    approve_times: dict[str, list[int]] = {}
    for entry in entries:
        key = str(entry.staff_member_id)
        row = rows.setdefault(key, StaffStats(staff_member_id=key))
        if entry.staff_member_username:
            row.staff_member_username = entry.staff_member_username

        row.total_actions += 1
        action = ActionType(entry.action_type)
        if action == ActionType.APPROVE:
            row.approvals += 1
            if entry.processing_time_ms is not None:
                approve_times.setdefault(key, []).append(entry.processing_time_ms)
        elif action == ActionType.DENY:
            row.denials += 1
        elif action == ActionType.EDIT:
            row.edits += 1
        elif action == ActionType.DELETE:
            row.deletes += 1
        else:
            row.product_changes += 1

    for key, times in approve_times.items():
        rows[key].average_processing_time_ms = sum(times) / len(times)

    return sorted(rows.values(), key=lambda r: (-r.total_actions, r.staff_member_id))
