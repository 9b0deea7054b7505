from reviewdesk.audit.log import StaffActionLog
from reviewdesk.domain import reviewdesk

QUERY_LIMIT = 100_000


@reviewdesk.repository(part_of=StaffActionLog)
class StaffActionLogRepository:
    def entries(self, **filters) -> list[StaffActionLog]:
        """Entries matching the filters, oldest first."""
        items = self._dao.query.filter(**filters).limit(QUERY_LIMIT).all().items
        return sorted(items, key=lambda e: e.created_at)
