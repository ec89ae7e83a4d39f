"""In-memory audit trail of decisions and enrollments.

Entries are held newest-last in a bounded buffer; readers get them
newest-first. Nothing here touches disk: ``export`` hands the caller the
JSON-ready records to persist wherever it keeps them.
"""

from collections import deque
from collections.abc import Iterable

import structlog

from .models import TransactionLogEntry

logger = structlog.get_logger()


class AuditTrail:
    def __init__(
        self, max_entries: int = 1000, entries: Iterable[TransactionLogEntry] = ()
    ) -> None:
        self._entries: deque[TransactionLogEntry] = deque(entries, maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: TransactionLogEntry) -> None:
        self._entries.append(entry)
        logger.info(
            "transaction_logged",
            status=entry.status.value,
            amount=entry.amount,
            match_score=round(entry.match_score, 3),
            reason=entry.reason,
            total_entries=len(self._entries),
        )

    def entries(self) -> list[TransactionLogEntry]:
        """All entries, newest first."""
        return list(reversed(self._entries))

    def recent(self, count: int = 10) -> list[TransactionLogEntry]:
        return self.entries()[:count]

    def export(self) -> list[dict]:
        """Oldest-first JSON-ready records for persistence."""
        return [e.model_dump(mode="json") for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()
