from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import LogEntry


class LogRepository(Protocol):
    def create_log(
        self,
        *,
        category: str,
        action: str,
        subject: Optional[str],
        subject_id: int,
        detail: Optional[str],
        ip: Optional[str],
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def list_recent(self, *, category: Optional[str] = None, limit: int = 50) -> Sequence[LogEntry]:
        raise NotImplementedError
