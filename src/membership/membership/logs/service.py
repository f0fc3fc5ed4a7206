from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LOG_LIMIT
from .model import LogEntry
from .repository import LogRepository

logger = logging.getLogger(__name__)


class LogProvider:
    """Use case: write and read the audit trail."""

    def __init__(self, logs: LogRepository, *, enabled: bool = True, clock: Callable = now_local):
        self._logs = logs
        self._enabled = enabled
        self._clock = clock

    def write_log(
        self,
        category: str,
        action: str,
        subject: Optional[str],
        subject_id: int = 0,
        detail: Optional[str] = None,
        *,
        ip: Optional[str] = None,
    ) -> Optional[int]:
        category = getattr(category, "value", category)
        action = getattr(action, "value", action)
        logger.info("%s/%s subject=%s(%s) ip=%s %s", category, action, subject, subject_id, ip, detail or "")
        if not self._enabled:
            return None

        return self._logs.create_log(
            category=category,
            action=action,
            subject=subject,
            subject_id=int(subject_id or 0),
            detail=detail,
            ip=ip,
            created_at=self._clock(),
        )

    def recent(self, *, category: Optional[str] = None, limit: int = DEFAULT_LOG_LIMIT) -> Sequence[LogEntry]:
        return self._logs.list_recent(category=category, limit=limit)
