from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LogEntry:
    """One audit trail row (who did what to which subject)."""

    log_id: int
    category: str
    action: str
    subject: Optional[str]
    subject_id: int
    detail: Optional[str]
    ip: Optional[str]
    created_at: datetime
