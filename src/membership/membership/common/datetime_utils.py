from __future__ import annotations

from datetime import date, datetime, time, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def days_from_today(days: int, *, now: datetime | None = None) -> datetime:
    """Midnight of today shifted by ``days`` (negative values go back)."""
    now = now or now_local()
    return start_of_day(now.date()) + timedelta(days=days)
