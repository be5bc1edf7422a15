# insights/periods.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from django.utils import timezone

SECONDS_PER_DAY = 24 * 60 * 60


# ============================================================
# Weekday / rounding helpers
# ============================================================

def weekday_index(d: date) -> int:
    """Sunday-based weekday: 0 = Sunday … 6 = Saturday."""
    return d.isoweekday() % 7


def count_weekday_occurrences(days: Iterable[int], start: date, end: date) -> int:
    """
    Number of calendar days in [start, end] (inclusive) whose weekday is in `days`.
    0 when start > end.
    """
    wanted = set(days or ())
    if not wanted or start > end:
        return 0
    n = 0
    d = start
    while d <= end:
        if weekday_index(d) in wanted:
            n += 1
        d += timedelta(days=1)
    return n


def round_half_up(x: float) -> int:
    # .5 always rounds up (2.5 -> 3), unlike round()
    return int(math.floor(x + 0.5))


def round_one_decimal(x: float) -> float:
    return math.floor(x * 10 + 0.5) / 10


# ============================================================
# Report period
# ============================================================

def _make_aware(dt: datetime) -> datetime:
    tz = timezone.get_current_timezone()
    return timezone.make_aware(dt, tz) if timezone.is_naive(dt) else dt.astimezone(tz)


def _is_date_only(val: str) -> bool:
    return "T" not in val and " " not in val and len(val) == 10


def _parse_bound(val: str) -> tuple[datetime, bool]:
    """
    Accepts 'YYYY-MM-DD' or an ISO timestamp. Returns (aware datetime, date_only).
    Raises ValueError on anything else.
    """
    val = (val or "").strip()
    if not val:
        raise ValueError("empty date")
    if _is_date_only(val):
        return _make_aware(datetime.combine(date.fromisoformat(val), time(0, 0))), True
    if val.endswith("Z"):
        val = val[:-1] + "+00:00"
    return _make_aware(datetime.fromisoformat(val)), False


@dataclass(frozen=True)
class ReportPeriod:
    """
    Inclusive reporting window.

    start/end are the timestamp bounds used to match visits (date-only
    bounds widened to the whole day); start_date/end_date are the calendar
    days walked by the weekday counter.
    """
    start: datetime
    end: datetime
    start_date: date
    end_date: date
    period_days: int

    @classmethod
    def parse(cls, start_raw: str, end_raw: str) -> "ReportPeriod":
        start, _ = _parse_bound(start_raw)
        end, end_date_only = _parse_bound(end_raw)

        # period length is measured on the bounds as given, before widening
        delta_days = (end - start).total_seconds() / SECONDS_PER_DAY
        period_days = max(0, math.ceil(delta_days) + 1)

        if end_date_only:
            end = end.replace(hour=23, minute=59, second=59, microsecond=999999)

        return cls(
            start=start,
            end=end,
            start_date=timezone.localtime(start).date(),
            end_date=timezone.localtime(end).date(),
            period_days=period_days,
        )

    @classmethod
    def from_query(cls, params, today: Optional[date] = None) -> "ReportPeriod":
        """startDate / endDate query parameters; missing bounds default to month-to-date."""
        today = today or timezone.localdate()
        start_raw = (params.get("startDate") or "").strip() or today.replace(day=1).isoformat()
        end_raw = (params.get("endDate") or "").strip() or today.isoformat()
        return cls.parse(start_raw, end_raw)

    @property
    def weeks(self) -> float:
        return self.period_days / 7
