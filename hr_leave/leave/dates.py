"""Calendar arithmetic used by the accrual and usage calculations."""

from __future__ import annotations

from datetime import date


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``, never negative.

    Only year and month are compared; the day of month is ignored, so
    Jan 31 -> Feb 1 counts as one month and Jan 1 -> Jan 31 as none.
    Accrual figures rely on this approximation.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(0, months)


def days_between(start: date, end: date) -> int:
    """Inclusive number of days covered by ``start``..``end``."""
    return abs((end - start).days) + 1


def year_start(d: date) -> date:
    return date(d.year, 1, 1)


def year_end(d: date) -> date:
    return date(d.year, 12, 31)
