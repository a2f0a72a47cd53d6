"""Used / pending day totals derived from an employee's leave requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from hr_leave.common.constants import LeaveStatus
from hr_leave.leave.dates import days_between, year_start
from hr_leave.leave.schemas import LeaveRequestRecord


@dataclass(frozen=True)
class LeaveUsage:
    used: Decimal = Decimal("0")
    pending: Decimal = Decimal("0")


def counted_days(
    request: LeaveRequestRecord,
    as_of: date,
    reset_annually: bool,
) -> int:
    """Days of ``request`` that count towards the balance on ``as_of``.

    For annually-resetting types only the part of the request inside
    [Jan 1 of as_of's year, as_of] counts; anything outside that window,
    including an inverted clipped span, counts as zero.
    """
    if not reset_annually:
        return days_between(request.start_date, request.end_date)

    effective_start = max(request.start_date, year_start(as_of))
    effective_end = min(request.end_date, as_of)
    if effective_start > effective_end:
        return 0
    return days_between(effective_start, effective_end)


def aggregate_usage(
    requests: Iterable[LeaveRequestRecord],
    leave_type: str,
    as_of: date,
    reset_annually: bool = False,
) -> LeaveUsage:
    """Sum approved (used) and pending days for one leave type.

    Rejected requests never count.
    """
    used = 0
    pending = 0
    for req in requests:
        if req.leave_type.strip() != leave_type:
            continue
        if req.status == LeaveStatus.rejected:
            continue

        days = counted_days(req, as_of, reset_annually)
        if req.status == LeaveStatus.approved:
            used += days
        elif req.status == LeaveStatus.pending:
            pending += days

    return LeaveUsage(used=Decimal(used), pending=Decimal(pending))
