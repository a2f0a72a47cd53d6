"""Leave service layer — leave balance engine.

Business logic:
  - Annual leave accrues monthly from the join date, capped at two years of
    entitlement (Kuwait labour law); overflow above the cap is expired
  - Annual leave can be drawn down after nine months of service
  - Sick and emergency leave reset every January 1st, pro-rated for
    mid-year joiners
  - Used / pending days come from approved / pending leave requests
  - available = max(0, accrued - expired - used - pending)

Balances are recomputed from source data on every call and never stored.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from hr_leave.common.constants import NOT_AVAILABLE, LeaveType, leave_type_code
from hr_leave.common.exceptions import PreconditionFailedException
from hr_leave.config import settings as app_settings
from hr_leave.leave.accrual import (
    calculate_annual_reset_grant,
    calculate_carry_over_accrual,
    floor_days,
    is_eligible_for_annual_leave,
)
from hr_leave.leave.schemas import (
    AnnualLeaveBalanceOut,
    CompanySettingsRecord,
    EmployeeRecord,
    LeaveBalanceOut,
    LeaveRequestRecord,
    LeaveTypeBalanceOut,
    OtherLeaveUsageOut,
)
from hr_leave.leave.sources import (
    EmployeeSource,
    LeaveRequestSource,
    SettingsSource,
    SqlEmployeeSource,
    SqlLeaveRequestSource,
    SqlSettingsSource,
)
from hr_leave.leave.usage import LeaveUsage, aggregate_usage

logger = logging.getLogger(__name__)


def today_in_company_timezone() -> date:
    return datetime.now(ZoneInfo(app_settings.LEAVE_TIMEZONE)).date()


def _available(
    accrued: Decimal,
    used: Decimal,
    pending: Decimal,
    expired: Decimal = Decimal("0"),
) -> Decimal:
    return max(Decimal("0"), accrued - expired - used - pending)


# ═════════════════════════════════════════════════════════════════════
# LeaveBalanceService
# ═════════════════════════════════════════════════════════════════════


class LeaveBalanceService:
    """Computes leave balances for the employees of one company."""

    def __init__(
        self,
        employees: EmployeeSource,
        company_settings: SettingsSource,
        leave_requests: LeaveRequestSource,
    ) -> None:
        self.employees = employees
        self.company_settings = company_settings
        self.leave_requests = leave_requests

    @classmethod
    def for_session(cls, db: AsyncSession) -> LeaveBalanceService:
        """Service backed by the SQL adapters on a single session."""
        return cls(
            SqlEmployeeSource(db),
            SqlSettingsSource(db),
            SqlLeaveRequestSource(db),
        )

    # ─────────────────────────────────────────────────────────────────
    # Per-type builders
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _build_annual_leave(
        entitlement: Decimal,
        join_date: date,
        usage: LeaveUsage,
        as_of: date,
    ) -> AnnualLeaveBalanceOut:
        accrual = calculate_carry_over_accrual(entitlement, join_date, as_of)

        accrued = floor_days(accrual.accrued)
        expired = floor_days(accrual.expired)
        used = floor_days(usage.used)
        pending = floor_days(usage.pending)

        return AnnualLeaveBalanceOut(
            accrued=accrued,
            used=used,
            pending=pending,
            available=_available(accrued, used, pending, expired),
            expired=expired,
            expiring_soon=floor_days(accrual.expiring_soon),
            eligible=is_eligible_for_annual_leave(join_date, as_of),
            max_accumulation=floor_days(accrual.max_accumulation),
        )

    @staticmethod
    def _build_resetting_leave(
        entitlement: Decimal,
        join_date: date,
        usage: LeaveUsage,
        as_of: date,
    ) -> LeaveTypeBalanceOut:
        accrued = floor_days(calculate_annual_reset_grant(entitlement, join_date, as_of))
        used = floor_days(usage.used)
        pending = floor_days(usage.pending)

        return LeaveTypeBalanceOut(
            accrued=accrued,
            used=used,
            pending=pending,
            available=_available(accrued, used, pending),
        )

    @staticmethod
    def _build_other_leave(
        requests: Sequence[LeaveRequestRecord],
        as_of: date,
    ) -> list[OtherLeaveUsageOut]:
        """Year-to-date usage for every label outside the three balance types."""
        balance_types = {LeaveType.annual, LeaveType.sick, LeaveType.emergency}
        labels = sorted({
            req.leave_type.strip()
            for req in requests
            if LeaveType.from_label(req.leave_type) not in balance_types
        })

        output: list[OtherLeaveUsageOut] = []
        for label in labels:
            usage = aggregate_usage(requests, label, as_of, reset_annually=True)
            if not usage.used and not usage.pending:
                continue
            output.append(
                OtherLeaveUsageOut(
                    leave_type=label,
                    code=leave_type_code(label),
                    used=floor_days(usage.used),
                    pending=floor_days(usage.pending),
                )
            )
        return output

    # ─────────────────────────────────────────────────────────────────
    # Assembler
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def build_balance(
        employee: EmployeeRecord,
        requests: Sequence[LeaveRequestRecord],
        company_settings: CompanySettingsRecord,
        as_of: date,
    ) -> LeaveBalanceOut:
        """Balance for one employee from their own leave requests."""
        annual_usage = aggregate_usage(requests, LeaveType.annual, as_of, reset_annually=False)
        sick_usage = aggregate_usage(requests, LeaveType.sick, as_of, reset_annually=True)
        emergency_usage = aggregate_usage(requests, LeaveType.emergency, as_of, reset_annually=True)

        return LeaveBalanceOut(
            employee_id=employee.id,
            employee_name=f"{employee.first_name} {employee.last_name}".strip(),
            employee_code=employee.employee_code or "",
            department=employee.department or NOT_AVAILABLE,
            join_date=employee.join_date,
            as_of=as_of,
            annual_leave=LeaveBalanceService._build_annual_leave(
                company_settings.annual_leave_days_per_year,
                employee.join_date,
                annual_usage,
                as_of,
            ),
            sick_leave=LeaveBalanceService._build_resetting_leave(
                company_settings.sick_leave_days_per_year,
                employee.join_date,
                sick_usage,
                as_of,
            ),
            emergency_leave=LeaveBalanceService._build_resetting_leave(
                company_settings.emergency_leave_days_per_year,
                employee.join_date,
                emergency_usage,
                as_of,
            ),
            other_leave=LeaveBalanceService._build_other_leave(requests, as_of),
        )

    # ─────────────────────────────────────────────────────────────────
    # Public entry points
    # ─────────────────────────────────────────────────────────────────

    async def get_leave_balances(
        self,
        company_id: uuid.UUID,
        *,
        as_of: Optional[date] = None,
        department: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[LeaveBalanceOut]:
        """Balances for every employee of the company.

        Raises PreconditionFailedException when the company has no leave
        settings; nothing is defaulted.
        """
        as_of = as_of or today_in_company_timezone()

        company_settings = await self.company_settings.get_company_settings(company_id)
        if company_settings is None:
            logger.error("Company settings not found for company %s", company_id)
            raise PreconditionFailedException(
                detail=f"Leave settings are not configured for company '{company_id}'.",
                errors={"company_id": ["Company settings not found."]},
            )

        employees = await self.employees.get_all(company_id)
        all_requests = await self.leave_requests.get_all()

        requests_by_employee: dict[uuid.UUID, list[LeaveRequestRecord]] = defaultdict(list)
        for req in all_requests:
            requests_by_employee[req.employee_id].append(req)

        balances = [
            self.build_balance(
                employee,
                requests_by_employee.get(employee.id, []),
                company_settings,
                as_of,
            )
            for employee in employees
        ]
        logger.debug(
            "Computed %d leave balances for company %s as of %s",
            len(balances), company_id, as_of,
        )

        if department:
            wanted = department.strip().lower()
            balances = [b for b in balances if b.department.lower() == wanted]
        if search:
            needle = search.strip().lower()
            balances = [
                b for b in balances
                if needle in b.employee_name.lower() or needle in b.employee_code.lower()
            ]
        return balances

    async def get_employee_leave_balance(
        self,
        employee_id: uuid.UUID,
        company_id: uuid.UUID,
        *,
        as_of: Optional[date] = None,
    ) -> Optional[LeaveBalanceOut]:
        """Balance for one employee, or None if they are not in the company."""
        balances = await self.get_leave_balances(company_id, as_of=as_of)
        return next((b for b in balances if b.employee_id == employee_id), None)
