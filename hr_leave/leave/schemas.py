"""Leave Pydantic v2 schemas.

Naming conventions:
  - *Record → read-only inputs handed over by the collaborator sources
  - *Out    → response bodies (computed, never persisted)
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_leave.common.constants import DEFAULT_EMERGENCY_LEAVE_DAYS, LeaveStatus


# ═════════════════════════════════════════════════════════════════════
# Collaborator records
# ═════════════════════════════════════════════════════════════════════


class EmployeeRecord(BaseModel):
    """Employee fields the balance engine reads."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_code: Optional[str] = None
    first_name: str
    last_name: str
    department: Optional[str] = None
    join_date: date


class LeaveRequestRecord(BaseModel):
    """A single leave request, any type, any status."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type: str
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None
    created_at: Optional[datetime] = None


class CompanySettingsRecord(BaseModel):
    """Leave entitlements in days per year."""

    model_config = ConfigDict(from_attributes=True)

    company_id: uuid.UUID
    annual_leave_days_per_year: Decimal = Field(..., ge=0)
    sick_leave_days_per_year: Decimal = Field(..., ge=0)
    emergency_leave_days_per_year: Decimal = Field(
        default=Decimal(DEFAULT_EMERGENCY_LEAVE_DAYS), ge=0,
    )


# ═════════════════════════════════════════════════════════════════════
# Leave Balance
# ═════════════════════════════════════════════════════════════════════


class LeaveTypeBalanceOut(BaseModel):
    """Balance for an annually-resetting leave type (sick, emergency)."""

    accrued: Decimal = Decimal("0")
    used: Decimal = Decimal("0")
    pending: Decimal = Decimal("0")
    available: Decimal = Decimal("0")


class AnnualLeaveBalanceOut(LeaveTypeBalanceOut):
    """Annual leave balance with expiry and eligibility details."""

    expired: Decimal = Decimal("0")
    expiring_soon: Decimal = Decimal("0")
    eligible: bool = False
    max_accumulation: Decimal = Decimal("0")


class OtherLeaveUsageOut(BaseModel):
    """Year-to-date usage for a leave type without a balance policy."""

    leave_type: str
    code: str
    used: Decimal = Decimal("0")
    pending: Decimal = Decimal("0")


class LeaveBalanceOut(BaseModel):
    """Full leave balance for one employee as of a given date."""

    employee_id: uuid.UUID
    employee_name: str
    employee_code: str = ""
    department: str
    join_date: date
    as_of: date

    annual_leave: AnnualLeaveBalanceOut
    sick_leave: LeaveTypeBalanceOut
    emergency_leave: LeaveTypeBalanceOut
    other_leave: list[OtherLeaveUsageOut] = Field(default_factory=list)
