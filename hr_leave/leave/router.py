"""Leave router — computed leave balances.

Balances are recomputed on every request from employees, leave requests and
company settings; nothing is cached.
"""


import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from hr_leave.common.exceptions import NotFoundException
from hr_leave.common.rate_limit import limiter
from hr_leave.config import settings
from hr_leave.dependencies import get_leave_balance_service
from hr_leave.leave.schemas import LeaveBalanceOut
from hr_leave.leave.service import LeaveBalanceService

router = APIRouter(prefix="", tags=["leave"])


# ── GET /balances ───────────────────────────────────────────────────

@router.get("/balances", response_model=list[LeaveBalanceOut])
@limiter.limit(settings.BALANCE_RATE_LIMIT)
async def get_balances(
    request: Request,
    company_id: uuid.UUID = Query(..., description="Company whose employees to report"),
    as_of: Optional[date] = Query(None, description="Evaluation date; defaults to today"),
    department: Optional[str] = Query(None, description="Exact department name"),
    search: Optional[str] = Query(None, description="Employee name or code contains"),
    service: LeaveBalanceService = Depends(get_leave_balance_service),
):
    """Leave balances for every employee of a company."""
    return await service.get_leave_balances(
        company_id, as_of=as_of, department=department, search=search,
    )


# ── GET /balances/{employee_id} ─────────────────────────────────────

@router.get("/balances/{employee_id}", response_model=LeaveBalanceOut)
async def get_employee_balance(
    employee_id: uuid.UUID,
    company_id: uuid.UUID = Query(...),
    as_of: Optional[date] = Query(None),
    service: LeaveBalanceService = Depends(get_leave_balance_service),
):
    """Leave balance for a single employee of the company."""
    balance = await service.get_employee_leave_balance(
        employee_id, company_id, as_of=as_of,
    )
    if balance is None:
        raise NotFoundException("Employee", str(employee_id))
    return balance
