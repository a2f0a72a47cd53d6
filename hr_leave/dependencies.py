"""Shared FastAPI dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_leave.database import get_db
from hr_leave.leave.service import LeaveBalanceService


async def get_leave_balance_service(
    db: AsyncSession = Depends(get_db),
) -> LeaveBalanceService:
    """Request-scoped balance service reading through the request's session."""
    return LeaveBalanceService.for_session(db)
