"""Read-only data sources feeding the leave balance engine.

The engine depends only on the three Protocols below. The SQLAlchemy
adapters implement them over one AsyncSession; tests substitute in-memory
fakes.
"""

from __future__ import annotations

import uuid
from typing import Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_leave.core_hr.models import CompanySettings, Employee
from hr_leave.leave.models import LeaveRequest
from hr_leave.leave.schemas import (
    CompanySettingsRecord,
    EmployeeRecord,
    LeaveRequestRecord,
)


# ═════════════════════════════════════════════════════════════════════
# Contracts
# ═════════════════════════════════════════════════════════════════════


class EmployeeSource(Protocol):
    async def get_all(self, company_id: uuid.UUID) -> Sequence[EmployeeRecord]:
        ...


class SettingsSource(Protocol):
    async def get_company_settings(
        self, company_id: uuid.UUID,
    ) -> Optional[CompanySettingsRecord]:
        ...


class LeaveRequestSource(Protocol):
    async def get_all(self) -> Sequence[LeaveRequestRecord]:
        """Every leave request in the system; callers filter by employee."""
        ...


# ═════════════════════════════════════════════════════════════════════
# SQLAlchemy adapters
# ═════════════════════════════════════════════════════════════════════


class SqlEmployeeSource:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_all(self, company_id: uuid.UUID) -> list[EmployeeRecord]:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.company_id == company_id)
            .options(selectinload(Employee.department))
            .order_by(Employee.created_at.desc(), Employee.last_name)
        )
        return [
            EmployeeRecord(
                id=emp.id,
                employee_code=emp.employee_code,
                first_name=emp.first_name,
                last_name=emp.last_name,
                department=emp.department.name if emp.department else None,
                join_date=emp.join_date,
            )
            for emp in result.scalars().all()
        ]


class SqlSettingsSource:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_company_settings(
        self, company_id: uuid.UUID,
    ) -> Optional[CompanySettingsRecord]:
        result = await self.db.execute(
            select(CompanySettings).where(CompanySettings.company_id == company_id)
        )
        row = result.scalars().first()
        if row is None:
            return None
        return CompanySettingsRecord.model_validate(row)


class SqlLeaveRequestSource:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_all(self) -> list[LeaveRequestRecord]:
        result = await self.db.execute(
            select(LeaveRequest).order_by(LeaveRequest.created_at.desc())
        )
        return [
            LeaveRequestRecord.model_validate(req)
            for req in result.scalars().all()
        ]
