"""Leave ORM models: LeaveRequest."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_leave.common.constants import LeaveStatus
from hr_leave.database import Base

if TYPE_CHECKING:
    from hr_leave.core_hr.models import Employee


class LeaveRequest(Base):
    __tablename__ = "leave_requests"
    __table_args__ = (
        sa.CheckConstraint("end_date >= start_date", name="ck_leave_request_dates"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False, index=True,
    )
    # Free-text label ("Annual Leave", "Sick Leave", ...); see LeaveType.
    leave_type: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(sa.Text)
    status: Mapped[LeaveStatus] = mapped_column(
        sa.Enum(
            LeaveStatus,
            name="leave_status",
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        default=LeaveStatus.pending,
        server_default=LeaveStatus.pending.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )

    # Relationships
    employee: Mapped["Employee"] = relationship(
        back_populates="leave_requests",
    )
