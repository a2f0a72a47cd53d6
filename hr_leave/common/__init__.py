"""Common module — shared enums, policy constants and exceptions."""

from hr_leave.common.constants import (
    ANNUAL_LEAVE_ELIGIBILITY_MONTHS,
    ANNUAL_LEAVE_EXPIRY_MONTHS,
    ANNUAL_LEAVE_EXPIRY_WARNING_MONTHS,
    DEFAULT_EMERGENCY_LEAVE_DAYS,
    LeaveStatus,
    LeaveType,
    leave_type_code,
)
from hr_leave.common.exceptions import (
    AppException,
    NotFoundException,
    PreconditionFailedException,
    register_exception_handlers,
)

__all__ = [
    # Constants / Enums
    "ANNUAL_LEAVE_ELIGIBILITY_MONTHS",
    "ANNUAL_LEAVE_EXPIRY_MONTHS",
    "ANNUAL_LEAVE_EXPIRY_WARNING_MONTHS",
    "DEFAULT_EMERGENCY_LEAVE_DAYS",
    "LeaveStatus",
    "LeaveType",
    "leave_type_code",
    # Exceptions
    "AppException",
    "NotFoundException",
    "PreconditionFailedException",
    "register_exception_handlers",
]
