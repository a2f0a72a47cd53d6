"""Enums and policy constants for leave balances."""

from __future__ import annotations

import enum
from typing import Optional


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


class LeaveType(str, enum.Enum):
    """Leave-type labels as stored on leave requests."""

    annual = "Annual Leave"
    sick = "Sick Leave"
    emergency = "Emergency Leave"
    maternity = "Maternity Leave"
    unpaid = "Unpaid Leave"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional[LeaveType]:
        """Return the matching member, or None for an unrecognised label."""
        if not label:
            return None
        try:
            return cls(label.strip())
        except ValueError:
            return None

    @property
    def code(self) -> str:
        return LEAVE_TYPE_CODES[self]

    @property
    def resets_annually(self) -> bool:
        return self in ANNUALLY_RESETTING_TYPES


LEAVE_TYPE_CODES: dict[LeaveType, str] = {
    LeaveType.annual: "AL",
    LeaveType.sick: "SL",
    LeaveType.emergency: "EL",
    LeaveType.maternity: "ML",
    LeaveType.unpaid: "UL",
}

# Balances for these types start afresh on January 1st.
ANNUALLY_RESETTING_TYPES: frozenset[LeaveType] = frozenset(
    {LeaveType.sick, LeaveType.emergency}
)

UNKNOWN_LEAVE_CODE = "XX"


def leave_type_code(label: Optional[str]) -> str:
    """Short code for a leave-type label.

    Known types map to their fixed code. Anything else gets a generic
    two-letter code built from the label's initials ("Hajj Leave" -> "HL"),
    or its first two letters when it is a single word ("Bereavement" -> "BE").
    """
    known = LeaveType.from_label(label)
    if known is not None:
        return known.code

    words = [w for w in (label or "").split() if w[:1].isalpha()]
    if len(words) >= 2:
        return (words[0][0] + words[1][0]).upper()
    if words and len(words[0]) >= 2:
        return words[0][:2].upper()
    return UNKNOWN_LEAVE_CODE


# ── Policy constants ────────────────────────────────────────────────

ANNUAL_LEAVE_ELIGIBILITY_MONTHS = 9
# Kuwait labour law: untaken annual leave lapses after two years.
ANNUAL_LEAVE_EXPIRY_MONTHS = 24
ANNUAL_LEAVE_EXPIRY_WARNING_MONTHS = 3
DEFAULT_EMERGENCY_LEAVE_DAYS = 3

# ── Misc constants ──────────────────────────────────────────────────

NOT_AVAILABLE = "N/A"
