"""Accrual rules for annual (carry-over) and annually-resetting leave.

Annual leave is earned monthly from the join date. Unused days lapse two
years after they were earned, so the balance can never exceed two years of
entitlement; whatever would have pushed it past that cap is reported as
expired. There is no per-day ledger, so "expired" is the overflow above the
cap and may overlap with days that were in fact taken.

Sick and emergency leave are granted in full on January 1st and stay
available all year. Employees who join mid-year get a pro-rated grant
counting the joining month.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_FLOOR, Decimal

from hr_leave.common.constants import (
    ANNUAL_LEAVE_ELIGIBILITY_MONTHS,
    ANNUAL_LEAVE_EXPIRY_MONTHS,
    ANNUAL_LEAVE_EXPIRY_WARNING_MONTHS,
)
from hr_leave.leave.dates import months_between, year_end, year_start

MONTHS_PER_YEAR = 12
TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def floor_days(value: Decimal) -> Decimal:
    """Round a day count down to 2 decimal places."""
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_FLOOR)


@dataclass(frozen=True)
class CarryOverAccrual:
    """Unrounded accrual figures for a carry-over leave type."""

    months_worked: int
    accrued: Decimal
    expired: Decimal
    expiring_soon: Decimal
    max_accumulation: Decimal


def calculate_carry_over_accrual(
    annual_entitlement: Decimal,
    join_date: date,
    as_of: date,
) -> CarryOverAccrual:
    entitlement = Decimal(annual_entitlement)
    months_worked = months_between(join_date, as_of)

    # Multiply before dividing so whole-year figures stay exact.
    raw_accrued = months_worked * entitlement / MONTHS_PER_YEAR
    max_accumulation = entitlement * ANNUAL_LEAVE_EXPIRY_MONTHS / MONTHS_PER_YEAR

    expired = ZERO
    if months_worked > ANNUAL_LEAVE_EXPIRY_MONTHS and raw_accrued > max_accumulation:
        expired = raw_accrued - max_accumulation

    expiring_soon = ZERO
    warning_from = ANNUAL_LEAVE_EXPIRY_MONTHS - ANNUAL_LEAVE_EXPIRY_WARNING_MONTHS
    if warning_from <= months_worked < ANNUAL_LEAVE_EXPIRY_MONTHS:
        expiring_soon = (months_worked - warning_from) * entitlement / MONTHS_PER_YEAR

    return CarryOverAccrual(
        months_worked=months_worked,
        accrued=min(raw_accrued, max_accumulation),
        expired=expired,
        expiring_soon=expiring_soon,
        max_accumulation=max_accumulation,
    )


def calculate_annual_reset_grant(
    annual_entitlement: Decimal,
    join_date: date,
    as_of: date,
) -> Decimal:
    entitlement = Decimal(annual_entitlement)
    if join_date > year_start(as_of):
        # +1 so the joining month itself is granted.
        months = months_between(join_date, year_end(as_of)) + 1
        return min(entitlement * months / MONTHS_PER_YEAR, entitlement)
    return entitlement


def is_eligible_for_annual_leave(join_date: date, as_of: date) -> bool:
    """Minimum-tenure gate for drawing down annual leave.

    Display-only: accrual still runs from the join date and nothing here
    stops an approved request from being counted as used.
    """
    return months_between(join_date, as_of) >= ANNUAL_LEAVE_ELIGIBILITY_MONTHS
