"""Core HR module — Employee, Department and CompanySettings models."""

from hr_leave.core_hr.models import CompanySettings, Department, Employee

__all__ = ["CompanySettings", "Department", "Employee"]
