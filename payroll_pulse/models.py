"""Dataclasses representing Payroll Pulse domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class AttendanceStatus(str, Enum):
    CHECK_IN = "check_in"
    APPROVED_OUT = "approved_out"
    WORK_FROM_HOME = "work_from_home"
    ETA_DELAYED = "eta_delayed"
    NO_SHOW = "no_show"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Employee:
    id: str
    name: str
    slack_user_id: str
    hourly_rate: float
    status: str = "active"
    email: str | None = None
    start_time: str | None = None
    timezone: str | None = None
    grace_period_minutes: int | None = None
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"


@dataclass(frozen=True, slots=True)
class AttendanceEvent:
    """A single timestamped chat message from the attendance channel."""

    user: str
    text: str
    ts: float
    date: str


@dataclass(slots=True)
class AttendanceLog:
    employee_id: str
    date: str
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    is_late: bool = False
    is_offline: bool = False
    hours_worked: float = 0.0


@dataclass(frozen=True, slots=True)
class AttendanceSettings:
    """Defaults for the free-text path, overridable per employee."""

    default_start_time: str = "10:00 AM"
    timezone: str = "Asia/Manila"
    grace_period_minutes: int = 5
    late_penalty_per_minute: float = 0.0


@dataclass(frozen=True, slots=True)
class PayrollRules:
    standard_work_hours: float = 8.0
    overtime_multiplier: float = 1.5
    late_grace_period_minutes: int = 5
    late_deduction_amount: float = 10.0
    offline_deduction_amount: float = 50.0


@dataclass(slots=True)
class ParsedAttendanceEntry:
    raw_name: str
    status: AttendanceStatus
    employee_id: Optional[str] = None
    check_in_time: Optional[str] = None
    is_late: bool = False
    minutes_late: int = 0
    confidence_score: float = 0.0
    day_rate_applicable: bool = True
    deduction_amount: float = 0.0
    deduction_reason: Optional[str] = None
    eta_time: Optional[str] = None
    approval_code: Optional[str] = None


@dataclass(slots=True)
class ParseSummary:
    total_entries: int = 0
    check_ins: int = 0
    approved_absences: int = 0
    work_from_home: int = 0
    late_arrivals: int = 0
    no_shows: int = 0
    unmatched: int = 0
    total_deductions: float = 0.0


@dataclass(slots=True)
class AttendanceParseResult:
    date: str
    entries: List[ParsedAttendanceEntry] = field(default_factory=list)
    unmatched_names: List[str] = field(default_factory=list)
    parsing_errors: List[str] = field(default_factory=list)
    no_show_employees: List[str] = field(default_factory=list)
    summary: ParseSummary = field(default_factory=ParseSummary)


@dataclass(slots=True)
class PayrollSummary:
    employee: Employee
    total_hours: float = 0.0
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    late_days: int = 0
    offline_days: int = 0
    late_deductions: float = 0.0
    offline_deductions: float = 0.0
    gross_pay: float = 0.0
    net_pay: float = 0.0


@dataclass(slots=True)
class DashboardMetrics:
    active_employees_count: int = 0
    total_messages: int = 0
    processed_records: int = 0
    total_late_days: int = 0
    total_overtime_hours: float = 0.0
    total_deductions: float = 0.0
    average_hours_worked: float = 0.0
    attendance_rate: float = 0.0


__all__ = [
    "AttendanceStatus",
    "Employee",
    "AttendanceEvent",
    "AttendanceLog",
    "AttendanceSettings",
    "PayrollRules",
    "ParsedAttendanceEntry",
    "ParseSummary",
    "AttendanceParseResult",
    "PayrollSummary",
    "DashboardMetrics",
]
