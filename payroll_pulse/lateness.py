"""Lateness and deduction rules for the free-text attendance path."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .models import AttendanceSettings, AttendanceStatus, Employee

logger = logging.getLogger("payroll_pulse.lateness")

CLOCK_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(AM|PM)?\s*$", re.IGNORECASE)
NO_SHOW_DAY_RATE = 1.0
EXCUSED_STATUSES = {AttendanceStatus.APPROVED_OUT, AttendanceStatus.WORK_FROM_HOME}


@dataclass(slots=True)
class Lateness:
    is_late: bool
    minutes_late: int


def parse_clock_time(value: str) -> int:
    """Return minutes since midnight for ``H:MM`` with an optional AM/PM."""

    match = CLOCK_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"unrecognised clock time: {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    meridiem = (match.group(3) or "").upper()
    if minutes > 59 or hours > 23 or (meridiem and not 1 <= hours <= 12):
        raise ValueError(f"clock time out of range: {value!r}")

    if meridiem == "PM" and hours != 12:
        hours += 12
    elif meridiem == "AM" and hours == 12:
        hours = 0
    return hours * 60 + minutes


def compute_lateness(
    check_in_time: Optional[str],
    employee: Optional[Employee],
    status: AttendanceStatus,
    settings: AttendanceSettings,
) -> Lateness:
    """Compare a check-in against the effective start time and grace period.

    Per-employee start time and grace period override the defaults when
    set. Unparseable times are treated as on time.
    """

    if not check_in_time or status in EXCUSED_STATUSES:
        return Lateness(is_late=False, minutes_late=0)

    start_time = settings.default_start_time
    grace_period = settings.grace_period_minutes
    if employee is not None:
        if employee.start_time:
            start_time = employee.start_time
        if employee.grace_period_minutes is not None:
            grace_period = employee.grace_period_minutes

    try:
        diff_minutes = parse_clock_time(check_in_time) - parse_clock_time(start_time)
    except ValueError as exc:
        logger.debug("Treating %r as on time: %s", check_in_time, exc)
        return Lateness(is_late=False, minutes_late=0)

    minutes_late = round(max(0, diff_minutes - grace_period))
    return Lateness(is_late=minutes_late > 0, minutes_late=minutes_late)


def calculate_deduction(
    status: AttendanceStatus, minutes_late: int, settings: AttendanceSettings
) -> float:
    """Return the deduction for an entry.

    A no-show forfeits the whole day rate (expressed as the coefficient 1.0),
    excused absences cost nothing, anything else pays the per-minute penalty.
    """

    if status is AttendanceStatus.NO_SHOW:
        return NO_SHOW_DAY_RATE
    if status in EXCUSED_STATUSES:
        return 0.0
    return minutes_late * settings.late_penalty_per_minute


def is_day_rate_applicable(status: AttendanceStatus) -> bool:
    return status is not AttendanceStatus.NO_SHOW


__all__ = [
    "Lateness",
    "parse_clock_time",
    "compute_lateness",
    "calculate_deduction",
    "is_day_rate_applicable",
]
