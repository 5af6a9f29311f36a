"""Classification of a single person's attendance section."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .lateness import calculate_deduction, compute_lateness, is_day_rate_applicable
from .matching import match_employee, name_match_score
from .models import AttendanceSettings, AttendanceStatus, Employee, ParsedAttendanceEntry

# Checked in this order; the first pattern found anywhere in the section wins.
STATUS_PATTERNS: List[Tuple[AttendanceStatus, re.Pattern[str]]] = [
    (
        AttendanceStatus.APPROVED_OUT,
        re.compile(
            r"OUT\s*-\s*JSP\s*Approved|Approved\s*Leave|Sick\s*Leave\s*-\s*Approved",
            re.IGNORECASE,
        ),
    ),
    (
        AttendanceStatus.WORK_FROM_HOME,
        re.compile(r"WFH|Work\s*from\s*Home|Remote", re.IGNORECASE),
    ),
    (AttendanceStatus.ETA_DELAYED, re.compile(r"ETA\s*(\d{1,2}:\d{2})", re.IGNORECASE)),
    (AttendanceStatus.CHECK_IN, re.compile(r"\bin\b", re.IGNORECASE)),
]

NAME_PATTERN = re.compile(r"^([^\[\d\n]+?)(?=\s*\[?\d|\s*$)")
TIME_PATTERN = re.compile(r"\[?(\d{1,2}:\d{2}\s*(?:AM|PM))\]?", re.IGNORECASE)
ETA_PATTERN = re.compile(r"ETA\s*(\d{1,2}:\d{2})", re.IGNORECASE)
APPROVAL_PATTERN = re.compile(r"OUT\s*-\s*(JSP\s*Approved|[A-Z]+\s*Approved)", re.IGNORECASE)


def determine_status(section: str) -> AttendanceStatus:
    for status, pattern in STATUS_PATTERNS:
        if pattern.search(section):
            return status
    return AttendanceStatus.UNKNOWN


def extract_name(first_line: str) -> str:
    """Return everything before the first digit or bracket on the line."""

    match = NAME_PATTERN.match(first_line)
    return match.group(1).strip() if match else first_line.strip()


def extract_check_in_time(section: str) -> Optional[str]:
    match = TIME_PATTERN.search(section)
    return match.group(1) if match else None


def extract_eta_time(section: str) -> Optional[str]:
    match = ETA_PATTERN.search(section)
    return match.group(1) if match else None


def extract_approval_code(section: str) -> Optional[str]:
    match = APPROVAL_PATTERN.search(section)
    return match.group(1) if match else None


def parse_section(
    section: str,
    roster: Sequence[Employee],
    settings: AttendanceSettings,
) -> Optional[ParsedAttendanceEntry]:
    """Turn one section of the thread into a parsed entry.

    Returns ``None`` only when the section holds no text at all.
    """

    lines = [line.strip() for line in section.splitlines() if line.strip()]
    if not lines:
        return None

    raw_name = extract_name(lines[0])
    check_in_time = extract_check_in_time(section)
    status = determine_status(section)

    employee = match_employee(raw_name, roster)
    confidence = name_match_score(raw_name, employee.name) if employee else 0.0

    lateness = compute_lateness(check_in_time, employee, status, settings)

    return ParsedAttendanceEntry(
        raw_name=raw_name,
        employee_id=employee.id if employee else None,
        check_in_time=check_in_time,
        status=status,
        is_late=lateness.is_late,
        minutes_late=lateness.minutes_late,
        confidence_score=confidence,
        day_rate_applicable=is_day_rate_applicable(status),
        deduction_amount=calculate_deduction(status, lateness.minutes_late, settings),
        deduction_reason=(
            f"Late by {lateness.minutes_late} minutes" if lateness.is_late else None
        ),
        eta_time=extract_eta_time(section),
        approval_code=extract_approval_code(section),
    )


__all__ = [
    "STATUS_PATTERNS",
    "determine_status",
    "extract_name",
    "extract_check_in_time",
    "extract_eta_time",
    "extract_approval_code",
    "parse_section",
]
