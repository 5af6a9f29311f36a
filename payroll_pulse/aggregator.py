"""Roll-ups over parsed attendance entries."""

from __future__ import annotations

from typing import List, Sequence

from .models import AttendanceStatus, Employee, ParsedAttendanceEntry, ParseSummary


def identify_no_shows(
    entries: Sequence[ParsedAttendanceEntry], roster: Sequence[Employee]
) -> List[str]:
    """Return the names of active employees with no matched entry."""

    present_ids = {entry.employee_id for entry in entries if entry.employee_id}
    return [
        employee.name
        for employee in roster
        if employee.is_active and employee.id not in present_ids
    ]


def summarize(entries: Sequence[ParsedAttendanceEntry], no_shows: Sequence[str]) -> ParseSummary:
    def count(status: AttendanceStatus) -> int:
        return sum(1 for entry in entries if entry.status is status)

    return ParseSummary(
        total_entries=len(entries),
        check_ins=count(AttendanceStatus.CHECK_IN),
        approved_absences=count(AttendanceStatus.APPROVED_OUT),
        work_from_home=count(AttendanceStatus.WORK_FROM_HOME),
        late_arrivals=sum(1 for entry in entries if entry.is_late),
        no_shows=len(no_shows),
        unmatched=sum(1 for entry in entries if not entry.employee_id),
        total_deductions=sum(entry.deduction_amount for entry in entries),
    )


def validate_entries(entries: Sequence[ParsedAttendanceEntry]) -> List[str]:
    """Return advisory messages for unmatched names and unknown statuses."""

    errors: List[str] = []
    for entry in entries:
        if not entry.employee_id and entry.raw_name:
            errors.append(f"Unknown employee: {entry.raw_name}")
        if entry.status is AttendanceStatus.UNKNOWN:
            errors.append(f"Could not determine status for: {entry.raw_name}")
    return errors


__all__ = ["identify_no_shows", "summarize", "validate_entries"]
