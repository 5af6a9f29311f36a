"""Roster loading, validation and lookup helpers."""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .models import Employee

logger = logging.getLogger("payroll_pulse.roster")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SLACK_ID_PATTERN = re.compile(r"^U[A-Z0-9]{8,}$")
MIN_HOURLY_RATE = 0.01
MAX_HOURLY_RATE = 999.99


@dataclass(slots=True)
class ValidationResult:
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def generate_employee_id(roster: Iterable[Employee]) -> str:
    """Return the next ``emp_NNN`` id after the highest numeric one in use."""

    highest = 0
    for employee in roster:
        suffix = employee.id.replace("emp_", "")
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"emp_{highest + 1:03d}"


def validate_employee(
    candidate: Employee,
    roster: Sequence[Employee],
    editing_id: Optional[str] = None,
) -> ValidationResult:
    result = ValidationResult()
    others = [employee for employee in roster if employee.id != editing_id]

    name = candidate.name.strip()
    if not name:
        result.errors["name"] = "Name is required"
    elif not 2 <= len(name) <= 50:
        result.errors["name"] = "Name must be between 2 and 50 characters"

    email = (candidate.email or "").strip()
    if email:
        if not EMAIL_PATTERN.match(email):
            result.errors["email"] = "Please enter a valid email address"
        elif any((other.email or "").lower() == email.lower() for other in others):
            result.errors["email"] = "Email address already exists"

    slack_user_id = candidate.slack_user_id.strip()
    if not slack_user_id:
        result.errors["slack_user_id"] = "Slack User ID is required"
    elif not SLACK_ID_PATTERN.match(slack_user_id):
        result.errors["slack_user_id"] = (
            "Slack User ID must start with U followed by 8+ alphanumeric characters"
        )
    elif any(other.slack_user_id == slack_user_id for other in others):
        result.errors["slack_user_id"] = "Slack User ID already exists"

    if not MIN_HOURLY_RATE <= candidate.hourly_rate <= MAX_HOURLY_RATE:
        result.errors["hourly_rate"] = "Hourly rate must be between $0.01 and $999.99"

    return result


def _optional_int(value: Optional[str]) -> Optional[int]:
    value = (value or "").strip()
    return int(value) if value else None


def load_roster_csv(path: Path) -> List[Employee]:
    """Read the roster file, skipping rows that fail validation."""

    roster: List[Employee] = []
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for line_no, row in enumerate(reader, start=2):
            if not (row.get("name") or "").strip():
                continue
            try:
                employee = Employee(
                    id=(row.get("id") or "").strip() or generate_employee_id(roster),
                    name=row["name"].strip(),
                    slack_user_id=(row.get("slack_user_id") or "").strip(),
                    hourly_rate=float(row.get("hourly_rate") or 0),
                    status=(row.get("status") or "active").strip() or "active",
                    email=(row.get("email") or "").strip() or None,
                    start_time=(row.get("start_time") or "").strip() or None,
                    timezone=(row.get("timezone") or "").strip() or None,
                    grace_period_minutes=_optional_int(row.get("grace_period_minutes")),
                    notes=(row.get("notes") or "").strip() or None,
                )
            except ValueError as exc:
                logger.warning("Skipping roster line %s: %s", line_no, exc)
                continue

            validation = validate_employee(employee, roster)
            if not validation.is_valid:
                logger.warning("Skipping roster line %s: %s", line_no, validation.errors)
                continue
            roster.append(employee)
    return roster


def active_employees(roster: Iterable[Employee]) -> List[Employee]:
    return [employee for employee in roster if employee.is_active]


def filter_employees(roster: Sequence[Employee], term: str) -> List[Employee]:
    """Case-insensitive search over name, email, id and Slack handle."""

    if not term.strip():
        return list(roster)
    needle = term.lower()
    return [
        employee
        for employee in roster
        if needle in employee.name.lower()
        or needle in (employee.email or "").lower()
        or needle in employee.id.lower()
        or needle in employee.slack_user_id.lower()
    ]


__all__ = [
    "ValidationResult",
    "generate_employee_id",
    "validate_employee",
    "load_roster_csv",
    "active_employees",
    "filter_employees",
]
