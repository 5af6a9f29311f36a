"""Shared fixtures for the Payroll Pulse test suite."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List

import pytest

from payroll_pulse.config import Settings
from payroll_pulse.errors import ErrorLog
from payroll_pulse.models import AttendanceEvent, AttendanceSettings, Employee
from payroll_pulse.service import PayrollPulseService

SAMPLE_THREAD = """Start date 03/07/24
John Smith [9:55 AM]
IN
Jane Doe [10:20 AM]
in, traffic on EDSA
Maria Santos OUT - JSP Approved
Pedro Reyes WFH
Ana Cruz ETA 10:45
"""

ROSTER_CSV = """id,name,slack_user_id,hourly_rate,status,email,start_time,timezone,grace_period_minutes,notes
emp_001,John Smith,U01234567,25,active,john@company.com,,,,
emp_002,Jane Doe,U01234568,30,active,jane@company.com,,,,
emp_003,Maria Santos,U01234569,20,inactive,,,,,left in May
"""


def make_event(user: str, text: str, hour: int, minute: int = 0, day: int = 1) -> AttendanceEvent:
    moment = datetime(2024, 1, day, hour, minute, tzinfo=timezone.utc)
    return AttendanceEvent(user=user, text=text, ts=moment.timestamp(), date=moment.date().isoformat())


@pytest.fixture
def payroll_roster() -> List[Employee]:
    return [
        Employee(id="emp_001", name="John Smith", slack_user_id="U01234567", hourly_rate=25.0),
        Employee(id="emp_002", name="Jane Doe", slack_user_id="U01234568", hourly_rate=30.0),
    ]


@pytest.fixture
def thread_roster(payroll_roster: List[Employee]) -> List[Employee]:
    return payroll_roster + [
        Employee(id="emp_003", name="Maria Santos", slack_user_id="U01234569", hourly_rate=20.0),
        Employee(id="emp_004", name="Pedro Reyes", slack_user_id="U01234570", hourly_rate=20.0),
        Employee(id="emp_005", name="Ana Cruz", slack_user_id="U01234571", hourly_rate=20.0),
        Employee(id="emp_006", name="Luis Garcia", slack_user_id="U01234572", hourly_rate=20.0),
        Employee(
            id="emp_007",
            name="Old Timer",
            slack_user_id="U01234573",
            hourly_rate=20.0,
            status="inactive",
        ),
    ]


@pytest.fixture
def round_trip_events() -> List[AttendanceEvent]:
    return [
        make_event("U01234567", ":in: Good morning!", 9),
        make_event("U01234567", ":out: Heading home!", 17),
        make_event("U01234568", ":in: Sorry I'm late!", 10),
        make_event("U01234568", ":out: Working late tonight!", 19),
    ]


@pytest.fixture
def attendance_settings() -> AttendanceSettings:
    return AttendanceSettings()


@pytest.fixture
def roster_file(tmp_path: Path) -> Path:
    path = tmp_path / "team_roster.csv"
    path.write_text(ROSTER_CSV, encoding="utf-8")
    return path


@pytest.fixture
def settings(roster_file: Path) -> Settings:
    return Settings(team_roster_path=roster_file)


@pytest.fixture
def error_log() -> ErrorLog:
    return ErrorLog()


@pytest.fixture
def service(settings: Settings, error_log: ErrorLog) -> PayrollPulseService:
    return PayrollPulseService(settings, error_log)
