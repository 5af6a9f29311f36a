"""Tests for roster loading, validation and search."""

import logging

from payroll_pulse.models import Employee
from payroll_pulse.roster import (
    active_employees,
    filter_employees,
    generate_employee_id,
    load_roster_csv,
    validate_employee,
)


def _candidate(**overrides) -> Employee:
    values = dict(
        id="emp_100",
        name="New Hire",
        slack_user_id="U09999999",
        hourly_rate=22.5,
        email="new.hire@company.com",
    )
    values.update(overrides)
    return Employee(**values)


def test_load_roster_csv(roster_file):
    roster = load_roster_csv(roster_file)

    assert [employee.id for employee in roster] == ["emp_001", "emp_002", "emp_003"]
    john = roster[0]
    assert john.hourly_rate == 25.0
    assert john.email == "john@company.com"
    assert john.start_time is None
    assert john.grace_period_minutes is None
    assert roster[2].is_active is False
    assert roster[2].notes == "left in May"


def test_bad_roster_rows_are_skipped(tmp_path, caplog):
    path = tmp_path / "roster.csv"
    path.write_text(
        "id,name,slack_user_id,hourly_rate,grace_period_minutes\n"
        "emp_001,John Smith,U01234567,25,\n"
        ",,U01234599,10,\n"
        "emp_002,Copy Cat,U01234567,25,\n"
        "emp_003,Bad Rate,U01234570,lots,\n"
        ",Jane Doe,U01234568,30,0\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="payroll_pulse.roster"):
        roster = load_roster_csv(path)

    assert [employee.name for employee in roster] == ["John Smith", "Jane Doe"]
    assert roster[1].id == "emp_002"
    assert roster[1].grace_period_minutes == 0
    assert "line 4" in caplog.text
    assert "line 5" in caplog.text


def test_generate_employee_id(payroll_roster):
    assert generate_employee_id([]) == "emp_001"
    assert generate_employee_id(payroll_roster) == "emp_003"


def test_valid_candidate_passes(payroll_roster):
    assert validate_employee(_candidate(), payroll_roster).is_valid


def test_validation_messages(payroll_roster):
    result = validate_employee(
        _candidate(name="X", email="not-an-email", slack_user_id="u123", hourly_rate=0),
        payroll_roster,
    )

    assert result.is_valid is False
    assert set(result.errors) == {"name", "email", "slack_user_id", "hourly_rate"}
    assert result.errors["hourly_rate"] == "Hourly rate must be between $0.01 and $999.99"


def test_duplicates_are_rejected_except_for_the_record_being_edited():
    roster = [_candidate(id="emp_001", email="john@company.com", slack_user_id="U01234567")]
    duplicate = _candidate(email="JOHN@company.com", slack_user_id="U01234567")

    result = validate_employee(duplicate, roster)
    assert result.errors["email"] == "Email address already exists"
    assert result.errors["slack_user_id"] == "Slack User ID already exists"

    assert validate_employee(duplicate, roster, editing_id="emp_001").is_valid


def test_active_employees(thread_roster):
    names = [employee.name for employee in active_employees(thread_roster)]
    assert "Old Timer" not in names
    assert len(names) == 6


def test_filter_employees(thread_roster):
    assert [e.id for e in filter_employees(thread_roster, "SANTOS")] == ["emp_003"]
    assert [e.id for e in filter_employees(thread_roster, "U01234571")] == ["emp_005"]
    assert filter_employees(thread_roster, "  ") == thread_roster
    assert filter_employees(thread_roster, "nobody") == []
