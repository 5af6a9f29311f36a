"""Tests for environment-driven settings."""

from datetime import timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from payroll_pulse.config import load_settings

ENV_NAMES = [
    "TEAM_ROSTER_PATH",
    "DEFAULT_START_TIME",
    "ATTENDANCE_TIMEZONE",
    "GRACE_PERIOD_MINUTES",
    "LATE_PENALTY_PER_MINUTE",
    "STANDARD_WORK_HOURS",
    "OVERTIME_MULTIPLIER",
    "LATE_GRACE_PERIOD_MINUTES",
    "LATE_DEDUCTION_AMOUNT",
    "OFFLINE_DEDUCTION_AMOUNT",
    "PAYROLL_TIMEZONE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "missing.env"))

    assert settings.team_roster_path == Path("team_roster.csv")
    assert settings.attendance.default_start_time == "10:00 AM"
    assert settings.attendance.timezone == "Asia/Manila"
    assert settings.attendance.grace_period_minutes == 5
    assert settings.attendance.late_penalty_per_minute == 0.0
    assert settings.payroll_rules.standard_work_hours == 8.0
    assert settings.payroll_rules.overtime_multiplier == 1.5
    assert settings.payroll_rules.late_deduction_amount == 10.0
    assert settings.payroll_rules.offline_deduction_amount == 50.0
    assert settings.payroll_timezone is timezone.utc


def test_env_file_values_are_read(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "TEAM_ROSTER_PATH=/srv/roster.csv\n"
        "GRACE_PERIOD_MINUTES=0\n"
        "STANDARD_WORK_HOURS=7.5\n"
        "PAYROLL_TIMEZONE=Asia/Manila\n",
        encoding="utf-8",
    )
    for name in ENV_NAMES:
        # load_dotenv writes into os.environ; let monkeypatch restore it.
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)

    settings = load_settings(str(env_file))

    assert settings.team_roster_path == Path("/srv/roster.csv")
    assert settings.attendance.grace_period_minutes == 0
    assert settings.payroll_rules.standard_work_hours == 7.5
    assert settings.payroll_timezone == ZoneInfo("Asia/Manila")


def test_bad_number_is_a_configuration_error(tmp_path, monkeypatch):
    monkeypatch.setenv("OVERTIME_MULTIPLIER", "one and a half")
    with pytest.raises(RuntimeError, match="OVERTIME_MULTIPLIER"):
        load_settings(str(tmp_path / "missing.env"))


@pytest.mark.parametrize("name", ["ATTENDANCE_TIMEZONE", "PAYROLL_TIMEZONE"])
def test_unknown_timezone_is_a_configuration_error(tmp_path, monkeypatch, name):
    monkeypatch.setenv(name, "Mars/Olympus_Mons")
    with pytest.raises(RuntimeError, match=name):
        load_settings(str(tmp_path / "missing.env"))
