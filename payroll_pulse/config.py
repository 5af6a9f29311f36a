"""Configuration helpers for Payroll Pulse."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from .models import AttendanceSettings, PayrollRules


@dataclass(slots=True)
class Settings:
    """Runtime configuration values loaded from environment variables."""

    team_roster_path: Path
    attendance: AttendanceSettings = field(default_factory=AttendanceSettings)
    payroll_rules: PayrollRules = field(default_factory=PayrollRules)
    payroll_timezone: tzinfo = timezone.utc


def _number(name: str, default: str, cast: type = float):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc


def _zone(name: str, raw: str) -> tzinfo:
    if raw.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"{name} must be a known timezone, got {raw!r}") from exc


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from the environment, optionally from a specific file."""

    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    roster_path = Path(os.getenv("TEAM_ROSTER_PATH", "team_roster.csv")).expanduser()

    attendance_timezone = os.getenv("ATTENDANCE_TIMEZONE", "Asia/Manila")
    _zone("ATTENDANCE_TIMEZONE", attendance_timezone)

    attendance = AttendanceSettings(
        default_start_time=os.getenv("DEFAULT_START_TIME", "10:00 AM"),
        timezone=attendance_timezone,
        grace_period_minutes=_number("GRACE_PERIOD_MINUTES", "5", int),
        late_penalty_per_minute=_number("LATE_PENALTY_PER_MINUTE", "0"),
    )
    rules = PayrollRules(
        standard_work_hours=_number("STANDARD_WORK_HOURS", "8"),
        overtime_multiplier=_number("OVERTIME_MULTIPLIER", "1.5"),
        late_grace_period_minutes=_number("LATE_GRACE_PERIOD_MINUTES", "5", int),
        late_deduction_amount=_number("LATE_DEDUCTION_AMOUNT", "10"),
        offline_deduction_amount=_number("OFFLINE_DEDUCTION_AMOUNT", "50"),
    )

    return Settings(
        team_roster_path=roster_path,
        attendance=attendance,
        payroll_rules=rules,
        payroll_timezone=_zone("PAYROLL_TIMEZONE", os.getenv("PAYROLL_TIMEZONE", "UTC")),
    )


__all__ = ["Settings", "load_settings"]
