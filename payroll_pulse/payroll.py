"""Payroll computation from timestamped check-in/check-out messages."""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple

from .errors import RosterRequiredError
from .models import (
    AttendanceEvent,
    AttendanceLog,
    DashboardMetrics,
    Employee,
    PayrollRules,
    PayrollSummary,
)

logger = logging.getLogger("payroll_pulse.payroll")

DEFAULT_PAYROLL_RULES = PayrollRules()
CHECK_IN_MARKER = ":in:"
CHECK_OUT_MARKER = ":out:"
STANDARD_START = time(9, 0)
WORK_DAYS_PER_WEEK = 5

PayPeriod = Literal["first-half", "second-half", "full-month"]


def derive_attendance_logs(
    events: Iterable[AttendanceEvent],
    roster: Sequence[Employee],
    rules: PayrollRules = DEFAULT_PAYROLL_RULES,
    tz: tzinfo = timezone.utc,
) -> List[AttendanceLog]:
    """Fold raw channel messages into one log per employee per day.

    The last ``:in:`` and last ``:out:`` seen for a day win. Lateness is
    measured against 9:00 AM local to ``tz`` plus the rules' grace period,
    and only for days with both a check-in and a check-out.
    """

    if roster is None:
        raise RosterRequiredError("a roster is required to derive attendance logs")

    by_handle = {employee.slack_user_id: employee for employee in roster}
    logs: Dict[Tuple[str, str], AttendanceLog] = {}

    for event in events:
        employee = by_handle.get(event.user)
        if employee is None:
            continue

        key = (employee.id, event.date)
        log = logs.get(key)
        if log is None:
            log = logs[key] = AttendanceLog(employee_id=employee.id, date=event.date)

        timestamp = datetime.fromtimestamp(event.ts, tz=tz)
        if CHECK_IN_MARKER in event.text:
            log.check_in = timestamp
        elif CHECK_OUT_MARKER in event.text:
            log.check_out = timestamp

    for log in logs.values():
        if log.check_in is None or log.check_out is None:
            log.is_offline = log.check_in is None and log.check_out is None
            log.hours_worked = 0.0
            continue

        hours = (log.check_out - log.check_in).total_seconds() / 3600
        start = datetime.combine(log.check_in.date(), STANDARD_START, tzinfo=log.check_in.tzinfo)
        deadline = start + timedelta(minutes=rules.late_grace_period_minutes)
        log.is_late = log.check_in > deadline
        log.hours_worked = max(0.0, hours)

    logger.debug("Derived %s attendance logs", len(logs))
    return list(logs.values())


def summarize_payroll(
    logs: Iterable[AttendanceLog],
    roster: Sequence[Employee],
    rules: PayrollRules = DEFAULT_PAYROLL_RULES,
) -> List[PayrollSummary]:
    """Return one payroll summary per roster employee, in roster order."""

    if roster is None:
        raise RosterRequiredError("a roster is required to summarize payroll")

    summaries: Dict[str, PayrollSummary] = {
        employee.id: PayrollSummary(employee=employee) for employee in roster
    }
    # Hours up to the standard day, per log; the rest of each day is overtime.
    capped_hours: Dict[str, float] = dict.fromkeys(summaries, 0.0)

    for log in logs:
        summary = summaries.get(log.employee_id)
        if summary is None:
            continue
        summary.total_hours += log.hours_worked
        capped_hours[log.employee_id] += min(log.hours_worked, rules.standard_work_hours)
        if log.is_late:
            summary.late_days += 1
            summary.late_deductions += rules.late_deduction_amount
        if log.is_offline:
            summary.offline_days += 1
            summary.offline_deductions += rules.offline_deduction_amount

    for employee_id, summary in summaries.items():
        rate = summary.employee.hourly_rate
        summary.regular_hours = min(
            capped_hours[employee_id], rules.standard_work_hours * WORK_DAYS_PER_WEEK
        )
        summary.overtime_hours = max(0.0, summary.total_hours - summary.regular_hours)
        summary.gross_pay = (
            summary.regular_hours * rate
            + summary.overtime_hours * rate * rules.overtime_multiplier
        )
        deductions = summary.late_deductions + summary.offline_deductions
        summary.net_pay = max(0.0, summary.gross_pay - deductions)

    return list(summaries.values())


def get_date_range(period: PayPeriod, day: Optional[date] = None) -> Tuple[date, date]:
    """Return the first and last day of the pay period containing ``day``."""

    day = day or date.today()
    last_day = calendar.monthrange(day.year, day.month)[1]
    if period == "first-half":
        return day.replace(day=1), day.replace(day=15)
    if period == "second-half":
        return day.replace(day=16), day.replace(day=last_day)
    if period == "full-month":
        return day.replace(day=1), day.replace(day=last_day)
    raise ValueError("period must be one of: first-half, second-half, full-month")


def filter_logs_by_period(
    logs: Iterable[AttendanceLog], start: date, end: date
) -> List[AttendanceLog]:
    """Keep logs whose ISO date falls within ``start``..``end`` inclusive."""

    selected: List[AttendanceLog] = []
    for log in logs:
        try:
            log_day = date.fromisoformat(log.date)
        except ValueError:
            logger.debug("Skipping log with unreadable date %r", log.date)
            continue
        if start <= log_day <= end:
            selected.append(log)
    return selected


def calculate_dashboard_metrics(
    summaries: Sequence[PayrollSummary],
    roster: Sequence[Employee],
    events: Sequence[AttendanceEvent],
) -> DashboardMetrics:
    active_count = sum(1 for employee in roster if employee.is_active)
    worked = sum(1 for summary in summaries if summary.total_hours > 0)
    total_hours = sum(summary.total_hours for summary in summaries)

    return DashboardMetrics(
        active_employees_count=active_count,
        total_messages=len(events),
        processed_records=len(summaries),
        total_late_days=sum(summary.late_days for summary in summaries),
        total_overtime_hours=sum(summary.overtime_hours for summary in summaries),
        total_deductions=sum(
            summary.late_deductions + summary.offline_deductions for summary in summaries
        ),
        average_hours_worked=total_hours / len(summaries) if summaries else 0.0,
        attendance_rate=(worked / active_count) * 100 if active_count else 0.0,
    )


__all__ = [
    "DEFAULT_PAYROLL_RULES",
    "CHECK_IN_MARKER",
    "CHECK_OUT_MARKER",
    "STANDARD_START",
    "PayPeriod",
    "derive_attendance_logs",
    "summarize_payroll",
    "get_date_range",
    "filter_logs_by_period",
    "calculate_dashboard_metrics",
]
