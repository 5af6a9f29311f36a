"""Core orchestration logic for Payroll Pulse."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import List, Optional, Sequence

from .config import Settings
from .errors import ErrorLog, RosterRequiredError
from .export import export_csv
from .fallback import ComputationRequest, ExternalModel, FallbackOutcome, run_with_fallback
from .models import (
    AttendanceEvent,
    AttendanceLog,
    AttendanceParseResult,
    DashboardMetrics,
    Employee,
    PayrollRules,
    PayrollSummary,
)
from .parser import AttendanceTextParser
from .payroll import (
    PayPeriod,
    calculate_dashboard_metrics,
    derive_attendance_logs,
    filter_logs_by_period,
    get_date_range,
    summarize_payroll,
)
from .roster import active_employees, load_roster_csv

logger = logging.getLogger("payroll_pulse.service")


class PayrollPulseService:
    """High-level service that runs the attendance and payroll pipelines.

    Every call works on its own roster snapshot: either the one passed in or
    the roster file named in the settings.
    """

    def __init__(
        self,
        settings: Settings,
        error_log: ErrorLog,
        external_model: Optional[ExternalModel] = None,
    ) -> None:
        self.settings = settings
        self.error_log = error_log
        self.external_model = external_model
        self._roster: Optional[List[Employee]] = None

    # region Roster
    def load_roster(self) -> List[Employee]:
        roster_path = self.settings.team_roster_path
        if not roster_path.exists():
            raise RosterRequiredError(f"roster file {roster_path} does not exist")
        self._roster = load_roster_csv(roster_path)
        logger.info("Loaded %s employees from %s", len(self._roster), roster_path)
        return self._roster

    def resolve_roster(
        self, employees: Optional[Sequence[Employee]] = None, active_only: bool = False
    ) -> List[Employee]:
        if employees is not None:
            roster = list(employees)
        elif self._roster is not None:
            roster = list(self._roster)
        else:
            roster = self.load_roster()
        return active_employees(roster) if active_only else roster

    # endregion

    # region Attendance text
    def parse_text(
        self,
        text: str,
        employees: Optional[Sequence[Employee]] = None,
        today: Optional[date] = None,
    ) -> AttendanceParseResult:
        parser = AttendanceTextParser(self.resolve_roster(employees), self.settings.attendance)
        result = parser.parse(text, today=today)
        for message in result.parsing_errors:
            self.error_log.handle_error(message, "ATTENDANCE_PARSE", "warning", "PARSE_WARNING")
        return result

    # endregion

    # region Payroll
    def derive_logs(
        self,
        events: Sequence[AttendanceEvent],
        employees: Optional[Sequence[Employee]] = None,
        rules: Optional[PayrollRules] = None,
    ) -> List[AttendanceLog]:
        roster = self.resolve_roster(employees)
        rules = rules or self.settings.payroll_rules

        request = ComputationRequest(
            type="attendance_parsing",
            data={"messages": [asdict(event) for event in events], "employees": roster},
            rules=rules,
            context="Parse attendance messages into structured logs",
        )
        outcome = run_with_fallback(
            self.external_model,
            request,
            lambda: derive_attendance_logs(
                events, roster, rules, tz=self.settings.payroll_timezone
            ),
        )
        self._record_fallback("attendance parsing", outcome)
        return outcome.value

    def calculate_payroll(
        self,
        events: Sequence[AttendanceEvent],
        employees: Optional[Sequence[Employee]] = None,
        rules: Optional[PayrollRules] = None,
        period: Optional[PayPeriod] = None,
        day: Optional[date] = None,
        active_only: bool = False,
    ) -> FallbackOutcome[List[PayrollSummary]]:
        roster = self.resolve_roster(employees, active_only=active_only)
        rules = rules or self.settings.payroll_rules

        logs = self.derive_logs(events, roster, rules)
        if period:
            start, end = get_date_range(period, day)
            logs = filter_logs_by_period(logs, start, end)

        request = ComputationRequest(
            type="payroll_calculation",
            data={"attendance_logs": logs, "employees": roster},
            rules=rules,
            context="Calculate payroll summaries with overtime and deductions",
        )
        outcome = run_with_fallback(
            self.external_model,
            request,
            lambda: summarize_payroll(logs, roster, rules),
        )
        self._record_fallback("payroll calculation", outcome)
        return outcome

    def export_payroll_csv(self, outcome: FallbackOutcome[List[PayrollSummary]]) -> str:
        return export_csv(outcome.value, outcome.reasoning, outcome.confidence)

    def dashboard_metrics(
        self,
        summaries: Sequence[PayrollSummary],
        events: Sequence[AttendanceEvent],
        employees: Optional[Sequence[Employee]] = None,
    ) -> DashboardMetrics:
        return calculate_dashboard_metrics(summaries, self.resolve_roster(employees), events)

    # endregion

    def _record_fallback(self, operation: str, outcome: FallbackOutcome) -> None:
        if outcome.error:
            self.error_log.computation_error(operation, outcome.error)


__all__ = ["PayrollPulseService"]
