"""MCP server exposing Payroll Pulse tools."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .config import load_settings
from .errors import ErrorLog
from .models import AttendanceEvent
from .service import PayrollPulseService

mcp = FastMCP("payroll-pulse")

_settings = load_settings()
_error_log = ErrorLog()
_service = PayrollPulseService(_settings, _error_log)


def _ensure_date(day_str: Optional[str] = None):
    if not day_str:
        return None
    return datetime.strptime(day_str, "%Y-%m-%d").date()


def _events(events: List[Dict[str, Any]]) -> List[AttendanceEvent]:
    return [
        AttendanceEvent(
            user=event["user"],
            text=event.get("text", ""),
            ts=float(event["ts"]),
            date=event["date"],
        )
        for event in events
    ]


@mcp.tool()
async def parse_attendance_text(text: str, date: Optional[str] = None) -> dict:
    """Parse a pasted attendance thread against the team roster."""

    result = _service.parse_text(text, today=_ensure_date(date))
    return asdict(result)


@mcp.tool()
async def calculate_payroll(
    events: List[Dict[str, Any]],
    period: Optional[str] = None,
    date: Optional[str] = None,
) -> dict:
    """Return payroll summaries for check-in/check-out messages.

    Each event needs ``user`` (Slack id), ``text``, ``ts`` and ``date``.
    """

    outcome = _service.calculate_payroll(
        _events(events), period=period, day=_ensure_date(date)
    )
    return {
        "summaries": [asdict(summary) for summary in outcome.value],
        "used_fallback": outcome.used_fallback,
        "error": outcome.error,
    }


@mcp.tool()
async def export_payroll_csv(events: List[Dict[str, Any]], period: Optional[str] = None) -> str:
    """Return the payroll summaries for the events as CSV text."""

    outcome = _service.calculate_payroll(_events(events), period=period)
    return _service.export_payroll_csv(outcome)


__all__ = [
    "mcp",
    "parse_attendance_text",
    "calculate_payroll",
    "export_payroll_csv",
]
