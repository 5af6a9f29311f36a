"""CSV rendering of payroll summaries."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .models import PayrollSummary

CSV_HEADERS = [
    "Employee Name",
    "Total Hours",
    "Regular Hours",
    "Overtime Hours",
    "Late Days",
    "Offline Days",
    "Hourly Rate",
    "Gross Pay",
    "Late Deductions",
    "Offline Deductions",
    "Net Pay",
]


def _money(value: float) -> str:
    return f"${value:.2f}"


def summary_row(summary: PayrollSummary) -> List[str]:
    return [
        summary.employee.name,
        f"{summary.total_hours:.2f}",
        f"{summary.regular_hours:.2f}",
        f"{summary.overtime_hours:.2f}",
        str(summary.late_days),
        str(summary.offline_days),
        _money(summary.employee.hourly_rate),
        _money(summary.gross_pay),
        _money(summary.late_deductions),
        _money(summary.offline_deductions),
        _money(summary.net_pay),
    ]


def export_csv(
    summaries: Sequence[PayrollSummary],
    reasoning: Optional[str] = None,
    confidence: Optional[float] = None,
) -> str:
    """Render summaries as CSV text, header first, one row per summary.

    When ``reasoning`` is given, comment lines describing how the figures
    were produced are written above the header.
    """

    buffer = io.StringIO()
    if reasoning:
        generated = datetime.now(timezone.utc).isoformat()
        buffer.write(f"# Calculation Reasoning: {reasoning}\n")
        buffer.write(f"# Confidence Level: {(confidence or 0) * 100:.1f}%\n")
        buffer.write(f"# Generated on: {generated}\n\n")

    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for summary in summaries:
        writer.writerow(summary_row(summary))
    return buffer.getvalue().rstrip("\n")


__all__ = ["CSV_HEADERS", "summary_row", "export_csv"]
