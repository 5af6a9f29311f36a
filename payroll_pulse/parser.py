"""Free-text attendance thread parser."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from .aggregator import identify_no_shows, summarize, validate_entries
from .classifier import parse_section
from .errors import RosterRequiredError
from .models import AttendanceParseResult, AttendanceSettings, Employee
from .segmenter import extract_date, split_into_sections

logger = logging.getLogger("payroll_pulse.parser")


class AttendanceTextParser:
    """Parse a pasted attendance thread against a fixed roster.

    The roster and settings are read-only for the lifetime of the parser;
    every call to :meth:`parse` builds a fresh result.
    """

    def __init__(
        self,
        roster: Sequence[Employee],
        settings: Optional[AttendanceSettings] = None,
    ) -> None:
        if roster is None:
            raise RosterRequiredError("a roster is required to parse attendance text")
        self.roster = tuple(roster)
        self.settings = settings or AttendanceSettings()

    def parse(self, text: str, today: Optional[date] = None) -> AttendanceParseResult:
        report_date = extract_date(text) or (today or date.today()).isoformat()

        entries = []
        for section in split_into_sections(text):
            entry = parse_section(section, self.roster, self.settings)
            if entry is not None:
                entries.append(entry)

        no_shows = identify_no_shows(entries, self.roster)
        logger.debug(
            "Parsed %s entries for %s (%s no-shows)", len(entries), report_date, len(no_shows)
        )
        return AttendanceParseResult(
            date=report_date,
            entries=entries,
            unmatched_names=[entry.raw_name for entry in entries if not entry.employee_id],
            parsing_errors=validate_entries(entries),
            no_show_employees=no_shows,
            summary=summarize(entries, no_shows),
        )


__all__ = ["AttendanceTextParser"]
