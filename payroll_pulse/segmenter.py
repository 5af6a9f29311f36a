"""Splitting of pasted attendance threads into per-person sections."""

from __future__ import annotations

import re
from typing import List, Optional

DATE_PATTERN = re.compile(r"start\s+date\s+(\d{1,2}/\d{1,2}/\d{2,4})", re.IGNORECASE)
HEADER_PATTERN = re.compile(r"start\s+date[^\n]*\n", re.IGNORECASE)
SECTION_BOUNDARY = re.compile(
    r"\n(?=\w+.*(?:\[?\d{1,2}:\d{2}|IN|OUT|WFH|ETA))",
    re.IGNORECASE,
)


def extract_date(text: str) -> Optional[str]:
    """Return the ``start date MM/DD/YY`` header as ``YYYY-MM-DD``, if present."""

    match = DATE_PATTERN.search(text)
    if not match:
        return None
    month, day, year = match.group(1).split("/")
    if len(year) == 2:
        year = f"20{year}"
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def split_into_sections(text: str) -> List[str]:
    """Split the text at lines that look like the start of a new record.

    A new section begins at any line that starts with a word and later
    carries a clock time or one of the IN/OUT/WFH/ETA tokens. Blank sections
    are dropped and the rest are trimmed.
    """

    body = HEADER_PATTERN.sub("", text, count=1)
    return [section.strip() for section in SECTION_BOUNDARY.split(body) if section.strip()]


__all__ = ["extract_date", "split_into_sections"]
