"""Fuzzy matching of free-text names against the employee roster."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .models import Employee

MAX_EDIT_DISTANCE = 2
NAME_SUFFIX_PATTERN = re.compile(r"\s+(jr|sr|iii?|iv)\b")


def levenshtein_distance(first: str, second: str) -> int:
    """Return the insert/delete/substitute edit distance between two strings."""

    previous = list(range(len(first) + 1))
    for row, second_char in enumerate(second, start=1):
        current = [row]
        for col, first_char in enumerate(first, start=1):
            cost = 0 if first_char == second_char else 1
            current.append(
                min(
                    current[col - 1] + 1,
                    previous[col] + 1,
                    previous[col - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def clean_name(name: str) -> str:
    """Lower-case a name and drop generational suffixes (jr, sr, ii, iii, iv)."""

    return NAME_SUFFIX_PATTERN.sub("", name.lower()).strip()


def _is_fuzzy_match(raw_name: str, employee_name: str) -> bool:
    raw = clean_name(raw_name)
    known = clean_name(employee_name)
    if not raw or not known:
        return False
    return (
        raw in known
        or known in raw
        or levenshtein_distance(known, raw) <= MAX_EDIT_DISTANCE
    )


def match_employee(raw_name: str, roster: Sequence[Employee]) -> Optional[Employee]:
    """Return the roster entry a raw name refers to, or ``None``.

    An exact case-insensitive match wins outright. Otherwise the first
    employee in roster order whose cleaned name contains, is contained in,
    or is within two edits of the cleaned raw name is returned.
    """

    if not raw_name or not raw_name.strip():
        return None

    lowered = raw_name.lower()
    for employee in roster:
        if employee.name.lower() == lowered:
            return employee

    for employee in roster:
        if _is_fuzzy_match(raw_name, employee.name):
            return employee
    return None


def name_match_score(raw_name: str, employee_name: str) -> float:
    """Return a 0..1 similarity score, 1.0 only for case-insensitive equality."""

    raw = raw_name.lower()
    known = employee_name.lower()
    if raw == known:
        return 1.0

    distance = levenshtein_distance(raw, known)
    longest = max(len(raw), len(known))
    return max(0.0, 1 - distance / longest)


__all__ = ["levenshtein_distance", "clean_name", "match_employee", "name_match_score"]
