"""Tests for fuzzy roster name matching."""

import pytest

from payroll_pulse.matching import clean_name, levenshtein_distance, match_employee, name_match_score
from payroll_pulse.models import Employee


def _employee(emp_id: str, name: str) -> Employee:
    return Employee(id=emp_id, name=name, slack_user_id=f"U{emp_id}", hourly_rate=20.0)


def test_levenshtein_distance_counts_single_edits():
    """Insertions, deletions and substitutions each cost one."""
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("abc", "") == 3
    assert levenshtein_distance("same", "same") == 0
    assert levenshtein_distance("flaw", "lawn") == 2


def test_clean_name_drops_generational_suffixes():
    assert clean_name("John Smith Jr") == "john smith"
    assert clean_name("Henry Ford III") == "henry ford"
    assert clean_name("Louis XIV") == "louis xiv"


def test_exact_match_is_case_insensitive(payroll_roster):
    employee = match_employee("JOHN smith", payroll_roster)
    assert employee is not None
    assert employee.id == "emp_001"
    assert name_match_score("JOHN smith", employee.name) == 1.0


def test_typo_within_two_edits_matches(payroll_roster):
    employee = match_employee("Jon Smith", payroll_roster)
    assert employee is not None
    assert employee.id == "emp_001"
    assert name_match_score("Jon Smith", employee.name) == pytest.approx(0.9)


def test_partial_name_matches_by_substring(payroll_roster):
    employee = match_employee("Jane", payroll_roster)
    assert employee is not None
    assert employee.id == "emp_002"
    assert name_match_score("Jane", employee.name) < 1.0


def test_suffix_is_ignored_for_matching(payroll_roster):
    employee = match_employee("John Smith Jr.", payroll_roster)
    assert employee is not None
    assert employee.id == "emp_001"


def test_distant_name_does_not_match(payroll_roster):
    assert match_employee("Xavier Quill", payroll_roster) is None


@pytest.mark.parametrize("raw_name", ["", "   "])
def test_blank_name_never_matches(payroll_roster, raw_name):
    assert match_employee(raw_name, payroll_roster) is None


def test_ambiguous_name_resolves_to_first_in_roster_order():
    """Similar names tie-break on roster order, not on score."""
    first, second = _employee("1", "Ana Cruzado"), _employee("2", "Ana Cruz")

    assert match_employee("Ana Cru", [first, second]) is first
    assert match_employee("Ana Cru", [second, first]) is second


def test_exact_match_beats_earlier_fuzzy_candidate():
    fuzzy, exact = _employee("1", "Ana Cruzado"), _employee("2", "Ana Cruz")
    assert match_employee("ana cruz", [fuzzy, exact]) is exact


def test_score_is_never_negative():
    assert name_match_score("a", "zzzzzz") == 0.0
