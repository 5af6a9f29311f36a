"""Tests for thread date extraction and section splitting."""

from conftest import SAMPLE_THREAD

from payroll_pulse.segmenter import extract_date, split_into_sections


def test_extract_date_expands_two_digit_year():
    assert extract_date("Start date 3/7/24\nJohn Smith IN") == "2024-03-07"


def test_extract_date_keeps_four_digit_year():
    assert extract_date("attendance START DATE 12/01/2023") == "2023-12-01"


def test_extract_date_missing_header():
    assert extract_date("John Smith [9:55 AM] IN") is None


def test_split_sample_thread_into_people():
    sections = split_into_sections(SAMPLE_THREAD)
    assert sections == [
        "John Smith [9:55 AM]\nIN",
        "Jane Doe [10:20 AM]\nin, traffic on EDSA",
        "Maria Santos OUT - JSP Approved",
        "Pedro Reyes WFH",
        "Ana Cruz ETA 10:45",
    ]


def test_header_line_is_not_a_section():
    sections = split_into_sections("start date 01/02/24\nJohn Smith 9:00 AM IN\n")
    assert sections == ["John Smith 9:00 AM IN"]


def test_continuation_lines_stay_with_their_person():
    text = "Luis Garcia [9:40 AM]\nno update yet\nstill here"
    assert split_into_sections(text) == [text]


def test_blank_input_has_no_sections():
    assert split_into_sections("\n\n   \n") == []
