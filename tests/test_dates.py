from datetime import date, timedelta

from flighter.utils.dates import (
    duration_to_minutes, format_duration_minutes, parse_date, to_iso_date, today_in,
)


def test_iso_date_in_text():
    assert parse_date("2025-07-28 flight") == "2025-07-28"


def test_us_numeric_formats(fixed_today):
    assert parse_date("leaving 07/28/2025", today=fixed_today) == "2025-07-28"
    assert parse_date("leaving 7-4-2025", today=fixed_today) == "2025-07-04"


def test_month_name_then_day(fixed_today):
    assert parse_date("New York to Paris July 28", today=fixed_today) == "2025-07-28"
    assert parse_date("on aug 3rd", today=fixed_today) == "2025-08-03"


def test_day_then_month_name(fixed_today):
    assert parse_date("on the 28th july please", today=fixed_today) == "2025-07-28"
    assert parse_date("5 sep 2026", today=fixed_today) == "2026-09-05"


def test_sept_spelling(fixed_today):
    assert parse_date("flights to Denver sept 5", today=fixed_today) == "2025-09-05"
    assert parse_date("leaving 5 sept", today=fixed_today) == "2025-09-05"
    assert parse_date("Sept 12th, 2026", today=fixed_today) == "2026-09-12"


def test_explicit_year_is_kept_even_if_past(fixed_today):
    assert parse_date("march 3 2024", today=fixed_today) == "2024-03-03"


def test_past_month_day_rolls_to_next_year(fixed_today):
    assert parse_date("march 3", today=fixed_today) == "2026-03-03"


def test_today_is_not_rolled_forward(fixed_today):
    assert parse_date("july 1", today=fixed_today) == "2025-07-01"


def test_relative_words(fixed_today):
    assert parse_date("today", today=fixed_today) == "2025-07-01"
    assert parse_date("fly tomorrow", today=fixed_today) == "2025-07-02"
    assert parse_date("yesterday", today=fixed_today) == "2025-06-30"


def test_invalid_calendar_date_falls_through(fixed_today):
    # 2025-02-30 cannot exist; the later "tomorrow" still wins
    assert parse_date("2025-02-30 or tomorrow", today=fixed_today) == "2025-07-02"
    assert parse_date("feb 30", today=fixed_today) == "2025-07-08"
    assert parse_date("2025-13-45", today=fixed_today) == "2025-07-08"


def test_unwired_relative_phrases_use_default(fixed_today):
    assert parse_date("next friday", today=fixed_today) == "2025-07-08"
    assert parse_date("in 2 weeks", today=fixed_today) == "2025-07-08"


def test_no_date_defaults_to_a_week_out():
    expected = (today_in() + timedelta(days=7)).isoformat()
    assert parse_date("flights to Miami") == expected
    assert parse_date("") == expected


def test_month_word_inside_other_words_is_ignored(fixed_today):
    assert parse_date("seats for omar 5 people", today=fixed_today) == "2025-07-08"


def test_to_iso_date_accepts_iso_and_text():
    assert to_iso_date("2025-07-28") == "2025-07-28"
    assert to_iso_date("July 28 2025") == "2025-07-28"
    assert to_iso_date("2025-02-30") == ""
    assert to_iso_date("") == ""


def test_duration_helpers():
    assert duration_to_minutes("PT5H30M") == 330
    assert duration_to_minutes("5h 30m") == 330
    assert duration_to_minutes("PT45M") == 45
    assert duration_to_minutes("") == 0
    assert format_duration_minutes(330) == "5h 30m"
    assert format_duration_minutes(120) == "2h"
    assert format_duration_minutes(45) == "45m"
