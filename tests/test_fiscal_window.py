from __future__ import annotations

from datetime import date, datetime

import pytest

from domain.progress import (
    InvalidParameter,
    fiscal_year_of,
    fiscal_year_window,
    parse_int_param,
    parse_period_params,
    resolve_period,
)


def test_full_fiscal_year_runs_october_to_september() -> None:
    window = resolve_period(2025)
    assert window.start == datetime(2024, 10, 1, 0, 0, 0)
    assert window.end == datetime(2025, 9, 30, 23, 59, 59)


def test_october_belongs_to_previous_calendar_year() -> None:
    window = resolve_period(2025, 10)
    assert window.start == datetime(2024, 10, 1)
    assert window.end == datetime(2024, 10, 31, 23, 59, 59)


def test_march_belongs_to_the_fiscal_year_itself() -> None:
    window = resolve_period(2025, 3)
    assert window.start == datetime(2025, 3, 1)
    assert window.end == datetime(2025, 3, 31, 23, 59, 59)


def test_february_of_a_leap_year_ends_on_the_29th() -> None:
    assert resolve_period(2024, 2).end == datetime(2024, 2, 29, 23, 59, 59)


def test_no_selector_defaults_to_current_month() -> None:
    window = resolve_period(today=datetime(2026, 10, 19, 15, 30))
    assert window.start == datetime(2026, 10, 1)
    assert window.end == datetime(2026, 10, 31, 23, 59, 59)


def test_month_without_year_is_ignored() -> None:
    window = resolve_period(None, 3, today=datetime(2026, 10, 19))
    assert window.start == datetime(2026, 10, 1)


def test_window_bounds_are_inclusive() -> None:
    window = fiscal_year_window(2025)
    assert window.contains(datetime(2024, 10, 1))
    assert window.contains(datetime(2025, 9, 30, 23, 59, 59))
    assert not window.contains(datetime(2025, 10, 1))


@pytest.mark.parametrize("moment, expected", [
    (date(2024, 10, 1), 2025),
    (date(2024, 12, 31), 2025),
    (date(2025, 9, 30), 2025),
    (date(2025, 1, 15), 2025),
])
def test_fiscal_year_of(moment, expected) -> None:
    assert fiscal_year_of(moment) == expected


def test_parse_period_params_accepts_integers_and_blanks() -> None:
    assert parse_period_params("2025", "3") == (2025, 3)
    assert parse_period_params(" 2025 ", "") == (2025, None)
    assert parse_period_params(None, None) == (None, None)


@pytest.mark.parametrize("year, month", [
    ("abc", None),
    ("2025", "march"),
    ("2025", "13"),
    ("2025", "0"),
    ("2025.5", None),
    ("0", None),
    ("1", None),
    ("1", "10"),
    ("10000", "3"),
])
def test_parse_period_params_rejects_malformed_values(year, month) -> None:
    with pytest.raises(InvalidParameter):
        parse_period_params(year, month)


def test_extreme_fiscal_years_still_resolve() -> None:
    assert parse_period_params("2", "10") == (2, 10)
    assert resolve_period(2).start == datetime(1, 10, 1)
    assert resolve_period(9999, 9).end == datetime(9999, 9, 30, 23, 59, 59)


def test_resolve_period_rejects_unrepresentable_years() -> None:
    with pytest.raises(InvalidParameter):
        resolve_period(1)
    with pytest.raises(InvalidParameter):
        resolve_period(10000, 3)


def test_parse_int_param_names_the_offending_parameter() -> None:
    assert parse_int_param("goalId", " 7 ") == 7
    assert parse_int_param("goalId", "") is None
    with pytest.raises(InvalidParameter, match="'goalId'"):
        parse_int_param("goalId", "7a")
