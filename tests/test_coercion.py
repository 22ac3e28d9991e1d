import re
from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from coercion import is_present, to_month_key, to_number, to_text, year_from_month_key


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,234.56", 1234.56),
        ("1.234,56", 1234.56),
        ("1,5", 1.5),
        ("-12.5", -12.5),
        ("$ 2,500.00", 2500.0),
        ("", 0.0),
        ("abc", 0.0),
        (None, 0.0),
        ("1.234.567", 0.0),
        (42, 42.0),
        (np.int64(7), 7.0),
        (np.float64(2.5), 2.5),
    ],
)
def test_to_number(raw, expected):
    assert to_number(raw) == pytest.approx(expected)


def test_to_number_comma_only_is_decimal():
    assert to_number("1,234") == pytest.approx(1.234)


def test_to_number_non_finite_and_bool_are_zero():
    assert to_number(float("nan")) == 0.0
    assert to_number(float("inf")) == 0.0
    assert to_number(True) == 0.0


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", "Unknown"),
        (None, "Unknown"),
        ("2018-01", "2018-01"),
        ("2018-03-15", "2018-03"),
        ("14/03/2018", "2018-03"),
        ("5-6-18", "2018-06"),
        ("3/14/2018", "2018-14"),
        (datetime(2018, 3, 9, 12, 30), "2018-03"),
        (date(2017, 12, 1), "2017-12"),
        (pd.Timestamp("2019-11-30"), "2019-11"),
        (43101, "2018-01"),
        (43159.5, "2018-02"),
        (0, "1900-01"),
        (1, "1900-01"),
        (59, "1900-02"),
        (60, "1900-02"),
        (61, "1900-03"),
        ("zzzzzzzzzz", "zzzzzzz"),
    ],
)
def test_to_month_key(raw, expected):
    assert to_month_key(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("March 2018", "2018-03"),
        ("2018-01-31 10:00", "2018-01"),
        ("10:00", "10:00"),
        ("1:30", "1:30"),
        ("12:00 PM", "12:00 P"),
        ("now", "now"),
        ("today", "today"),
        ("T1", "T1"),
        ("T10", "T10"),
        ("5 PM", "5 PM"),
    ],
)
def test_generic_dates_need_a_written_year(raw, expected):
    assert to_month_key(raw) == expected


def test_to_month_key_is_total():
    inputs = [
        "", None, 43101, -5, float("inf"), "2018-01-31", "3/14/2018", "garbage!!", "x", float("nan"),
        "10:00", "1:30", "12:00 PM", "now", "today", "T1", "T10", "5 PM",
    ]
    for raw in inputs:
        result = to_month_key(raw)
        assert isinstance(result, str)
        if re.match(r"^\d{4}-\d{2}$", result) or result == "Unknown":
            continue
        assert result == ("" if raw is None else str(raw))[:7]


def test_year_from_month_key():
    assert year_from_month_key("2018-03") == "2018"
    assert year_from_month_key("Unknown") == "Unknown"
    assert year_from_month_key("18-03") == "Unknown"


def test_to_text_renders_integral_floats_without_decimal():
    assert to_text(23.0) == "23"
    assert to_text(np.int64(5)) == "5"
    assert to_text(2.5) == "2.5"
    assert to_text(" T1 ") == " T1 "
    assert to_text(None) == ""
    assert to_text(float("nan")) == ""


def test_is_present():
    assert is_present("T1")
    assert is_present("0")
    assert not is_present("")
    assert not is_present(None)
    assert not is_present(0)
    assert not is_present(float("nan"))
