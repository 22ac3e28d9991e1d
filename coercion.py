"""
Best-effort scalar coercion for spreadsheet cells.

Nothing here raises on cell content: unparseable numbers become 0 and
unparseable dates become "Unknown" or a 7-character slice of the raw text.
"""

import math
import re
import warnings
from datetime import date, datetime, timedelta
from typing import Any

import numpy as np
import pandas as pd

UNKNOWN = "Unknown"

_NUMERIC_CHARS = re.compile(r"[^0-9,.\-]")
_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})$")
_YEAR_PREFIX = re.compile(r"^(\d{4})-")
_FOUR_DIGIT_RUN = re.compile(r"(?<!\d)\d{4}(?!\d)")

# Spreadsheet serials count days from 1900-01-00 and include the
# nonexistent 1900-02-29 (serial 60).
_SERIAL_MAX = 2958465
_SERIAL_EPOCH = datetime(1899, 12, 30)
_SERIAL_EPOCH_PRE_LEAP = datetime(1899, 12, 31)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_numeric(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, np.integer, np.floating))


def is_present(value: Any) -> bool:
    """Truthiness of a cell: None, "", 0, False and NaN are absent."""
    if _is_blank(value):
        return False
    return bool(value)


def to_text(value: Any) -> str:
    """String form of an identifier cell. 23.0 -> "23", None -> ""."""
    if _is_blank(value):
        return ""
    if _is_numeric(value) and not isinstance(value, (int, np.integer)):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return str(number)
    if isinstance(value, np.integer):
        return str(int(value))
    return str(value)


def to_number(value: Any) -> float:
    """
    Locale-tolerant number parsing.

    Whichever of ',' and '.' occurs last is the decimal separator; a string
    with commas only uses comma as decimal. "1,234.56" and "1.234,56" both
    give 1234.56.
    """
    if _is_blank(value):
        return 0.0
    if _is_numeric(value):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    raw = str(value).strip()
    if not raw:
        return 0.0
    cleaned = _NUMERIC_CHARS.sub("", raw)
    last_comma = cleaned.rfind(",")
    last_dot = cleaned.rfind(".")
    normalized = cleaned
    if last_comma > -1 and last_dot > -1:
        if last_comma > last_dot:
            normalized = cleaned.replace(".", "").replace(",", ".", 1)
        else:
            normalized = cleaned.replace(",", "")
    elif last_comma > -1:
        normalized = cleaned.replace(",", ".")

    if not normalized:
        return 0.0
    try:
        number = float(normalized)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def serial_to_year_month(serial: float) -> tuple[int, int] | None:
    """Calendar (year, month) of a spreadsheet date serial, or None if out of range."""
    if not math.isfinite(serial) or serial < 0 or serial > _SERIAL_MAX:
        return None
    days = int(math.floor(serial))
    if days == 0:
        return 1900, 1
    if days == 60:
        return 1900, 2
    base = _SERIAL_EPOCH_PRE_LEAP if days < 60 else _SERIAL_EPOCH
    try:
        moment = base + timedelta(days=days)
    except OverflowError:
        return None
    return moment.year, moment.month


def _parse_generic_date(raw: str) -> pd.Timestamp | None:
    """
    Generic parse of date text that spells out a four-digit year. Times of
    day, relative words ("now", "today") and year-less fragments are rejected
    since pandas would fill them from the clock or from year 1.
    """
    years = _FOUR_DIGIT_RUN.findall(raw)
    if not years:
        return None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            parsed = pd.to_datetime(raw, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    if f"{parsed.year:04d}" not in years:
        return None
    return parsed


def to_month_key(value: Any) -> str:
    """
    Period key "YYYY-MM" for a date-like cell.

    Order: blank -> "Unknown"; numeric -> spreadsheet serial; date value;
    D/M/Y or D-M-Y text (2-digit years are 20xx); generic date parsing;
    finally the first 7 characters of the raw text.
    """
    if _is_blank(value):
        return UNKNOWN

    if _is_numeric(value):
        parsed = serial_to_year_month(float(value))
        if parsed:
            return _format_month(*parsed)

    if isinstance(value, (datetime, date)):
        return _format_month(value.year, value.month)

    raw = to_text(value) if _is_numeric(value) else str(value)
    match = _DAY_MONTH_YEAR.match(raw)
    if match:
        year = match.group(3)
        if len(year) == 2:
            year = f"20{year}"
        return f"{year}-{match.group(2).zfill(2)}"

    parsed_date = _parse_generic_date(raw)
    if parsed_date is not None:
        return _format_month(parsed_date.year, parsed_date.month)

    return raw[:7]


def year_from_month_key(month_key: str) -> str:
    match = _YEAR_PREFIX.match(month_key)
    return match.group(1) if match else UNKNOWN
