"""
Header resolution for loosely-structured spreadsheet exports.

Uploaded sheets differ in capitalization, punctuation and spacing of their
column names, rarely in word choice. Each semantic field therefore has an
ordered list of accepted spellings; a spelling matches when it normalizes to
exactly the same key as a header in the sheet. The first match in priority
order wins. No fuzzy matching.
"""

import re
from typing import Any

Record = dict[str, Any]
HeaderMap = dict[str, str]

_NON_ALNUM = re.compile(r"[^a-z0-9]")

# -----------------------------------------------------------------------------
# Accepted header spellings, in priority order
# -----------------------------------------------------------------------------

TRUCK_ID_KEYS = ["truck id", "truckid", "vehicle id", "id"]
DRIVE_ID_KEYS = ["drive id", "driver id", "id"]
DRIVE_ID_STRICT_KEYS = ["drive id", "driver id"]
DRIVER_NAME_KEYS = ["driver", "driver name", "name"]
TRUCK_TYPE_KEYS = ["truck type", "trucktype"]
TRAILER_TYPE_KEYS = ["trailers type", "trailer type", "trailer"]
MODEL_YEAR_KEYS = ["year"]

COST_DATE_KEYS = ["date", "transaction date", "service date"]
FREIGHT_DATE_KEYS = ["date", "freight date", "invoice date"]

REVENUE_KEYS = ["net revenue", "revenue", "freight revenue", "amount", "total revenue"]
FUEL_COST_KEYS = ["fuel", "fuel cost", "fuelcost"]
MAINTENANCE_KEYS = ["maintenance", "maintenance cost", "service cost"]
FIXED_COST_KEYS = ["fixed costs", "fixed cost", "fixed"]

KM_KEYS = [
    "km",
    "km traveled",
    "km travelled",
    "kmtraveled",
    "kmtravelled",
    "kilometers",
    "kilometres",
    "distance",
    "kms",
    "mileage",
]
LITER_KEYS = ["liters", "litres", "fuel consumed", "fuel liters", "fuelconsumed"]


def normalize_key(value: str) -> str:
    """Lowercase and drop everything outside [a-z0-9]: 'Truck ID' -> 'truckid'."""
    return _NON_ALNUM.sub("", str(value).lower())


def build_header_map(row: Record | None) -> HeaderMap:
    """Map normalized header -> original header, from one record (usually the first)."""
    if not row:
        return {}
    return {normalize_key(key): key for key in row.keys()}


def first_record(rows: list[Record]) -> Record:
    return rows[0] if rows else {}


def pick_value(row: Record, header: HeaderMap, keys: list[str]) -> Any:
    """
    Return the cell under the first accepted spelling present in `header`.
    None when no spelling resolves. An empty cell under a matched header is
    returned as-is; later spellings are not consulted.
    """
    for key in keys:
        original = header.get(normalize_key(key))
        if original:
            return row.get(original)
    return None


def resolve_header(header: HeaderMap, keys: list[str]) -> str | None:
    """Original header name that `pick_value` would read, or None."""
    for key in keys:
        original = header.get(normalize_key(key))
        if original:
            return original
    return None
