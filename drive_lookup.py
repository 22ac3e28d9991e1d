"""
Truck/driver join index.

Cost rows are the only source carrying both a truck id and a drive id.
Freight rows carry only the truck id, so freight revenue is attributed to a
driver through the (truck id, month) pair: the driver with the most km on
that truck in that month takes the whole month.
"""

import logging
from dataclasses import dataclass

from coercion import is_present, to_month_key, to_number, to_text
from headers import (
    COST_DATE_KEYS,
    DRIVE_ID_KEYS,
    DRIVER_NAME_KEYS,
    KM_KEYS,
    TRUCK_ID_KEYS,
    HeaderMap,
    Record,
    pick_value,
)

logger = logging.getLogger(__name__)


@dataclass
class DriveAssignment:
    drive_id: str
    km: float


def lookup_key(truck_id: str, month_key: str) -> str:
    return f"{truck_id}::{month_key}"


def build_drive_lookup(rows: list[Record], header: HeaderMap) -> dict[str, DriveAssignment]:
    """
    Index cost rows by "truckId::YYYY-MM", keeping the drive id of the row with
    the largest km. Ties keep the first row seen.
    """
    lookup: dict[str, DriveAssignment] = {}
    for row in rows:
        truck_id = to_text(pick_value(row, header, TRUCK_ID_KEYS)).strip()
        drive_id = to_text(pick_value(row, header, DRIVE_ID_KEYS)).strip()
        if not truck_id or not drive_id:
            continue
        month_key = to_month_key(pick_value(row, header, COST_DATE_KEYS))
        km = to_number(pick_value(row, header, KM_KEYS))
        key = lookup_key(truck_id, month_key)
        current = lookup.get(key)
        if current is None or km > current.km:
            lookup[key] = DriveAssignment(drive_id=drive_id, km=km)

    logger.debug("Drive lookup built: %d truck/month keys from %d cost rows", len(lookup), len(rows))
    return lookup


def build_driver_name_map(rows: list[Record], header: HeaderMap) -> dict[str, str]:
    """Drive id -> driver name from the driver master. Rows missing either are ignored."""
    names: dict[str, str] = {}
    for row in rows:
        drive_id = pick_value(row, header, DRIVE_ID_KEYS)
        name = pick_value(row, header, DRIVER_NAME_KEYS)
        if not is_present(drive_id) or not is_present(name):
            continue
        names[to_text(drive_id).strip()] = to_text(name).strip()
    return names
