"""
Ask context: compact JSON snapshot handed to the question-answering service.

Contains the KPI block, what was uploaded (row counts, column names, field
availability), efficiency rankings and the driver revenue attribution. The
service is told to say so when something it needs is missing, so the
availability flags matter as much as the numbers.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from coercion import UNKNOWN, is_present, to_month_key, to_number, to_text, year_from_month_key
from drive_lookup import DriveAssignment, build_drive_lookup, build_driver_name_map, lookup_key
from efficiency import build_efficiency_table
from headers import (
    DRIVE_ID_KEYS,
    DRIVE_ID_STRICT_KEYS,
    DRIVER_NAME_KEYS,
    FREIGHT_DATE_KEYS,
    REVENUE_KEYS,
    TRUCK_ID_KEYS,
    TRUCK_TYPE_KEYS,
    HeaderMap,
    Record,
    build_header_map,
    first_record,
    pick_value,
)
from kpi import build_dashboard_data

logger = logging.getLogger(__name__)

CONTEXT_TOP_N = 15
FOCUS_YEAR = "2018"
JOIN_METHOD = (
    "Freight rows joined to cost rows by Truck ID + Month; "
    "Drive ID picked by max KM within that key."
)


@dataclass
class RevenueAttribution:
    """Freight revenue credited to drive ids through the truck/month join."""
    by_drive: dict[str, float] = field(default_factory=dict)
    by_year: dict[str, dict[str, float]] = field(default_factory=dict)
    matched: int = 0
    total: int = 0


def attribute_revenue_by_drive(
    freight_rows: list[Record],
    freight_header: HeaderMap,
    drive_lookup: dict[str, DriveAssignment],
) -> RevenueAttribution:
    result = RevenueAttribution()
    for row in freight_rows:
        result.total += 1
        truck_id = to_text(pick_value(row, freight_header, TRUCK_ID_KEYS)).strip()
        revenue = to_number(pick_value(row, freight_header, REVENUE_KEYS))
        month_key = to_month_key(pick_value(row, freight_header, FREIGHT_DATE_KEYS))
        assignment = drive_lookup.get(lookup_key(truck_id, month_key)) if truck_id else None
        if assignment is None or not assignment.drive_id:
            continue
        result.matched += 1
        drive_id = assignment.drive_id
        result.by_drive[drive_id] = result.by_drive.get(drive_id, 0.0) + revenue
        year_bucket = result.by_year.setdefault(year_from_month_key(month_key), {})
        year_bucket[drive_id] = year_bucket.get(drive_id, 0.0) + revenue
    return result


def _revenue_list(revenue: dict[str, float], names: dict[str, str]) -> list[dict[str, Any]]:
    entries = [
        {"driveId": drive_id, "driverName": names.get(drive_id, UNKNOWN), "revenue": amount}
        for drive_id, amount in revenue.items()
    ]
    return sorted(entries, key=lambda e: -e["revenue"])


def _availability(rows: list[Record], header: HeaderMap, keys: list[str]) -> str:
    value = pick_value(first_record(rows), header, keys)
    return "available" if is_present(value) else "missing"


def build_ask_context(
    cost_rows: list[Record],
    vehicle_rows: list[Record],
    freight_rows: list[Record],
    driver_rows: list[Record],
) -> dict[str, Any]:
    """Build the JSON-serializable context for one question. Pure function of its inputs."""
    cost_header = build_header_map(first_record(cost_rows))
    vehicle_header = build_header_map(first_record(vehicle_rows))
    freight_header = build_header_map(first_record(freight_rows))
    driver_header = build_header_map(first_record(driver_rows))

    driver_names = build_driver_name_map(driver_rows, driver_header)
    dashboard = build_dashboard_data(cost_rows, vehicle_rows, freight_rows)
    drive_lookup = build_drive_lookup(cost_rows, cost_header)

    drive_efficiency = build_efficiency_table(cost_rows, cost_header, DRIVE_ID_STRICT_KEYS)
    truck_efficiency = build_efficiency_table(cost_rows, cost_header, TRUCK_ID_KEYS)
    truck_type_efficiency = build_efficiency_table(cost_rows, cost_header, TRUCK_TYPE_KEYS)

    attribution = attribute_revenue_by_drive(freight_rows, freight_header, drive_lookup)
    logger.info("Driver revenue join coverage: %d/%d freight rows", attribution.matched, attribution.total)

    return {
        "kpis": dashboard.kpis.to_dict(),
        "rowCounts": {
            "cost": len(cost_rows),
            "freight": len(freight_rows),
            "vehicles": len(vehicle_rows),
            "drivers": len(driver_rows),
        },
        "availableColumns": {
            "cost": list(first_record(cost_rows).keys()),
            "freight": list(first_record(freight_rows).keys()),
            "vehicles": list(first_record(vehicle_rows).keys()),
            "drivers": list(first_record(driver_rows).keys()),
        },
        "efficiencyByDrive": [
            {**entry.to_dict(), "driverName": driver_names.get(entry.id, UNKNOWN)}
            for entry in drive_efficiency[:CONTEXT_TOP_N]
        ],
        "efficiencyByTruck": [entry.to_dict() for entry in truck_efficiency[:CONTEXT_TOP_N]],
        "efficiencyByTruckType": [entry.to_dict() for entry in truck_type_efficiency[:CONTEXT_TOP_N]],
        "driverFields": {
            "driveId": _availability(driver_rows, driver_header, DRIVE_ID_KEYS),
            "driverName": _availability(driver_rows, driver_header, DRIVER_NAME_KEYS),
        },
        "vehicleFields": {
            "truckId": _availability(vehicle_rows, vehicle_header, TRUCK_ID_KEYS),
            "truckType": _availability(vehicle_rows, vehicle_header, TRUCK_TYPE_KEYS),
        },
        "freightFields": {
            "truckId": _availability(freight_rows, freight_header, TRUCK_ID_KEYS),
            "revenue": _availability(freight_rows, freight_header, REVENUE_KEYS),
        },
        "revenueByDrive": {
            "joinMethod": JOIN_METHOD,
            "joinCoverage": {"matched": attribution.matched, "total": attribution.total},
            "topOverall": _revenue_list(attribution.by_drive, driver_names)[:CONTEXT_TOP_N],
            f"top{FOCUS_YEAR}": _revenue_list(attribution.by_year.get(FOCUS_YEAR, {}), driver_names)[:CONTEXT_TOP_N],
        },
    }
