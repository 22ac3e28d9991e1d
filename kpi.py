import logging

from coercion import UNKNOWN, is_present, to_month_key, to_number, to_text, year_from_month_key
from headers import (
    COST_DATE_KEYS,
    FIXED_COST_KEYS,
    FREIGHT_DATE_KEYS,
    FUEL_COST_KEYS,
    KM_KEYS,
    LITER_KEYS,
    MAINTENANCE_KEYS,
    MODEL_YEAR_KEYS,
    REVENUE_KEYS,
    TRAILER_TYPE_KEYS,
    TRUCK_ID_KEYS,
    TRUCK_TYPE_KEYS,
    HeaderMap,
    Record,
    build_header_map,
    first_record,
    pick_value,
    resolve_header,
)
from models import (
    CostByTruckType,
    DashboardData,
    FleetKPIs,
    FuelEfficiency,
    FuelTrendRow,
    MaintenanceByYearRow,
    MonthlyRow,
    TopTruck,
    VehicleRecord,
)
from sample_data import default_dashboard_data

logger = logging.getLogger(__name__)

TOP_TRUCKS_LIMIT = 10


def build_vehicle_map(rows: list[Record], header: HeaderMap) -> dict[str, VehicleRecord]:
    vehicles: dict[str, VehicleRecord] = {}
    for row in rows:
        truck_id = pick_value(row, header, TRUCK_ID_KEYS)
        if not is_present(truck_id):
            continue
        truck_type = pick_value(row, header, TRUCK_TYPE_KEYS)
        vehicles[to_text(truck_id).strip()] = VehicleRecord(
            truck_type=UNKNOWN if truck_type is None else to_text(truck_type),
            trailer_type=to_text(pick_value(row, header, TRAILER_TYPE_KEYS)),
            year=to_text(pick_value(row, header, MODEL_YEAR_KEYS)),
        )
    return vehicles


def _warn_missing(source: str, header: HeaderMap, fields: dict[str, list[str]]) -> None:
    if not header:
        return
    for name, keys in fields.items():
        if resolve_header(header, keys) is None:
            logger.warning("%s table: no column for %s (tried %s)", source, name, keys)


def build_dashboard_data(
    cost_rows: list[Record],
    vehicle_rows: list[Record],
    freight_rows: list[Record],
) -> DashboardData:
    """
    Reduce cost, vehicle master and freight records into the dashboard model.

    Returns the demonstration dataset only when both cost and freight are
    empty; partial uploads are always aggregated.
    """
    if not cost_rows and not freight_rows:
        logger.info("No cost or freight rows; using demonstration dataset")
        return default_dashboard_data()

    vehicle_header = build_header_map(first_record(vehicle_rows))
    cost_header = build_header_map(first_record(cost_rows))
    freight_header = build_header_map(first_record(freight_rows))

    _warn_missing("Freight", freight_header, {"truck id": TRUCK_ID_KEYS, "revenue": REVENUE_KEYS, "date": FREIGHT_DATE_KEYS})
    _warn_missing("Cost", cost_header, {"truck id": TRUCK_ID_KEYS, "km": KM_KEYS, "liters": LITER_KEYS, "date": COST_DATE_KEYS})

    vehicle_map = build_vehicle_map(vehicle_rows, vehicle_header)

    monthly: dict[str, MonthlyRow] = {}
    fuel_trend: dict[str, float] = {}
    cost_by_type: dict[str, CostByTruckType] = {}
    efficiency_by_type: dict[str, FuelEfficiency] = {}
    maintenance_by_year: dict[str, MaintenanceByYearRow] = {}
    maintenance_types: dict[str, None] = {}
    top_trucks: dict[str, TopTruck] = {}
    truck_ids: set[str] = set()

    total_revenue = 0.0
    total_fuel = 0.0
    total_maintenance = 0.0
    total_fixed = 0.0
    total_km = 0.0
    total_liters = 0.0

    def ensure_monthly(month_key: str) -> MonthlyRow:
        if month_key not in monthly:
            monthly[month_key] = MonthlyRow(month=month_key)
        return monthly[month_key]

    # Pass 1: freight revenue
    for row in freight_rows:
        truck_id = to_text(pick_value(row, freight_header, TRUCK_ID_KEYS)).strip()
        revenue = to_number(pick_value(row, freight_header, REVENUE_KEYS))
        month_key = to_month_key(pick_value(row, freight_header, FREIGHT_DATE_KEYS))

        ensure_monthly(month_key).revenue += revenue
        total_revenue += revenue

        if truck_id:
            truck_ids.add(truck_id)
            record = top_trucks.get(truck_id)
            if record is None:
                vehicle = vehicle_map.get(truck_id)
                record = top_trucks[truck_id] = TopTruck(
                    truck_id=truck_id,
                    truck_type=(vehicle.truck_type if vehicle else "") or UNKNOWN,
                    year=vehicle.year if vehicle else "",
                )
            record.revenue += revenue
            record.profit = record.revenue - record.total_cost

    # Pass 2: operating costs
    for row in cost_rows:
        truck_id = to_text(pick_value(row, cost_header, TRUCK_ID_KEYS)).strip()
        row_truck_type = to_text(pick_value(row, cost_header, TRUCK_TYPE_KEYS)).strip()
        vehicle = vehicle_map.get(truck_id)
        truck_type = (vehicle.truck_type if vehicle else "") or row_truck_type or UNKNOWN

        fuel = to_number(pick_value(row, cost_header, FUEL_COST_KEYS))
        maintenance = to_number(pick_value(row, cost_header, MAINTENANCE_KEYS))
        fixed_costs = to_number(pick_value(row, cost_header, FIXED_COST_KEYS))
        km = to_number(pick_value(row, cost_header, KM_KEYS))
        liters = to_number(pick_value(row, cost_header, LITER_KEYS))
        row_cost = fuel + maintenance + fixed_costs

        total_fuel += fuel
        total_maintenance += maintenance
        total_fixed += fixed_costs
        total_km += km
        total_liters += liters

        month_key = to_month_key(pick_value(row, cost_header, COST_DATE_KEYS))
        year_key = year_from_month_key(month_key)
        month_row = ensure_monthly(month_key)
        month_row.fuel += fuel
        month_row.maintenance += maintenance
        month_row.fixed_costs += fixed_costs

        fuel_trend[month_key] = fuel_trend.get(month_key, 0.0) + liters

        year_row = maintenance_by_year.get(year_key)
        if year_row is None:
            year_row = maintenance_by_year[year_key] = MaintenanceByYearRow(year=year_key)
        year_row.total += maintenance
        year_row.by_type[truck_type] = year_row.by_type.get(truck_type, 0.0) + maintenance
        maintenance_types.setdefault(truck_type, None)

        type_cost = cost_by_type.get(truck_type)
        if type_cost is None:
            type_cost = cost_by_type[truck_type] = CostByTruckType(truck_type=truck_type)
        type_cost.total_fuel += fuel
        type_cost.total_maintenance += maintenance
        type_cost.total_fixed_costs += fixed_costs
        type_cost.total_cost += row_cost
        type_cost.total_km += km

        type_efficiency = efficiency_by_type.get(truck_type)
        if type_efficiency is None:
            type_efficiency = efficiency_by_type[truck_type] = FuelEfficiency(truck_type=truck_type)
        type_efficiency.total_liters += liters
        type_efficiency.total_km += km

        if truck_id:
            truck_ids.add(truck_id)
            record = top_trucks.get(truck_id)
            if record is None:
                record = top_trucks[truck_id] = TopTruck(
                    truck_id=truck_id,
                    truck_type=truck_type,
                    year=vehicle.year if vehicle else "",
                )
            if record.truck_type == UNKNOWN and truck_type != UNKNOWN:
                record.truck_type = truck_type
            record.total_cost += row_cost
            record.km_traveled += km
            record.profit = record.revenue - record.total_cost

    # Finalization
    for item in cost_by_type.values():
        item.cost_per_km = item.total_cost / item.total_km if item.total_km else 0.0
    for item in efficiency_by_type.values():
        item.efficiency = item.total_km / item.total_liters if item.total_liters else 0.0
    for truck in top_trucks.values():
        truck.cost_per_km = truck.total_cost / truck.km_traveled if truck.km_traveled else 0.0

    ranked_trucks = sorted(top_trucks.values(), key=lambda t: -t.profit)[:TOP_TRUCKS_LIMIT]

    total_costs = total_fuel + total_maintenance + total_fixed
    profit = total_revenue - total_costs
    kpis = FleetKPIs(
        total_revenue=total_revenue,
        total_costs=total_costs,
        profit=profit,
        profit_margin=(profit / total_revenue * 100) if total_revenue else 0.0,
        total_fleet_size=len(truck_ids) or len(vehicle_map),
        total_km_traveled=total_km,
        total_fuel_consumed=total_liters,
        avg_fuel_efficiency=total_km / total_liters if total_liters else 0.0,
    )

    logger.info(
        "Dashboard built: %d freight rows, %d cost rows, %d vehicles, %d months, %d trucks",
        len(freight_rows), len(cost_rows), len(vehicle_map), len(monthly), len(truck_ids),
    )

    return DashboardData(
        kpis=kpis,
        revenue_vs_costs=sorted(monthly.values(), key=lambda r: r.month),
        cost_by_truck_type=list(cost_by_type.values()),
        fuel_efficiency=list(efficiency_by_type.values()),
        fuel_trend=[FuelTrendRow(month=m, liters=v) for m, v in sorted(fuel_trend.items())],
        maintenance_by_year=sorted(maintenance_by_year.values(), key=lambda r: r.year),
        top_trucks=ranked_trucks,
        maintenance_truck_types=list(maintenance_types),
    )