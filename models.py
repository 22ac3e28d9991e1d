"""
Dashboard model: KPI block and the chart-ready tables.

Attributes are snake_case; `to_dict()` emits the camelCase field names the
rendering layer and the ask context read.
"""

from dataclasses import dataclass, field, fields
from typing import Any


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _as_camel_dict(obj: Any) -> dict[str, Any]:
    return {_camel(f.name): getattr(obj, f.name) for f in fields(obj)}


@dataclass
class FleetKPIs:
    total_revenue: float = 0.0
    total_costs: float = 0.0
    profit: float = 0.0
    profit_margin: float = 0.0
    total_fleet_size: int = 0
    total_km_traveled: float = 0.0
    total_fuel_consumed: float = 0.0
    avg_fuel_efficiency: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return _as_camel_dict(self)


@dataclass
class MonthlyRow:
    month: str
    revenue: float = 0.0
    fuel: float = 0.0
    maintenance: float = 0.0
    fixed_costs: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return _as_camel_dict(self)


@dataclass
class CostByTruckType:
    truck_type: str
    cost_per_km: float = 0.0
    total_fuel: float = 0.0
    total_maintenance: float = 0.0
    total_fixed_costs: float = 0.0
    total_cost: float = 0.0
    total_km: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return _as_camel_dict(self)


@dataclass
class FuelEfficiency:
    truck_type: str
    efficiency: float = 0.0
    total_liters: float = 0.0
    total_km: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return _as_camel_dict(self)


@dataclass
class FuelTrendRow:
    month: str
    liters: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return _as_camel_dict(self)


@dataclass
class MaintenanceByYearRow:
    """One year of maintenance spend; `by_type` keeps truck types in first-seen order."""
    year: str
    total: float = 0.0
    by_type: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        row: dict[str, Any] = {"year": self.year, "total": self.total}
        row.update(self.by_type)
        return row


@dataclass
class TopTruck:
    truck_id: str
    truck_type: str = "Unknown"
    year: str = ""
    revenue: float = 0.0
    total_cost: float = 0.0
    profit: float = 0.0
    km_traveled: float = 0.0
    cost_per_km: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return _as_camel_dict(self)


@dataclass
class VehicleRecord:
    truck_type: str = "Unknown"
    trailer_type: str = ""
    year: str = ""


@dataclass
class DashboardData:
    kpis: FleetKPIs = field(default_factory=FleetKPIs)
    revenue_vs_costs: list[MonthlyRow] = field(default_factory=list)
    cost_by_truck_type: list[CostByTruckType] = field(default_factory=list)
    fuel_efficiency: list[FuelEfficiency] = field(default_factory=list)
    fuel_trend: list[FuelTrendRow] = field(default_factory=list)
    maintenance_by_year: list[MaintenanceByYearRow] = field(default_factory=list)
    top_trucks: list[TopTruck] = field(default_factory=list)
    maintenance_truck_types: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kpis": self.kpis.to_dict(),
            "revenueVsCosts": [r.to_dict() for r in self.revenue_vs_costs],
            "costByTruckType": [r.to_dict() for r in self.cost_by_truck_type],
            "fuelEfficiency": [r.to_dict() for r in self.fuel_efficiency],
            "fuelTrend": [r.to_dict() for r in self.fuel_trend],
            "maintenanceByYear": [r.to_dict() for r in self.maintenance_by_year],
            "maintenanceTruckTypes": list(self.maintenance_truck_types),
            "topTrucks": [r.to_dict() for r in self.top_trucks],
        }
