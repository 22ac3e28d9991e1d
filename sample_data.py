"""Demonstration dashboard shown before any cost or freight data is uploaded."""

from models import (
    CostByTruckType,
    DashboardData,
    FleetKPIs,
    FuelEfficiency,
    FuelTrendRow,
    MonthlyRow,
    TopTruck,
)


def default_dashboard_data() -> DashboardData:
    """A fresh copy on every call; callers may mutate the result."""
    return DashboardData(
        kpis=FleetKPIs(
            total_revenue=5461023.69,
            total_costs=3771645.7,
            profit=1689377.99,
            profit_margin=30.94,
            total_fleet_size=23,
            total_km_traveled=1267630.0,
            total_fuel_consumed=269137.71,
            avg_fuel_efficiency=4.72,
        ),
        revenue_vs_costs=[
            MonthlyRow("2018-01", 260988.32, 42344.65, 11890.88, 138768.12),
            MonthlyRow("2018-02", 240046.95, 41072.14, 9683.1, 140060.93),
            MonthlyRow("2018-03", 290943.43, 42606.23, 16039.25, 139988.4),
            MonthlyRow("2018-04", 279992.68, 42087.55, 13074.3, 139827.31),
            MonthlyRow("2018-05", 303154.03, 43169.56, 9839.19, 139913.72),
            MonthlyRow("2018-06", 282729.57, 42644.65, 16337.23, 139893.26),
        ],
        cost_by_truck_type=[
            CostByTruckType("BOX", 2.507, 144854.86, 47754.52, 221639.02, 414248.4, 165267.0),
            CostByTruckType("SEMI-TRAILER", 3.139, 184047.93, 60293.97, 327667.91, 572009.81, 182215.0),
            CostByTruckType("TRACTOR", 2.833, 148653.26, 35561.62, 185999.06, 370213.94, 130682.0),
            CostByTruckType("TRAILER", 2.562, 424338.84, 123796.39, 943004.78, 1491139.99, 789466.0),
        ],
        fuel_efficiency=[
            FuelEfficiency("BOX", 4.15, 46329.98, 165267.0),
            FuelEfficiency("SEMI-TRAILER", 3.43, 58848.67, 182215.0),
            FuelEfficiency("TRACTOR", 3.0, 47531.75, 130682.0),
            FuelEfficiency("TRAILER", 5.47, 116427.31, 789466.0),
        ],
        fuel_trend=[
            FuelTrendRow("2018-01", 21451.79),
            FuelTrendRow("2018-02", 20800.71),
            FuelTrendRow("2018-03", 21589.7),
            FuelTrendRow("2018-04", 21322.23),
            FuelTrendRow("2018-05", 21871.48),
            FuelTrendRow("2018-06", 21605.51),
        ],
        maintenance_by_year=[],
        top_trucks=[
            TopTruck("23", "TRAILER", "2014", 701472.71, 242823.24, 458649.47, 105966.0, 2.291),
            TopTruck("17", "TRACTOR", "2011", 527629.53, 370213.94, 157415.59, 130682.0, 2.833),
            TopTruck("2", "SEMI-TRAILER", "2011", 350831.42, 225632.71, 125198.71, 72021.0, 3.133),
            TopTruck("36", "SEMI-TRAILER", "2014", 334991.99, 225611.06, 109380.93, 71929.0, 3.137),
            TopTruck("29", "TRAILER", "2008", 329686.93, 241983.08, 87703.85, 105612.0, 2.291),
        ],
    )
