"""
KPI Definitions: source fields, formula, and business question for each
headline KPI on the fleet dashboard.

Each KPI is defined with:
- required_fields: semantic fields (resolved from uploaded headers) it reads
- formula: short text describing the computation
- business_question: what an operator asks when looking at it
- output_type: scalar

Every ratio defaults to 0 when its denominator is 0.
"""

KPI_DEFINITIONS = {
    "totalRevenue": {
        "name": "totalRevenue",
        "required_fields": ["freight.revenue"],
        "formula": "sum(freight.revenue)",
        "business_question": "How much freight revenue did the fleet earn?",
        "output_type": "scalar",
    },
    "totalCosts": {
        "name": "totalCosts",
        "required_fields": ["cost.fuel", "cost.maintenance", "cost.fixed"],
        "formula": "sum(fuel) + sum(maintenance) + sum(fixed costs)",
        "business_question": "What did it cost to operate the fleet?",
        "output_type": "scalar",
    },
    "profit": {
        "name": "profit",
        "required_fields": ["freight.revenue", "cost.fuel", "cost.maintenance", "cost.fixed"],
        "formula": "totalRevenue - totalCosts",
        "business_question": "Is the fleet making money?",
        "output_type": "scalar",
    },
    "profitMargin": {
        "name": "profitMargin",
        "required_fields": ["freight.revenue", "cost.fuel", "cost.maintenance", "cost.fixed"],
        "formula": "100 * profit / totalRevenue (0 if no revenue)",
        "business_question": "How much of each unit of revenue is kept?",
        "output_type": "scalar",
    },
    "totalFleetSize": {
        "name": "totalFleetSize",
        "required_fields": ["freight.truck_id", "cost.truck_id", "vehicles.truck_id"],
        "formula": "nunique(truck id in freight or cost), else nunique(vehicle master truck id)",
        "business_question": "How many trucks does the data cover?",
        "output_type": "scalar",
    },
    "totalKmTraveled": {
        "name": "totalKmTraveled",
        "required_fields": ["cost.km"],
        "formula": "sum(cost.km)",
        "business_question": "How far did the fleet drive?",
        "output_type": "scalar",
    },
    "totalFuelConsumed": {
        "name": "totalFuelConsumed",
        "required_fields": ["cost.liters"],
        "formula": "sum(cost.liters)",
        "business_question": "How much fuel did the fleet burn?",
        "output_type": "scalar",
    },
    "avgFuelEfficiency": {
        "name": "avgFuelEfficiency",
        "required_fields": ["cost.km", "cost.liters"],
        "formula": "totalKmTraveled / totalFuelConsumed (0 if no fuel)",
        "business_question": "How many km does the fleet get per liter?",
        "output_type": "scalar",
    },
}


def get_kpi_definitions() -> dict[str, dict]:
    return KPI_DEFINITIONS


def get_all_required_fields() -> list[str]:
    """Union of all required fields across KPIs."""
    seen: set[str] = set()
    for defn in KPI_DEFINITIONS.values():
        for name in defn["required_fields"]:
            seen.add(name)
    return sorted(seen)
