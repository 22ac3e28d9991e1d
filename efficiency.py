import logging
from dataclasses import dataclass

from coercion import to_number, to_text
from headers import KM_KEYS, LITER_KEYS, HeaderMap, Record, pick_value

logger = logging.getLogger(__name__)


@dataclass
class EfficiencyRow:
    """Distance per fuel volume for one driver, truck or truck type."""
    id: str
    total_km: float = 0.0
    total_liters: float = 0.0
    km_per_liter: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "totalKm": self.total_km,
            "totalLiters": self.total_liters,
            "kmPerLiter": self.km_per_liter,
        }


def build_efficiency_table(
    rows: list[Record],
    header: HeaderMap,
    key_labels: list[str],
) -> list[EfficiencyRow]:
    """
    Group cost rows by the field named by `key_labels` and rank by km/liter.

    Rows without a key are skipped. Sorted descending by efficiency, ties
    broken descending by total km.
    """
    buckets: dict[str, EfficiencyRow] = {}
    skipped = 0
    for row in rows:
        key = pick_value(row, header, key_labels)
        entity_id = to_text(key).strip()
        if not entity_id:
            skipped += 1
            continue
        bucket = buckets.get(entity_id)
        if bucket is None:
            bucket = buckets[entity_id] = EfficiencyRow(id=entity_id)
        bucket.total_km += to_number(pick_value(row, header, KM_KEYS))
        bucket.total_liters += to_number(pick_value(row, header, LITER_KEYS))

    for bucket in buckets.values():
        bucket.km_per_liter = bucket.total_km / bucket.total_liters if bucket.total_liters else 0.0

    if skipped:
        logger.debug("Efficiency by %s: %d rows without a key", key_labels[0], skipped)
    return sorted(buckets.values(), key=lambda r: (-r.km_per_liter, -r.total_km))
