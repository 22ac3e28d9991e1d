from headers import TRUCK_ID_KEYS, build_header_map, normalize_key, pick_value, resolve_header


def test_normalize_key_ignores_case_and_punctuation():
    assert normalize_key("Truck ID") == "truckid"
    assert normalize_key("truck_id") == "truckid"
    assert normalize_key("TruckID") == "truckid"
    assert normalize_key(" Fuel (L) ") == "fuell"


def test_pick_value_follows_priority_list():
    row = {"Truck ID": "T1", "truck_type": "BOX"}
    header = build_header_map(row)
    assert pick_value(row, header, ["truck id", "truckid", "vehicle id", "id"]) == "T1"
    assert pick_value(row, header, ["truck type"]) == "BOX"
    assert pick_value(row, header, ["driver id"]) is None


def test_earlier_spelling_wins_over_later_one():
    row = {"ID": "9", "Vehicle ID": "V7"}
    header = build_header_map(row)
    assert pick_value(row, header, TRUCK_ID_KEYS) == "V7"
    assert resolve_header(header, TRUCK_ID_KEYS) == "Vehicle ID"


def test_empty_cell_under_matched_header_is_returned():
    row = {"Truck ID": "", "ID": "5"}
    header = build_header_map(row)
    assert pick_value(row, header, TRUCK_ID_KEYS) == ""


def test_empty_table_resolves_nothing():
    assert build_header_map({}) == {}
    assert build_header_map(None) == {}
    assert pick_value({"Truck ID": "T1"}, {}, TRUCK_ID_KEYS) is None


def test_header_map_from_first_row_applies_to_later_rows():
    rows = [{"Truck Id": "T1"}, {"Truck Id": "T2"}]
    header = build_header_map(rows[0])
    assert [pick_value(r, header, TRUCK_ID_KEYS) for r in rows] == ["T1", "T2"]
