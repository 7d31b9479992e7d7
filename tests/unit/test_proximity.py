from market_leads.pipeline.proximity import find_nearby_zips


def test_find_nearby_zips_within_ten_excluding_subject():
    universe = ["08010", "08016", "08020", "09999"]
    assert find_nearby_zips("08016", universe) == ["08010", "08020"]


def test_find_nearby_zips_keeps_universe_order_and_truncates_to_four():
    universe = ["08050", "08041", "08049", "08042", "08043", "08046", "08048"]
    # 08048 is the closest to 08047 but sits past the first four matches.
    assert find_nearby_zips("08047", universe) == ["08050", "08041", "08049", "08042"]


def test_find_nearby_zips_distance_boundary_is_inclusive():
    assert find_nearby_zips("08000", ["08010", "08011", "07990", "07989"]) == ["08010", "07990"]


def test_find_nearby_zips_empty_universe():
    assert find_nearby_zips("08016", []) == []
    assert find_nearby_zips("08016", ["08016"]) == []
