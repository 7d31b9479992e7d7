from market_leads.pipeline.classify import determine_market_type, determine_trend_direction


def test_market_type_boundaries():
    assert determine_market_type(3.9) == "seller"
    assert determine_market_type(4.0) == "balanced"
    assert determine_market_type(5.0) == "balanced"
    assert determine_market_type(6.0) == "balanced"
    assert determine_market_type(6.1) == "buyer"


def test_market_type_absent_is_balanced():
    assert determine_market_type(None) == "balanced"


def test_market_type_zero_supply_is_seller():
    assert determine_market_type(0.0) == "seller"


def test_trend_direction_boundaries():
    assert determine_trend_direction(2.0) == "stable"
    assert determine_trend_direction(2.1) == "up"
    assert determine_trend_direction(-2.0) == "stable"
    assert determine_trend_direction(-2.1) == "down"
    assert determine_trend_direction(0.0) == "stable"


def test_trend_direction_absent_is_stable():
    assert determine_trend_direction(None) == "stable"
