from market_leads.common.formatting import format_currency, format_number, format_percent, round_half_up


def test_format_currency():
    assert format_currency(425000) == "$425,000"
    assert format_currency(1234567.5) == "$1,234,568"
    assert format_currency(None) == "N/A"


def test_format_percent_signs():
    assert format_percent(5.123) == "+5.1%"
    assert format_percent(-3.26) == "-3.3%"
    assert format_percent(0.0) == "0.0%"
    assert format_percent(4.0, include_sign=False) == "4.0%"
    assert format_percent(None) == "N/A"


def test_format_number():
    assert format_number(2.345, 1) == "2.3"
    assert format_number(812.0) == "812"
    assert format_number(None) == "N/A"


def test_round_half_up():
    assert round_half_up(28.5) == 29
    assert round_half_up(28.4) == 28
