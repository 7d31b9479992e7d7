from market_leads.pipeline.latest import LatestSelector


def test_latest_selector_keeps_greatest_period_end_regardless_of_arrival_order():
    selector = LatestSelector()
    for period_end in ["2023-01-01", "2023-03-01", "2023-02-01"]:
        selector.offer("K", {"region": "K", "period_end": period_end})

    assert len(selector) == 1
    assert selector.items()[0][1]["period_end"] == "2023-03-01"


def test_latest_selector_ties_keep_first_arrival():
    selector = LatestSelector()
    assert selector.offer("K", {"period_end": "2023-01-01", "marker": "first"}) is True
    assert selector.offer("K", {"period_end": "2023-01-01", "marker": "second"}) is False

    assert selector.items()[0][1]["marker"] == "first"


def test_latest_selector_preserves_first_seen_key_order():
    selector = LatestSelector()
    selector.offer("B", {"period_end": "2023-01-01"})
    selector.offer("A", {"period_end": "2023-01-01"})
    selector.offer("B", {"period_end": "2023-05-01"})

    assert selector.keys() == ["B", "A"]
