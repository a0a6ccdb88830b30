import pytest

from pricing.price_impact import (
    NO_IMPACT,
    PriceImpactAnalyzer,
    Severity,
    assess_price_impact,
    assess_route_impact,
    classify_price_impact,
)
from pricing.v2_library import ReservePair

DEEP = ReservePair(1_000_000, 1_000_000)
THIN = ReservePair(500_000, 500_000)


def test_small_trade_low_with_notice():
    result = assess_price_impact(10_000, DEEP)
    assert result.price_impact == pytest.approx(1.29)
    assert result.severity is Severity.LOW
    assert result.warning == "Low price impact detected."


def test_large_trade_on_thin_pool_is_critical():
    result = assess_price_impact(150_000, THIN)
    assert result.price_impact >= 15
    assert result.severity is Severity.CRITICAL
    assert result.warning.startswith("Extremely high price impact!")


def test_same_trade_on_deeper_pool_is_high():
    result = assess_price_impact(150_000, DEEP)
    assert 5 <= result.price_impact < 15
    assert result.severity is Severity.HIGH


@pytest.mark.parametrize(
    "amount_in,reserves",
    [(0, DEEP), (10_000, None), (10_000, ReservePair(0, 1000)), (10_000, ReservePair(1000, 0))],
)
def test_no_data_means_no_impact(amount_in, reserves):
    assert assess_price_impact(amount_in, reserves) == NO_IMPACT


@pytest.mark.parametrize(
    "impact,severity,has_warning",
    [
        (0.0, Severity.LOW, False),
        (0.99, Severity.LOW, False),
        (1.0, Severity.LOW, True),
        (2.99, Severity.LOW, True),
        (3.0, Severity.MEDIUM, True),
        (5.0, Severity.HIGH, True),
        (14.99, Severity.HIGH, True),
        (15.0, Severity.CRITICAL, True),
        (80.0, Severity.CRITICAL, True),
    ],
)
def test_classification_thresholds(impact, severity, has_warning):
    result = classify_price_impact(impact)
    assert result.severity is severity
    assert (result.warning is not None) is has_warning


def test_result_to_dict():
    payload = classify_price_impact(3.5).to_dict()
    assert payload["severity"] == "medium"
    assert payload["price_impact"] == 3.5


def test_impact_table():
    analyzer = PriceImpactAnalyzer(DEEP)
    rows = analyzer.generate_impact_table([10_000, 150_000])
    assert [row["amount_in"] for row in rows] == [10_000, 150_000]
    assert rows[0]["amount_out"] == 9871
    assert [row["severity"] for row in rows] == [Severity.LOW, Severity.HIGH]
    assert rows[0]["price_impact_pct"] < rows[1]["price_impact_pct"]


def test_find_max_size_for_impact():
    analyzer = PriceImpactAnalyzer(DEEP)
    size = analyzer.find_max_size_for_impact(1.0)
    assert 6_500 < size < 7_500
    assert assess_price_impact(size, DEEP).price_impact <= 1.0


def test_find_max_size_empty_pool():
    assert PriceImpactAnalyzer(ReservePair(0, 0)).find_max_size_for_impact(5.0) == 0


def test_route_impact_single_hop_matches_pool_impact():
    amounts = [10_000, 9871]
    assert assess_route_impact(amounts, [DEEP]) == assess_price_impact(10_000, DEEP)


def test_route_impact_two_hops():
    reserves = [ReservePair(500_000, 2_000_000), ReservePair(2_000_000, 500_000)]
    result = assess_route_impact([1000, 3980, 990], reserves)
    assert result.price_impact == pytest.approx(1.0)
    assert result.severity is Severity.LOW


@pytest.mark.parametrize(
    "amounts,reserves",
    [
        ([1000, 990], None),
        ([1000, 990], []),
        ([1000, 990], [DEEP, DEEP]),
        ([0, 0], [DEEP]),
        ([1000, 0], [ReservePair(0, 10)]),
    ],
)
def test_route_impact_degenerate(amounts, reserves):
    assert assess_route_impact(amounts, reserves) == NO_IMPACT
