import pytest

from core.base_types import Address, Token
from core.tokens import TokenList
from pricing.pool_book import PoolBook
from pricing.route import Route, RouteSelector
from pricing.uniswap_v2_pair import UniswapV2Pair
from pricing.v2_library import get_amount_out

NATIVE = Token(
    Address("0x0000000000000000000000000000000000000000"), "PHRS", 18, is_native=True
)
AAA = Token(Address("0x00000000000000000000000000000000000000a1"), "AAA", 18)
BBB = Token(Address("0x00000000000000000000000000000000000000b2"), "BBB", 18)
WRAPPED = Token(Address("0x00000000000000000000000000000000000000c3"), "WPHRS", 18)
USDC = Token(Address("0x00000000000000000000000000000000000000d4"), "USDC", 6)

TOKENS = TokenList([NATIVE, AAA, BBB, WRAPPED, USDC], WRAPPED.address)


def _pair(token0: Token, token1: Token, reserve0: int, reserve1: int) -> UniswapV2Pair:
    return UniswapV2Pair(
        address=Address("0x00000000000000000000000000000000000000f0"),
        token0=token0,
        token1=token1,
        reserve0=reserve0,
        reserve1=reserve1,
    )


def _selector() -> RouteSelector:
    return RouteSelector(TOKENS, bridge_preference=("USDC",))


def _bridge_pools() -> list[UniswapV2Pair]:
    return [
        _pair(AAA, WRAPPED, 500_000, 2_000_000),
        _pair(WRAPPED, BBB, 2_000_000, 500_000),
    ]


def test_direct_beats_bridge():
    book = PoolBook([_pair(AAA, BBB, 1_000_000, 1_000_000), *_bridge_pools()])
    selection = _selector().select(1000, AAA, BBB, book)

    direct_out = get_amount_out(1000, 1_000_000, 1_000_000)
    hop1 = get_amount_out(1000, 500_000, 2_000_000)
    multi_out = get_amount_out(hop1, 2_000_000, 500_000)
    assert (direct_out, multi_out) == (996, 990)

    assert selection.best is not None
    assert not selection.best.is_multi_hop
    assert selection.best.amount_out == direct_out
    assert [r.amount_out for r in selection.routes] == [direct_out, multi_out]
    assert selection.routes[1].path_symbols == ("AAA", "WPHRS", "BBB")


def test_bridge_beats_thin_direct_pool():
    book = PoolBook([_pair(AAA, BBB, 10_000, 10_000), *_bridge_pools()])
    selection = _selector().select(1000, AAA, BBB, book)

    assert selection.best.is_multi_hop
    assert selection.best.num_hops == 2
    assert selection.best.amount_out == 990
    assert selection.best.amounts == (1000, 3980, 990)
    assert [r.is_multi_hop for r in selection.routes] == [True, False]
    assert selection.routes[1].amount_out == 906


def test_missing_bridge_pool_keeps_direct():
    book = PoolBook([_pair(AAA, BBB, 1_000_000, 1_000_000), _bridge_pools()[0]])
    selection = _selector().select(1000, AAA, BBB, book)
    assert not selection.best.is_multi_hop
    assert len(selection.routes) == 1


def test_missing_direct_pool_uses_bridge():
    book = PoolBook(_bridge_pools())
    selection = _selector().select(1000, AAA, BBB, book)
    assert selection.best.is_multi_hop
    assert len(selection.routes) == 1


def test_empty_direct_pool_is_not_a_route():
    book = PoolBook([_pair(AAA, BBB, 0, 0)])
    selection = _selector().select(1000, AAA, BBB, book)
    assert selection.best is None
    assert selection.routes == []
    assert not selection.available


def test_zero_amount_is_unavailable():
    book = PoolBook([_pair(AAA, BBB, 1_000_000, 1_000_000), *_bridge_pools()])
    selection = _selector().select(0, AAA, BBB, book)
    assert selection.best is None
    assert selection.routes == []


def test_output_too_small_is_unavailable():
    book = PoolBook([_pair(AAA, BBB, 10**18, 1)])
    assert _selector().select(1, AAA, BBB, book).best is None


def test_pick_bridge_prefers_wrapped_native():
    assert _selector().pick_bridge(AAA, BBB) == WRAPPED


def test_pick_bridge_falls_back_when_wrapped_is_endpoint():
    selector = _selector()
    assert selector.pick_bridge(AAA, WRAPPED) == USDC
    # native aliases to wrapped
    assert selector.pick_bridge(NATIVE, BBB) == USDC


def test_pick_bridge_none_left():
    tokens = TokenList([AAA, WRAPPED, USDC], WRAPPED.address)
    selector = RouteSelector(tokens, bridge_preference=("USDC",))
    assert selector.pick_bridge(WRAPPED, USDC) is None
    assert selector.candidate_paths(WRAPPED, USDC) == [([WRAPPED, USDC], False)]


def test_native_input_routes_through_wrapped_address():
    book = PoolBook([_pair(WRAPPED, BBB, 10**21, 10**21)])
    selection = _selector().select(10**18, NATIVE, BBB, book)
    route = selection.best
    assert route.path == (WRAPPED.address, BBB.address)
    assert route.path_symbols == ("PHRS", "BBB")


def test_identical_tokens_rejected():
    book = PoolBook([_pair(AAA, BBB, 10, 10)])
    with pytest.raises(ValueError, match="identical adjacent"):
        _selector().select(1000, AAA, AAA, book)


def test_route_formatting_and_dict():
    book = PoolBook([_pair(AAA, USDC, 10**21, 2_000_000 * 10**6)])
    route = _selector().select(10**18, AAA, USDC, book).best
    assert route.amount_out_formatted == "1992.013962"
    payload = route.to_dict()
    assert payload["is_multi_hop"] is False
    assert payload["path"] == [AAA.address.checksum, USDC.address.checksum]


def test_route_rejects_bad_shapes():
    with pytest.raises(ValueError, match="at least two"):
        Route(path=(AAA.address,), path_symbols=("AAA",), amounts=(1,), amount_out_formatted="1")
    with pytest.raises(ValueError, match="one entry per path token"):
        Route(
            path=(AAA.address, BBB.address),
            path_symbols=("AAA", "BBB"),
            amounts=(1,),
            amount_out_formatted="1",
        )
