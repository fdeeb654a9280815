"""Tests for bonding curve pricing."""

import pytest

from pumpfun_sdk.core.constants import U64_MAX
from pumpfun_sdk.core.curve import (
    apply_buy_slippage,
    apply_sell_slippage,
    buy_price,
    initial_buy_price,
    quote_buy,
    quote_initial_buy,
    quote_sell,
    sell_price,
)
from pumpfun_sdk.core.exceptions import (
    ArithmeticOverflow,
    CurveComplete,
    InsufficientReserves,
    InvalidBasisPoints,
)

from conftest import make_curve_state

ONE_SOL = 1_000_000_000


def test_first_buy_scenario(global_config):
    """1 SOL into a fresh curve with 30 SOL / 1.073B tokens of virtual reserves."""
    state = make_curve_state(real_token_reserves=10**18)
    expected = 1_073_000_000_000_000 * ONE_SOL // 31_000_000_000
    assert buy_price(state, ONE_SOL) == expected
    assert initial_buy_price(global_config, ONE_SOL) == expected
    assert apply_buy_slippage(ONE_SOL, 500) == 1_050_000_000


def test_buy_capped_at_real_token_reserves():
    state = make_curve_state(real_token_reserves=1_000)
    assert buy_price(state, ONE_SOL) == 1_000


@pytest.mark.parametrize("sol_in", [0, -5])
def test_buy_of_nothing_returns_nothing(curve_state, sol_in):
    assert buy_price(curve_state, sol_in) == 0


def test_buy_is_monotonic(curve_state):
    amounts = [1, 10_000, ONE_SOL, 5 * ONE_SOL, 50 * ONE_SOL]
    outputs = [buy_price(curve_state, amount) for amount in amounts]
    assert outputs == sorted(outputs)


def test_buy_never_exceeds_real_reserves(curve_state):
    assert buy_price(curve_state, 10_000 * ONE_SOL) <= curve_state.real_token_reserves


def test_buy_rejects_complete_curve():
    with pytest.raises(CurveComplete):
        buy_price(make_curve_state(complete=True), ONE_SOL)
    with pytest.raises(CurveComplete):
        buy_price(make_curve_state(complete=True), 0)


def test_buy_rejects_amount_beyond_u64(curve_state):
    with pytest.raises(ArithmeticOverflow):
        buy_price(curve_state, U64_MAX + 1)


def test_sell_price_deducts_fee(curve_state):
    tokens_in = 10_000_000_000
    gross = tokens_in * curve_state.virtual_sol_reserves // (curve_state.virtual_token_reserves + tokens_in)
    assert sell_price(curve_state, tokens_in, 0) == gross
    assert sell_price(curve_state, tokens_in, 100) == gross - gross * 100 // 10_000


def test_sell_fee_is_monotonic(curve_state):
    tokens_in = 50_000_000_000
    assert sell_price(curve_state, tokens_in, 100) <= sell_price(curve_state, tokens_in, 0)
    assert sell_price(curve_state, tokens_in, 10_000) == 0


def test_sell_of_nothing_returns_nothing(curve_state):
    assert sell_price(curve_state, 0, 100) == 0


def test_sell_rejects_complete_curve():
    with pytest.raises(CurveComplete):
        sell_price(make_curve_state(complete=True), 1_000, 100)
    with pytest.raises(CurveComplete):
        sell_price(make_curve_state(complete=True), 0, 100)


def test_sell_rejects_amount_above_real_reserves():
    state = make_curve_state(real_token_reserves=1_000)
    with pytest.raises(InsufficientReserves):
        sell_price(state, 1_001, 100)


@pytest.mark.parametrize("fee_bps", [-1, 10_001])
def test_sell_rejects_invalid_fee(curve_state, fee_bps):
    with pytest.raises(InvalidBasisPoints):
        sell_price(curve_state, 1_000, fee_bps)


def test_buy_slippage_rounds_up():
    assert apply_buy_slippage(1, 1) == 2
    assert apply_buy_slippage(10_000, 1) == 10_001
    assert apply_buy_slippage(ONE_SOL, 0) == ONE_SOL


def test_sell_slippage_rounds_down():
    assert apply_sell_slippage(1, 1) == 0
    assert apply_sell_slippage(ONE_SOL, 500) == 950_000_000


@pytest.mark.parametrize("bps", [10_000, 15_000])
def test_sell_slippage_clamps_at_zero(bps):
    assert apply_sell_slippage(ONE_SOL, bps) == 0


@pytest.mark.parametrize("bps", [0, 1, 250, 500, 9_999])
def test_slippage_bounds_bracket_the_amount(bps):
    amount = 123_456_789
    if bps == 0:
        assert apply_buy_slippage(amount, bps) == amount
        assert apply_sell_slippage(amount, bps) == amount
    else:
        assert apply_buy_slippage(amount, bps) > amount
        assert apply_sell_slippage(amount, bps) < amount


def test_slippage_rejects_negative_bps():
    with pytest.raises(InvalidBasisPoints):
        apply_buy_slippage(ONE_SOL, -1)
    with pytest.raises(InvalidBasisPoints):
        apply_sell_slippage(ONE_SOL, -1)


def test_buy_slippage_overflow():
    with pytest.raises(ArithmeticOverflow):
        apply_buy_slippage(U64_MAX, 1)


def test_invalid_basis_points_is_a_value_error():
    with pytest.raises(ValueError):
        apply_buy_slippage(ONE_SOL, -1)


def test_quote_buy(curve_state):
    quote = quote_buy(curve_state, ONE_SOL, 500, fee_basis_points=100)
    assert quote.input_amount == ONE_SOL
    assert quote.output_amount == buy_price(curve_state, ONE_SOL)
    assert quote.fee_amount == 10_000_000
    assert quote.bound == 1_050_000_000
    assert quote.slippage_basis_points == 500


def test_quote_initial_buy(global_config):
    quote = quote_initial_buy(global_config, ONE_SOL, 500)
    assert quote.output_amount == initial_buy_price(global_config, ONE_SOL)
    assert quote.fee_amount == ONE_SOL * global_config.fee_basis_points // 10_000
    assert quote.bound == 1_050_000_000


def test_quote_sell(curve_state):
    tokens_in = 35_000_000_000
    quote = quote_sell(curve_state, tokens_in, 100, 500)
    net = sell_price(curve_state, tokens_in, 100)
    assert quote.output_amount == net
    assert quote.bound == apply_sell_slippage(net, 500)
    assert quote.bound <= net
    assert quote.fee_amount > 0
