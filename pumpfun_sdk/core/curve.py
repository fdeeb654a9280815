# pumpfun_sdk/core/curve.py
"""
Bonding curve pricing.

Everything here mirrors the program's integer arithmetic: amounts are raw
lamports / token base units, every division truncates, and results must fit
in a u64. Python ints carry the intermediate products without overflow.
"""

from dataclasses import dataclass
from typing import Tuple

from .accounts import CurveState, GlobalConfig
from .constants import BASIS_POINTS_DENOMINATOR, U64_MAX
from .exceptions import ArithmeticOverflow, CurveComplete, InsufficientReserves, InvalidBasisPoints


@dataclass(frozen=True)
class PriceQuote:
    input_amount: int
    output_amount: int
    fee_amount: int
    bound: int  # max SOL cost for buys, min SOL output for sells
    slippage_basis_points: int


def _check_u64(name: str, value: int) -> int:
    if value < 0 or value > U64_MAX:
        raise ArithmeticOverflow(f"{name}={value} does not fit in u64")
    return value


def _check_fee_bps(fee_basis_points: int) -> None:
    if not 0 <= fee_basis_points <= BASIS_POINTS_DENOMINATOR:
        raise InvalidBasisPoints(f"fee_basis_points must be in [0, {BASIS_POINTS_DENOMINATOR}], got {fee_basis_points}")


def _check_slippage_bps(slippage_basis_points: int) -> None:
    if slippage_basis_points < 0:
        raise InvalidBasisPoints(f"slippage_basis_points must be non-negative, got {slippage_basis_points}")


def _tokens_out(virtual_token_reserves: int, virtual_sol_reserves: int, real_token_reserves: int, sol_in: int) -> int:
    if sol_in <= 0:
        return 0
    _check_u64("sol_in", sol_in)
    denominator = virtual_sol_reserves + sol_in
    if denominator == 0:
        return 0
    tokens_out = (virtual_token_reserves * sol_in) // denominator
    return min(tokens_out, real_token_reserves)


def initial_buy_price(global_config: GlobalConfig, sol_in: int) -> int:
    """Tokens received for `sol_in` lamports on a curve that has not traded yet."""
    return _tokens_out(
        global_config.initial_virtual_token_reserves,
        global_config.initial_virtual_sol_reserves,
        global_config.initial_real_token_reserves,
        sol_in,
    )


def buy_price(curve_state: CurveState, sol_in: int) -> int:
    """
    Tokens received for `sol_in` lamports.

    tokens_out = floor(vt * sol_in / (vs + sol_in)), capped at the curve's
    real token reserves.
    """
    if curve_state.complete:
        raise CurveComplete("Bonding curve is complete; buys are closed")
    return _tokens_out(
        curve_state.virtual_token_reserves,
        curve_state.virtual_sol_reserves,
        curve_state.real_token_reserves,
        sol_in,
    )


def _sell_amounts(curve_state: CurveState, tokens_in: int, fee_basis_points: int) -> Tuple[int, int]:
    """Returns (gross_sol_out, fee) for selling `tokens_in`."""
    if curve_state.complete:
        raise CurveComplete("Bonding curve is complete; sells are closed")
    _check_fee_bps(fee_basis_points)
    if tokens_in <= 0:
        return 0, 0
    _check_u64("tokens_in", tokens_in)
    if tokens_in > curve_state.real_token_reserves:
        raise InsufficientReserves(
            f"Selling {tokens_in} tokens exceeds real token reserves {curve_state.real_token_reserves}"
        )

    gross = (tokens_in * curve_state.virtual_sol_reserves) // (curve_state.virtual_token_reserves + tokens_in)
    fee = (gross * fee_basis_points) // BASIS_POINTS_DENOMINATOR
    return gross, fee


def sell_price(curve_state: CurveState, tokens_in: int, fee_basis_points: int) -> int:
    """Lamports received for `tokens_in`, net of the protocol fee."""
    gross, fee = _sell_amounts(curve_state, tokens_in, fee_basis_points)
    return gross - fee


def apply_buy_slippage(sol_amount: int, slippage_basis_points: int) -> int:
    """Max SOL cost: ceil(amount * (10000 + bps) / 10000). Rounds up."""
    _check_u64("sol_amount", sol_amount)
    _check_slippage_bps(slippage_basis_points)
    numerator = sol_amount * (BASIS_POINTS_DENOMINATOR + slippage_basis_points)
    max_sol_cost = -(-numerator // BASIS_POINTS_DENOMINATOR)
    return _check_u64("max_sol_cost", max_sol_cost)


def apply_sell_slippage(sol_amount: int, slippage_basis_points: int) -> int:
    """Min SOL output: floor(amount * (10000 - bps) / 10000), never below zero."""
    _check_u64("sol_amount", sol_amount)
    _check_slippage_bps(slippage_basis_points)
    remaining_bps = max(BASIS_POINTS_DENOMINATOR - slippage_basis_points, 0)
    return (sol_amount * remaining_bps) // BASIS_POINTS_DENOMINATOR


def quote_buy(
        curve_state: CurveState,
        sol_in: int,
        slippage_basis_points: int,
        fee_basis_points: int = 0,
) -> PriceQuote:
    """
    Quotes a buy of `sol_in` lamports.

    The fee is charged by the program on top of `sol_in`; it is reported for
    information and is not part of the slippage bound.
    """
    _check_fee_bps(fee_basis_points)
    tokens_out = buy_price(curve_state, sol_in)
    return PriceQuote(
        input_amount=sol_in,
        output_amount=tokens_out,
        fee_amount=(max(sol_in, 0) * fee_basis_points) // BASIS_POINTS_DENOMINATOR,
        bound=apply_buy_slippage(max(sol_in, 0), slippage_basis_points),
        slippage_basis_points=slippage_basis_points,
    )


def quote_initial_buy(global_config: GlobalConfig, sol_in: int, slippage_basis_points: int) -> PriceQuote:
    """Quotes the creator's first buy, bundled with the create instruction."""
    tokens_out = initial_buy_price(global_config, sol_in)
    return PriceQuote(
        input_amount=sol_in,
        output_amount=tokens_out,
        fee_amount=(max(sol_in, 0) * global_config.fee_basis_points) // BASIS_POINTS_DENOMINATOR,
        bound=apply_buy_slippage(max(sol_in, 0), slippage_basis_points),
        slippage_basis_points=slippage_basis_points,
    )


def quote_sell(
        curve_state: CurveState,
        tokens_in: int,
        fee_basis_points: int,
        slippage_basis_points: int,
) -> PriceQuote:
    gross, fee = _sell_amounts(curve_state, tokens_in, fee_basis_points)
    net = gross - fee
    return PriceQuote(
        input_amount=tokens_in,
        output_amount=net,
        fee_amount=fee,
        bound=apply_sell_slippage(net, slippage_basis_points),
        slippage_basis_points=slippage_basis_points,
    )
