# pumpfun_sdk/core/__init__.py

from .accounts import CurveMode, CurveState, GlobalConfig, decode_curve_state, decode_global_config
from .client import PumpAccountClient
from .curve import (
    PriceQuote,
    apply_buy_slippage,
    apply_sell_slippage,
    buy_price,
    initial_buy_price,
    quote_buy,
    quote_initial_buy,
    quote_sell,
    sell_price,
)
from .instruction_builder import AccountRouting, InstructionBuilder
from .pda import derive_address
from .pubkeys import MayhemAddresses, PumpAddresses, SolanaProgramAddresses

__all__ = [
    "CurveMode",
    "CurveState",
    "GlobalConfig",
    "decode_curve_state",
    "decode_global_config",
    "PumpAccountClient",
    "PriceQuote",
    "apply_buy_slippage",
    "apply_sell_slippage",
    "buy_price",
    "initial_buy_price",
    "quote_buy",
    "quote_initial_buy",
    "quote_sell",
    "sell_price",
    "AccountRouting",
    "InstructionBuilder",
    "derive_address",
    "MayhemAddresses",
    "PumpAddresses",
    "SolanaProgramAddresses",
]
