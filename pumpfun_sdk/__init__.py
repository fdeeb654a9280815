# pumpfun_sdk/__init__.py

from .core.accounts import CurveMode, CurveState, GlobalConfig, decode_curve_state, decode_global_config
from .core.client import PumpAccountClient
from .core.curve import (
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
from .core.exceptions import (
    AccountNotFound,
    ArithmeticOverflow,
    CurveComplete,
    DecodeError,
    InsufficientReserves,
    InvalidBasisPoints,
    InvalidDiscriminator,
    NoValidAddress,
    PumpFunSdkException,
    TruncatedBuffer,
    UnknownEventType,
)
from .core.instruction_builder import (
    AccountRouting,
    InstructionBuilder,
    build_buy_instruction,
    build_create_and_buy_instructions,
    build_create_instruction,
    build_sell_instruction,
)
from .core.pda import derive_address
from .monitoring.events import decode_event, decode_events

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
    "AccountNotFound",
    "ArithmeticOverflow",
    "CurveComplete",
    "DecodeError",
    "InsufficientReserves",
    "InvalidBasisPoints",
    "InvalidDiscriminator",
    "NoValidAddress",
    "PumpFunSdkException",
    "TruncatedBuffer",
    "UnknownEventType",
    "AccountRouting",
    "InstructionBuilder",
    "build_buy_instruction",
    "build_create_and_buy_instructions",
    "build_create_instruction",
    "build_sell_instruction",
    "derive_address",
    "decode_event",
    "decode_events",
]
