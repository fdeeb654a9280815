# pumpfun_sdk/core/accounts.py

from dataclasses import dataclass
from enum import IntEnum

# --- Solana/Borsh Imports ---
from borsh_construct import Bool, CStruct, U16, U64
from construct import Bytes as FixedBytes  # borsh_construct.Bytes is length-prefixed
from construct import ConstructError
from solders.pubkey import Pubkey

from .constants import (
    BASIS_POINTS_DENOMINATOR,
    BONDING_CURVE_DISCRIMINATOR,
    DEFAULT_TOKEN_DECIMALS,
    GLOBAL_ACCOUNT_DISCRIMINATOR,
    LAMPORTS_PER_SOL,
)
from .exceptions import DecodeError, InvalidDiscriminator, TruncatedBuffer
from ..utils.logger import get_logger

logger = get_logger(__name__)

DISCRIMINATOR_SIZE = 8

# --- Account Layouts (fields after the 8-byte discriminator) ---
# Offsets are stable across program revisions; new fields are only appended.
GLOBAL_CONFIG_LAYOUT = CStruct(
    "initialized" / Bool,
    "authority" / FixedBytes(32),
    "fee_recipient" / FixedBytes(32),
    "initial_virtual_token_reserves" / U64,
    "initial_virtual_sol_reserves" / U64,
    "initial_real_token_reserves" / U64,
    "token_total_supply" / U64,
    "fee_basis_points" / U16,
)

BONDING_CURVE_LAYOUT = CStruct(
    "virtual_token_reserves" / U64,
    "virtual_sol_reserves" / U64,
    "real_token_reserves" / U64,
    "real_sol_reserves" / U64,
    "token_total_supply" / U64,
    "complete" / Bool,
    "creator" / FixedBytes(32),
)

GLOBAL_CONFIG_MIN_SIZE = DISCRIMINATOR_SIZE + GLOBAL_CONFIG_LAYOUT.sizeof()  # 107
BONDING_CURVE_MIN_SIZE = DISCRIMINATOR_SIZE + BONDING_CURVE_LAYOUT.sizeof()  # 81
BONDING_CURVE_MODE_OFFSET = BONDING_CURVE_MIN_SIZE


class CurveMode(IntEnum):
    """Account routing mode carried in the trailing curve-state byte."""
    STANDARD = 0
    MAYHEM = 1


@dataclass(frozen=True)
class GlobalConfig:
    initialized: bool
    authority: Pubkey
    fee_recipient: Pubkey
    initial_virtual_token_reserves: int
    initial_virtual_sol_reserves: int
    initial_real_token_reserves: int
    token_total_supply: int
    fee_basis_points: int


@dataclass(frozen=True)
class CurveState:
    virtual_token_reserves: int
    virtual_sol_reserves: int
    real_token_reserves: int
    real_sol_reserves: int
    token_total_supply: int
    complete: bool
    creator: Pubkey
    mode: CurveMode = CurveMode.STANDARD

    def __post_init__(self):
        # mode is always a CurveMode, even when built from a raw byte
        object.__setattr__(self, "mode", CurveMode(self.mode))

    @property
    def is_mayhem_mode(self) -> bool:
        return self.mode is CurveMode.MAYHEM

    def calculate_price(self, decimals: int = DEFAULT_TOKEN_DECIMALS) -> float:
        """Current spot price in SOL per UI token. Display only; pricing uses integer math."""
        if self.virtual_token_reserves == 0 or self.virtual_sol_reserves == 0:
            return 0.0
        price_lamports_per_token_unit = self.virtual_sol_reserves / self.virtual_token_reserves
        return (price_lamports_per_token_unit / LAMPORTS_PER_SOL) * (10 ** decimals)


def _check_header(data: bytes, discriminator: bytes, min_size: int, kind: str) -> None:
    if len(data) < DISCRIMINATOR_SIZE:
        raise TruncatedBuffer(f"{kind} buffer is {len(data)} bytes, too short for a discriminator")
    if data[:DISCRIMINATOR_SIZE] != discriminator:
        raise InvalidDiscriminator(
            f"{kind} discriminator mismatch: got {data[:DISCRIMINATOR_SIZE].hex()}, expected {discriminator.hex()}"
        )
    if len(data) < min_size:
        raise TruncatedBuffer(f"{kind} buffer is {len(data)} bytes, expected at least {min_size}")


def decode_global_config(data: bytes) -> GlobalConfig:
    """
    Decodes the program's global configuration account.

    Raises:
        InvalidDiscriminator: the buffer is not a Global account.
        TruncatedBuffer: the buffer is shorter than the fixed layout.
        DecodeError: the fee basis points are outside 0..10000.
    """
    data = bytes(data)
    _check_header(data, GLOBAL_ACCOUNT_DISCRIMINATOR, GLOBAL_CONFIG_MIN_SIZE, "Global")
    try:
        parsed = GLOBAL_CONFIG_LAYOUT.parse(data[DISCRIMINATOR_SIZE:GLOBAL_CONFIG_MIN_SIZE])
    except ConstructError as e:
        logger.error(f"Borsh construct error decoding global config ({len(data)} bytes): {e}")
        raise DecodeError(f"Malformed global config: {e}") from e

    if parsed.fee_basis_points > BASIS_POINTS_DENOMINATOR:
        raise DecodeError(f"Global fee_basis_points {parsed.fee_basis_points} exceeds {BASIS_POINTS_DENOMINATOR}")

    return GlobalConfig(
        initialized=bool(parsed.initialized),
        authority=Pubkey.from_bytes(parsed.authority),
        fee_recipient=Pubkey.from_bytes(parsed.fee_recipient),
        initial_virtual_token_reserves=parsed.initial_virtual_token_reserves,
        initial_virtual_sol_reserves=parsed.initial_virtual_sol_reserves,
        initial_real_token_reserves=parsed.initial_real_token_reserves,
        token_total_supply=parsed.token_total_supply,
        fee_basis_points=parsed.fee_basis_points,
    )


def decode_curve_state(data: bytes) -> CurveState:
    """
    Decodes a bonding curve account.

    Buffers written before the mode byte existed end at the creator field;
    those decode as CurveMode.STANDARD.
    """
    data = bytes(data)
    _check_header(data, BONDING_CURVE_DISCRIMINATOR, BONDING_CURVE_MIN_SIZE, "BondingCurve")
    try:
        parsed = BONDING_CURVE_LAYOUT.parse(data[DISCRIMINATOR_SIZE:BONDING_CURVE_MIN_SIZE])
    except ConstructError as e:
        logger.error(f"Borsh construct error decoding bonding curve ({len(data)} bytes): {e}")
        raise DecodeError(f"Malformed bonding curve: {e}") from e

    mode = _decode_mode(data)
    return CurveState(
        virtual_token_reserves=parsed.virtual_token_reserves,
        virtual_sol_reserves=parsed.virtual_sol_reserves,
        real_token_reserves=parsed.real_token_reserves,
        real_sol_reserves=parsed.real_sol_reserves,
        token_total_supply=parsed.token_total_supply,
        complete=bool(parsed.complete),
        creator=Pubkey.from_bytes(parsed.creator),
        mode=mode,
    )


def _decode_mode(data: bytes) -> CurveMode:
    if len(data) <= BONDING_CURVE_MODE_OFFSET:
        logger.debug("Bonding curve buffer has no mode byte (%d bytes); using standard mode.", len(data))
        return CurveMode.STANDARD
    return CurveMode.MAYHEM if data[BONDING_CURVE_MODE_OFFSET] else CurveMode.STANDARD
