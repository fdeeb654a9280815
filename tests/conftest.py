"""Shared test fixtures: raw account buffers and decoded records."""

import struct

import pytest
from solders.pubkey import Pubkey

from pumpfun_sdk.core.accounts import CurveMode, CurveState, GlobalConfig
from pumpfun_sdk.core.constants import BONDING_CURVE_DISCRIMINATOR, GLOBAL_ACCOUNT_DISCRIMINATOR

AUTHORITY = Pubkey.new_unique()
FEE_RECIPIENT = Pubkey.from_string("CebN5WGQ4jvEPvsVU4EoHEpgzq1VV7AbicfhtW4xC9iM")
CREATOR = Pubkey.new_unique()
USER = Pubkey.new_unique()
MINT = Pubkey.new_unique()

INITIAL_VIRTUAL_TOKEN_RESERVES = 1_073_000_000_000_000
INITIAL_VIRTUAL_SOL_RESERVES = 30_000_000_000
INITIAL_REAL_TOKEN_RESERVES = 793_100_000_000_000
TOKEN_TOTAL_SUPPLY = 1_000_000_000_000_000


def make_global_buffer(
        fee_basis_points: int = 100,
        initialized: bool = True,
        fee_recipient: Pubkey = FEE_RECIPIENT,
        trailing: bytes = b"",
) -> bytes:
    return (
        GLOBAL_ACCOUNT_DISCRIMINATOR
        + struct.pack("<?", initialized)
        + bytes(AUTHORITY)
        + bytes(fee_recipient)
        + struct.pack(
            "<QQQQH",
            INITIAL_VIRTUAL_TOKEN_RESERVES,
            INITIAL_VIRTUAL_SOL_RESERVES,
            INITIAL_REAL_TOKEN_RESERVES,
            TOKEN_TOTAL_SUPPLY,
            fee_basis_points,
        )
        + trailing
    )


def make_curve_buffer(
        virtual_token_reserves: int = INITIAL_VIRTUAL_TOKEN_RESERVES,
        virtual_sol_reserves: int = INITIAL_VIRTUAL_SOL_RESERVES,
        real_token_reserves: int = INITIAL_REAL_TOKEN_RESERVES,
        real_sol_reserves: int = 0,
        complete: bool = False,
        creator: Pubkey = CREATOR,
        mode_byte=None,
) -> bytes:
    data = (
        BONDING_CURVE_DISCRIMINATOR
        + struct.pack(
            "<QQQQQ?",
            virtual_token_reserves,
            virtual_sol_reserves,
            real_token_reserves,
            real_sol_reserves,
            TOKEN_TOTAL_SUPPLY,
            complete,
        )
        + bytes(creator)
    )
    if mode_byte is not None:
        data += bytes([mode_byte])
    return data


def make_curve_state(**kwargs) -> CurveState:
    defaults = {
        "virtual_token_reserves": INITIAL_VIRTUAL_TOKEN_RESERVES,
        "virtual_sol_reserves": INITIAL_VIRTUAL_SOL_RESERVES,
        "real_token_reserves": INITIAL_REAL_TOKEN_RESERVES,
        "real_sol_reserves": 0,
        "token_total_supply": TOKEN_TOTAL_SUPPLY,
        "complete": False,
        "creator": CREATOR,
        "mode": CurveMode.STANDARD,
    }
    defaults.update(kwargs)
    return CurveState(**defaults)


@pytest.fixture
def global_config() -> GlobalConfig:
    return GlobalConfig(
        initialized=True,
        authority=AUTHORITY,
        fee_recipient=FEE_RECIPIENT,
        initial_virtual_token_reserves=INITIAL_VIRTUAL_TOKEN_RESERVES,
        initial_virtual_sol_reserves=INITIAL_VIRTUAL_SOL_RESERVES,
        initial_real_token_reserves=INITIAL_REAL_TOKEN_RESERVES,
        token_total_supply=TOKEN_TOTAL_SUPPLY,
        fee_basis_points=100,
    )


@pytest.fixture
def curve_state() -> CurveState:
    return make_curve_state()


@pytest.fixture
def mayhem_curve_state() -> CurveState:
    return make_curve_state(mode=CurveMode.MAYHEM)
