"""Tests for the RPC-backed account client, with the RPC mocked out."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.pubkey import Pubkey

from pumpfun_sdk.core.client import PumpAccountClient
from pumpfun_sdk.core.constants import BUY_DISCRIMINATOR, SELL_DISCRIMINATOR
from pumpfun_sdk.core.exceptions import AccountNotFound, CurveComplete
from pumpfun_sdk.core.pda import associated_token_address, bonding_curve_address
from pumpfun_sdk.core.pubkeys import MayhemAddresses, PumpAddresses, SolanaProgramAddresses

from conftest import FEE_RECIPIENT, MINT, USER, make_curve_buffer, make_global_buffer


def _response(data):
    resp = MagicMock()
    if data is None:
        resp.value = None
    else:
        resp.value = MagicMock()
        resp.value.data = data
    return resp


def _make_client(accounts: dict) -> PumpAccountClient:
    """Builds a client whose RPC serves `accounts` (pubkey -> bytes); anything else is missing."""
    rpc = MagicMock()

    async def get_account_info(pubkey: Pubkey, commitment=None):
        return _response(accounts.get(pubkey))

    rpc.get_account_info = AsyncMock(side_effect=get_account_info)
    rpc.close = AsyncMock()
    return PumpAccountClient(async_client=rpc)


def _chain(curve_buffer: bytes, user_ata_token_program=None) -> dict:
    accounts = {
        PumpAddresses.GLOBAL_STATE: make_global_buffer(),
        bonding_curve_address(MINT): curve_buffer,
    }
    if user_ata_token_program is not None:
        accounts[associated_token_address(USER, MINT, user_ata_token_program)] = b"\x00" * 165
    return accounts


def test_requires_endpoint_or_client():
    with pytest.raises(ValueError):
        PumpAccountClient()


@pytest.mark.asyncio
async def test_get_global_config():
    client = _make_client(_chain(make_curve_buffer()))
    config = await client.get_global_config()
    assert config.fee_recipient == FEE_RECIPIENT
    assert config.fee_basis_points == 100


@pytest.mark.asyncio
async def test_get_curve_state_missing_account():
    client = _make_client({})
    with pytest.raises(AccountNotFound):
        await client.get_curve_state(MINT)


@pytest.mark.asyncio
async def test_account_exists():
    client = _make_client(_chain(make_curve_buffer()))
    assert await client.account_exists(bonding_curve_address(MINT))
    assert not await client.account_exists(Pubkey.new_unique())


@pytest.mark.asyncio
async def test_buy_instructions_create_missing_account():
    client = _make_client(_chain(make_curve_buffer()))
    instructions = await client.get_buy_instructions_by_sol_amount(USER, MINT, 1_000_000_000, 500)
    assert len(instructions) == 2
    assert instructions[0].program_id == SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID
    assert instructions[1].data[:8] == BUY_DISCRIMINATOR


@pytest.mark.asyncio
async def test_buy_instructions_skip_existing_account():
    accounts = _chain(make_curve_buffer(), user_ata_token_program=SolanaProgramAddresses.TOKEN_PROGRAM_ID)
    client = _make_client(accounts)
    instructions = await client.get_buy_instructions_by_sol_amount(USER, MINT, 1_000_000_000, 500)
    assert len(instructions) == 1


@pytest.mark.asyncio
async def test_buy_instructions_force_create():
    accounts = _chain(make_curve_buffer(), user_ata_token_program=SolanaProgramAddresses.TOKEN_PROGRAM_ID)
    client = _make_client(accounts)
    instructions = await client.get_buy_instructions_by_sol_amount(
        USER, MINT, 1_000_000_000, 500, force_create_associated_account=True
    )
    assert len(instructions) == 2


@pytest.mark.asyncio
async def test_mayhem_buy_checks_token_2022_account():
    """A classic-token ATA does not count for a mayhem curve."""
    accounts = _chain(make_curve_buffer(mode_byte=1), user_ata_token_program=SolanaProgramAddresses.TOKEN_PROGRAM_ID)
    client = _make_client(accounts)
    instructions = await client.get_buy_instructions_by_sol_amount(USER, MINT, 1_000_000_000, 500)
    assert len(instructions) == 2
    assert instructions[1].accounts[1].pubkey == MayhemAddresses.FEE_RECIPIENT


@pytest.mark.asyncio
async def test_sell_instructions():
    client = _make_client(_chain(make_curve_buffer()))
    instructions = await client.get_sell_instructions_by_token_amount(USER, MINT, 10_000_000_000, 500)
    assert len(instructions) == 1
    assert instructions[0].data[:8] == SELL_DISCRIMINATOR


@pytest.mark.asyncio
async def test_buy_on_complete_curve_fails():
    client = _make_client(_chain(make_curve_buffer(complete=True)))
    with pytest.raises(CurveComplete):
        await client.get_buy_instructions_by_sol_amount(USER, MINT, 1_000_000_000, 500)


@pytest.mark.asyncio
async def test_context_manager_closes_rpc():
    client = _make_client({})
    async with client:
        pass
    client.async_client.close.assert_awaited_once()
