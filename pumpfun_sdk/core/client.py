# pumpfun_sdk/core/client.py

import asyncio
from typing import List, Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solders.instruction import Instruction
from solders.pubkey import Pubkey

from .accounts import CurveState, GlobalConfig, decode_curve_state, decode_global_config
from .curve import quote_buy, quote_sell
from .exceptions import AccountNotFound
from .instruction_builder import AccountRouting, InstructionBuilder
from .pda import associated_token_address, bonding_curve_address
from .pubkeys import PumpAddresses
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


class PumpAccountClient:
    """
    Reads pump.fun accounts over RPC and feeds them to the codec, pricing and
    instruction builders. No retries: transport policy belongs to the caller.
    """

    def __init__(
        self,
        rpc_endpoint: Optional[str] = None,
        commitment: Commitment = Confirmed,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        async_client: Optional[AsyncClient] = None,
    ) -> None:
        if async_client is None and rpc_endpoint is None:
            raise ValueError("Either rpc_endpoint or async_client is required")
        self.async_client = async_client or AsyncClient(
            rpc_endpoint, commitment=commitment, timeout=timeout_seconds
        )
        self.commitment = commitment
        logger.info(f"PumpAccountClient initialized: {rpc_endpoint or 'injected client'} @ {commitment}")

    async def __aenter__(self) -> "PumpAccountClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.async_client.close()
        logger.info("PumpAccountClient connection closed.")

    async def _get_account_data(self, pubkey: Pubkey) -> Optional[bytes]:
        resp = await self.async_client.get_account_info(pubkey, commitment=self.commitment)
        if resp.value is None:
            return None
        return bytes(resp.value.data)

    async def account_exists(self, pubkey: Pubkey) -> bool:
        return await self._get_account_data(pubkey) is not None

    async def get_global_config(self) -> GlobalConfig:
        data = await self._get_account_data(PumpAddresses.GLOBAL_STATE)
        if data is None:
            raise AccountNotFound(f"Global account {PumpAddresses.GLOBAL_STATE} not found")
        return decode_global_config(data)

    async def get_curve_state(self, mint: Pubkey) -> CurveState:
        curve_pubkey = bonding_curve_address(mint)
        data = await self._get_account_data(curve_pubkey)
        if data is None:
            raise AccountNotFound(f"Bonding curve account not found: {curve_pubkey} (mint {mint})")
        state = decode_curve_state(data)
        logger.debug(f"Fetched/decoded curve state for {mint}: {state}")
        return state

    async def get_buy_instructions_by_sol_amount(
        self,
        user: Pubkey,
        mint: Pubkey,
        sol_amount: int,
        slippage_basis_points: int,
        force_create_associated_account: bool = False,
    ) -> List[Instruction]:
        """Fetches current state, quotes a buy of `sol_amount` lamports and builds its instructions."""
        curve_state, global_config = await asyncio.gather(
            self.get_curve_state(mint), self.get_global_config()
        )
        routing = AccountRouting.for_curve(curve_state, global_config)
        user_ata = associated_token_address(user, mint, routing.token_program_id)
        ata_exists = False if force_create_associated_account else await self.account_exists(user_ata)

        quote = quote_buy(curve_state, sol_amount, slippage_basis_points, global_config.fee_basis_points)
        logger.info(
            f"Buy Estimation for {mint}: SOL_in={sol_amount}, Est.Tokens={quote.output_amount}, "
            f"MaxSolCost (Slip {slippage_basis_points}BPS)={quote.bound}")
        return InstructionBuilder.build_buy_instruction(
            user=user,
            mint=mint,
            curve_state=curve_state,
            global_config=global_config,
            token_amount=quote.output_amount,
            max_sol_cost=quote.bound,
            associated_account_exists=ata_exists,
            force_create_associated_account=force_create_associated_account,
        )

    async def get_sell_instructions_by_token_amount(
        self,
        user: Pubkey,
        mint: Pubkey,
        token_amount: int,
        slippage_basis_points: int,
    ) -> List[Instruction]:
        curve_state, global_config = await asyncio.gather(
            self.get_curve_state(mint), self.get_global_config()
        )
        quote = quote_sell(curve_state, token_amount, global_config.fee_basis_points, slippage_basis_points)
        logger.info(
            f"Sell Estimation for {mint}: Tokens_in={token_amount}, Est.SOL={quote.output_amount}, "
            f"MinSolOut (Slip {slippage_basis_points}BPS)={quote.bound}")
        return [
            InstructionBuilder.build_sell_instruction(
                user=user,
                mint=mint,
                curve_state=curve_state,
                global_config=global_config,
                token_amount=token_amount,
                min_sol_output=quote.bound,
            )
        ]
