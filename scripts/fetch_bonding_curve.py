# scripts/fetch_bonding_curve.py

import asyncio
import os
import sys

from solders.pubkey import Pubkey

# Adjust path to run script from project root (e.g., python scripts/fetch_bonding_curve.py <mint>)
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from pumpfun_sdk import config
from pumpfun_sdk.core.client import PumpAccountClient
from pumpfun_sdk.core.constants import LAMPORTS_PER_SOL
from pumpfun_sdk.core.exceptions import PumpFunSdkException
from pumpfun_sdk.core.pda import bonding_curve_address


async def main(mint_address: str) -> None:
    """Fetches and prints the state of the bonding curve for a mint."""
    print(f"Using RPC Endpoint: {config.SOLANA_NODE_RPC_ENDPOINT}")
    mint = Pubkey.from_string(mint_address)

    async with PumpAccountClient(config.SOLANA_NODE_RPC_ENDPOINT) as client:
        print(f"Fetching state for bonding curve: {bonding_curve_address(mint)}")
        try:
            curve_state = await client.get_curve_state(mint)
        except PumpFunSdkException as e:
            print(f"Could not fetch or decode bonding curve state: {e}")
            return

    print("\n--- Bonding Curve State ---")
    print(f"Virtual SOL Reserves: {curve_state.virtual_sol_reserves / LAMPORTS_PER_SOL:.6f} SOL")
    print(f"Virtual Token Reserves: {curve_state.virtual_token_reserves}")
    print(f"Real SOL Reserves: {curve_state.real_sol_reserves / LAMPORTS_PER_SOL:.6f} SOL")
    print(f"Real Token Reserves: {curve_state.real_token_reserves}")
    print(f"Creator: {curve_state.creator}")
    print(f"Mode: {curve_state.mode.name}")
    print(f"Complete: {curve_state.complete}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/fetch_bonding_curve.py <mint>")
        sys.exit(1)
    asyncio.run(main(sys.argv[1]))
