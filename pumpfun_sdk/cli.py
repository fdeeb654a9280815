# pumpfun_sdk/cli.py

import argparse
import asyncio
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from pumpfun_sdk import config
from pumpfun_sdk.core.accounts import CurveState
from pumpfun_sdk.core.client import PumpAccountClient
from pumpfun_sdk.core.constants import BONDING_CURVE_SEED, DEFAULT_TOKEN_DECIMALS, LAMPORTS_PER_SOL
from pumpfun_sdk.core.curve import PriceQuote, quote_buy, quote_sell
from pumpfun_sdk.core.exceptions import PumpFunSdkException
from pumpfun_sdk.core.instruction_builder import AccountRouting
from pumpfun_sdk.core.pda import (
    associated_token_address,
    bonding_curve_address,
    creator_vault_address,
    derive_address,
)
from pumpfun_sdk.core.pubkeys import PumpAddresses, SolanaProgramAddresses
from pumpfun_sdk.utils.logger import get_logger, set_log_level, setup_file_logging

logger = get_logger(__name__)


def _amount(text: str) -> Decimal:
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {text!r}")
    if not amount.is_finite() or amount < 0:
        raise argparse.ArgumentTypeError(f"amount must be a non-negative number, got {text!r}")
    return amount


def to_base_units(amount: Decimal, units_per_whole: int) -> int:
    """Converts a UI amount to integer base units, dropping precision below one unit."""
    return int(amount * units_per_whole)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pumpfun-sdk", description="pump.fun bonding curve toolkit")
    parser.add_argument("--rpc", default=config.SOLANA_NODE_RPC_ENDPOINT,
                        help="RPC endpoint (default: SOLANA_NODE_RPC_ENDPOINT)")
    sub = parser.add_subparsers(dest="command", required=True)

    derive = sub.add_parser("derive", help="Print the program addresses for a mint (offline)")
    derive.add_argument("mint")
    derive.add_argument("--user", help="Also print this wallet's token account")
    derive.add_argument("--creator", help="Also print this creator's vault")
    derive.add_argument("--token-2022", action="store_true", help="Derive token accounts under Token-2022")

    buy = sub.add_parser("quote-buy", help="Quote a buy against the live curve")
    buy.add_argument("mint")
    buy.add_argument("sol", type=_amount, help="SOL to spend")
    buy.add_argument("--slippage-bps", type=int, default=config.BUY_SLIPPAGE_BPS)

    sell = sub.add_parser("quote-sell", help="Quote a sell against the live curve")
    sell.add_argument("mint")
    sell.add_argument("tokens", type=_amount, help="UI token amount to sell")
    sell.add_argument("--slippage-bps", type=int, default=config.SELL_SLIPPAGE_BPS)
    return parser


def _print_derive(args: argparse.Namespace) -> None:
    mint = Pubkey.from_string(args.mint)
    token_program = (SolanaProgramAddresses.TOKEN_2022_PROGRAM_ID if args.token_2022
                     else SolanaProgramAddresses.TOKEN_PROGRAM_ID)
    curve, bump = derive_address(PumpAddresses.PROGRAM_ID, [BONDING_CURVE_SEED, bytes(mint)])

    print(f"Token Mint:              {mint}")
    print(f"Bonding Curve PDA:       {curve} (Bump: {bump})")
    print(f"Associated Curve ATA:    {associated_token_address(curve, mint, token_program)}")
    if args.user:
        user = Pubkey.from_string(args.user)
        print(f"User Token Account:      {associated_token_address(user, mint, token_program)}")
    if args.creator:
        print(f"Creator Vault:           {creator_vault_address(Pubkey.from_string(args.creator))}")


def _print_quote(side: str, mint: Pubkey, curve_state: CurveState, quote: PriceQuote, routing: AccountRouting) -> None:
    print(f"--- {side} quote for {mint} ({routing.mode.name}) ---")
    print(f"Bonding Curve:        {bonding_curve_address(mint)}")
    print(f"Spot Price:           {curve_state.calculate_price():.10f} SOL/token")
    print(f"Input:                {quote.input_amount}")
    print(f"Output:               {quote.output_amount}")
    print(f"Fee:                  {quote.fee_amount}")
    print(f"Bound (slip {quote.slippage_basis_points} bps): {quote.bound}")


async def _run_quote(args: argparse.Namespace) -> None:
    mint = Pubkey.from_string(args.mint)
    async with PumpAccountClient(args.rpc, commitment=Commitment(config.DEFAULT_COMMITMENT)) as client:
        curve_state, global_config = await asyncio.gather(
            client.get_curve_state(mint), client.get_global_config()
        )
    routing = AccountRouting.for_curve(curve_state, global_config)

    if args.command == "quote-buy":
        lamports = to_base_units(args.sol, LAMPORTS_PER_SOL)
        quote = quote_buy(curve_state, lamports, args.slippage_bps, global_config.fee_basis_points)
        _print_quote("Buy", mint, curve_state, quote, routing)
    else:
        token_units = to_base_units(args.tokens, 10 ** DEFAULT_TOKEN_DECIMALS)
        quote = quote_sell(curve_state, token_units, global_config.fee_basis_points, args.slippage_bps)
        _print_quote("Sell", mint, curve_state, quote, routing)


def main(argv: Optional[List[str]] = None) -> int:
    set_log_level(config.LOG_LEVEL)
    if config.LOG_FILE:
        setup_file_logging(config.LOG_FILE)

    args = build_parser().parse_args(argv)
    try:
        if args.command == "derive":
            _print_derive(args)
        else:
            asyncio.run(_run_quote(args))
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 2
    except PumpFunSdkException as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
