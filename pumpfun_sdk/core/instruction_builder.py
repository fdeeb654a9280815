# pumpfun_sdk/core/instruction_builder.py
from dataclasses import dataclass
from typing import List, Optional

from borsh_construct import Bool, CStruct, Option, String, U64
from construct import Bytes as FixedBytes
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from .accounts import CurveMode, CurveState, GlobalConfig
from .constants import (
    BUY_DISCRIMINATOR,
    CREATE_ATA_IDEMPOTENT_DATA,
    CREATE_DISCRIMINATOR,
    CREATE_V2_DISCRIMINATOR,
    SELL_DISCRIMINATOR,
    U64_MAX,
)
from .curve import quote_initial_buy
from .exceptions import ArithmeticOverflow
from .pda import (
    associated_token_address,
    bonding_curve_address,
    creator_vault_address,
    mayhem_state_address,
    metadata_address,
    mint_authority_address,
    user_volume_accumulator_address,
)
from .pubkeys import MayhemAddresses, PumpAddresses, SolanaProgramAddresses
from ..utils.logger import get_logger

logger = get_logger(__name__)

# --- Instruction argument layouts (after the 8-byte discriminator) ---
CREATE_ARGS_LAYOUT = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "creator" / FixedBytes(32),
)

CREATE_V2_ARGS_LAYOUT = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "creator" / FixedBytes(32),
    "is_mayhem_mode" / Bool,
)

BUY_ARGS_LAYOUT = CStruct(
    "amount" / U64,
    "max_sol_cost" / U64,
)
TRACK_VOLUME_LAYOUT = Option(Bool)

SELL_ARGS_LAYOUT = CStruct(
    "amount" / U64,
    "min_sol_output" / U64,
)


def _require_u64(name: str, value: int) -> None:
    if value < 0 or value > U64_MAX:
        raise ArithmeticOverflow(f"{name}={value} does not fit in u64")


@dataclass(frozen=True)
class AccountRouting:
    """
    The account set that differs between standard and mayhem curves.

    Standard curves trade through the SPL Token program, pay the global fee
    recipient and track volume. Mayhem curves use Token-2022, pay a fixed
    fee recipient and carry no volume accumulator accounts.
    """
    mode: CurveMode
    token_program_id: Pubkey
    fee_recipient: Pubkey
    include_volume_accumulators: bool

    @classmethod
    def standard(cls, fee_recipient: Pubkey) -> "AccountRouting":
        return cls(
            mode=CurveMode.STANDARD,
            token_program_id=SolanaProgramAddresses.TOKEN_PROGRAM_ID,
            fee_recipient=fee_recipient,
            include_volume_accumulators=True,
        )

    @classmethod
    def mayhem(cls) -> "AccountRouting":
        return cls(
            mode=CurveMode.MAYHEM,
            token_program_id=SolanaProgramAddresses.TOKEN_2022_PROGRAM_ID,
            fee_recipient=MayhemAddresses.FEE_RECIPIENT,
            include_volume_accumulators=False,
        )

    @classmethod
    def for_mode(cls, mode: CurveMode, global_config: GlobalConfig) -> "AccountRouting":
        if CurveMode(mode) is CurveMode.MAYHEM:
            return cls.mayhem()
        return cls.standard(global_config.fee_recipient)

    @classmethod
    def for_curve(cls, curve_state: CurveState, global_config: GlobalConfig) -> "AccountRouting":
        return cls.for_mode(curve_state.mode, global_config)


class InstructionBuilder:
    @staticmethod
    def get_create_ata_instruction(
            payer: Pubkey,
            owner: Pubkey,
            mint: Pubkey,
            token_program_id: Pubkey = SolanaProgramAddresses.TOKEN_PROGRAM_ID,
            ata_pubkey: Optional[Pubkey] = None
    ) -> Instruction:
        """
        Generates an idempotent create instruction for an Associated Token Account.
        Safe to include even if the account already exists.
        """
        associated_token_address_ = ata_pubkey or associated_token_address(owner, mint, token_program_id)

        return Instruction(
            program_id=SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID,
            accounts=[
                AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
                AccountMeta(pubkey=associated_token_address_, is_signer=False, is_writable=True),
                AccountMeta(pubkey=owner, is_signer=False, is_writable=False),
                AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
                AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
                AccountMeta(pubkey=token_program_id, is_signer=False, is_writable=False),
            ],
            data=CREATE_ATA_IDEMPOTENT_DATA
        )

    @staticmethod
    def build_create_instruction(
            user: Pubkey,
            mint: Pubkey,
            name: str,
            symbol: str,
            uri: str,
            creator: Optional[Pubkey] = None,
            mayhem_mode: bool = False,
    ) -> Instruction:
        """
        Builds the instruction that launches a new token on a fresh curve.

        Standard launches mint through the SPL Token program with a Metaplex
        metadata account. Mayhem launches use the Token-2022 variant of the
        instruction and register the mint with the mayhem program.
        The mint keypair must co-sign the transaction.
        """
        creator = creator or user
        if mayhem_mode:
            return InstructionBuilder._build_create_v2_instruction(user, mint, name, symbol, uri, creator)

        token_program_id = SolanaProgramAddresses.TOKEN_PROGRAM_ID
        bonding_curve = bonding_curve_address(mint)
        instruction_data = CREATE_DISCRIMINATOR + CREATE_ARGS_LAYOUT.build(
            {"name": name, "symbol": symbol, "uri": uri, "creator": bytes(creator)}
        )

        accounts = [
            AccountMeta(pubkey=mint, is_signer=True, is_writable=True),  # 0. mint
            AccountMeta(pubkey=mint_authority_address(), is_signer=False, is_writable=False),  # 1. mintAuthority
            AccountMeta(pubkey=bonding_curve, is_signer=False, is_writable=True),  # 2. bondingCurve
            AccountMeta(pubkey=associated_token_address(bonding_curve, mint, token_program_id), is_signer=False,
                        is_writable=True),  # 3. associatedBondingCurve
            AccountMeta(pubkey=PumpAddresses.GLOBAL_STATE, is_signer=False, is_writable=False),  # 4. global
            AccountMeta(pubkey=PumpAddresses.METADATA_PROGRAM_ID, is_signer=False, is_writable=False),
            # 5. mplTokenMetadata
            AccountMeta(pubkey=metadata_address(mint), is_signer=False, is_writable=True),  # 6. metadata
            AccountMeta(pubkey=user, is_signer=True, is_writable=True),  # 7. user
            AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            # 8. systemProgram
            AccountMeta(pubkey=token_program_id, is_signer=False, is_writable=False),  # 9. tokenProgram
            AccountMeta(pubkey=SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID, is_signer=False,
                        is_writable=False),  # 10. associatedTokenProgram
            AccountMeta(pubkey=SolanaProgramAddresses.RENT_SYSVAR_PUBKEY, is_signer=False, is_writable=False),
            # 11. rent
            AccountMeta(pubkey=PumpAddresses.EVENT_AUTHORITY, is_signer=False, is_writable=False),  # 12. eventAuthority
            AccountMeta(pubkey=PumpAddresses.PROGRAM_ID, is_signer=False, is_writable=False),  # 13. program
        ]

        logger.debug(f"Built create instruction for mint {mint} (creator {creator})")
        return Instruction(
            program_id=PumpAddresses.PROGRAM_ID,
            accounts=accounts,
            data=instruction_data
        )

    @staticmethod
    def _build_create_v2_instruction(
            user: Pubkey,
            mint: Pubkey,
            name: str,
            symbol: str,
            uri: str,
            creator: Pubkey,
    ) -> Instruction:
        token_program_id = SolanaProgramAddresses.TOKEN_2022_PROGRAM_ID
        bonding_curve = bonding_curve_address(mint)
        instruction_data = CREATE_V2_DISCRIMINATOR + CREATE_V2_ARGS_LAYOUT.build(
            {"name": name, "symbol": symbol, "uri": uri, "creator": bytes(creator), "is_mayhem_mode": True}
        )

        accounts = [
            AccountMeta(pubkey=mint, is_signer=True, is_writable=True),  # 0. mint
            AccountMeta(pubkey=mint_authority_address(), is_signer=False, is_writable=False),  # 1. mintAuthority
            AccountMeta(pubkey=bonding_curve, is_signer=False, is_writable=True),  # 2. bondingCurve
            AccountMeta(pubkey=associated_token_address(bonding_curve, mint, token_program_id), is_signer=False,
                        is_writable=True),  # 3. associatedBondingCurve
            AccountMeta(pubkey=PumpAddresses.GLOBAL_STATE, is_signer=False, is_writable=False),  # 4. global
            AccountMeta(pubkey=user, is_signer=True, is_writable=True),  # 5. user
            AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            # 6. systemProgram
            AccountMeta(pubkey=token_program_id, is_signer=False, is_writable=False),  # 7. tokenProgram
            AccountMeta(pubkey=SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID, is_signer=False,
                        is_writable=False),  # 8. associatedTokenProgram
            AccountMeta(pubkey=MayhemAddresses.PROGRAM_ID, is_signer=False, is_writable=True),  # 9. mayhemProgram
            AccountMeta(pubkey=MayhemAddresses.GLOBAL_PARAMS, is_signer=False, is_writable=False),  # 10. globalParams
            AccountMeta(pubkey=MayhemAddresses.SOL_VAULT, is_signer=False, is_writable=True),  # 11. solVault
            AccountMeta(pubkey=mayhem_state_address(mint), is_signer=False, is_writable=True),  # 12. mayhemState
            AccountMeta(pubkey=associated_token_address(MayhemAddresses.SOL_VAULT, mint, token_program_id),
                        is_signer=False, is_writable=True),  # 13. mayhemTokenVault
            AccountMeta(pubkey=PumpAddresses.EVENT_AUTHORITY, is_signer=False, is_writable=False),  # 14. eventAuthority
            AccountMeta(pubkey=PumpAddresses.PROGRAM_ID, is_signer=False, is_writable=False),  # 15. program
        ]

        logger.debug(f"Built mayhem create instruction for mint {mint} (creator {creator})")
        return Instruction(
            program_id=PumpAddresses.PROGRAM_ID,
            accounts=accounts,
            data=instruction_data
        )

    @staticmethod
    def build_buy_instruction(
            user: Pubkey,
            mint: Pubkey,
            curve_state: CurveState,
            global_config: GlobalConfig,
            token_amount: int,
            max_sol_cost: int,
            track_volume: Optional[bool] = True,
            associated_account_exists: Optional[bool] = None,
            force_create_associated_account: bool = False,
    ) -> List[Instruction]:
        """
        Builds the buy instruction for an existing curve, preceded by an
        idempotent ATA-create unless the caller confirmed the account exists.

        `associated_account_exists` comes from the caller's own existence check;
        None (unknown) is treated as missing.
        """
        routing = AccountRouting.for_curve(curve_state, global_config)
        instructions: List[Instruction] = []
        if force_create_associated_account or associated_account_exists is not True:
            instructions.append(
                InstructionBuilder.get_create_ata_instruction(
                    payer=user, owner=user, mint=mint, token_program_id=routing.token_program_id
                )
            )
        instructions.append(
            InstructionBuilder._buy_instruction(
                user, mint, curve_state.creator, routing, token_amount, max_sol_cost, track_volume
            )
        )
        return instructions

    @staticmethod
    def build_sell_instruction(
            user: Pubkey,
            mint: Pubkey,
            curve_state: CurveState,
            global_config: GlobalConfig,
            token_amount: int,
            min_sol_output: int,
    ) -> Instruction:
        """Builds the sell instruction for an existing curve."""
        routing = AccountRouting.for_curve(curve_state, global_config)
        return InstructionBuilder._sell_instruction(
            user, mint, curve_state.creator, routing, token_amount, min_sol_output
        )

    @staticmethod
    def build_create_and_buy_instructions(
            user: Pubkey,
            mint: Pubkey,
            name: str,
            symbol: str,
            uri: str,
            global_config: GlobalConfig,
            sol_amount: int,
            slippage_basis_points: int,
            mayhem_mode: bool = False,
            track_volume: Optional[bool] = True,
    ) -> List[Instruction]:
        """
        Launches a token and, when `sol_amount` > 0, buys into it in the same
        transaction, priced off the global config's initial reserves.
        """
        instructions = [
            InstructionBuilder.build_create_instruction(user, mint, name, symbol, uri, mayhem_mode=mayhem_mode)
        ]
        if sol_amount <= 0:
            return instructions

        quote = quote_initial_buy(global_config, sol_amount, slippage_basis_points)
        mode = CurveMode.MAYHEM if mayhem_mode else CurveMode.STANDARD
        routing = AccountRouting.for_mode(mode, global_config)
        instructions.append(
            InstructionBuilder.get_create_ata_instruction(
                payer=user, owner=user, mint=mint, token_program_id=routing.token_program_id
            )
        )
        instructions.append(
            InstructionBuilder._buy_instruction(
                user, mint, user, routing, quote.output_amount, quote.bound, track_volume
            )
        )
        logger.info(
            f"Create+buy for {mint}: SOL_in={sol_amount}, Est.Tokens={quote.output_amount}, "
            f"MaxSolCost (Slip {slippage_basis_points}BPS)={quote.bound}")
        return instructions

    @staticmethod
    def _buy_instruction(
            user: Pubkey,
            mint: Pubkey,
            creator: Pubkey,
            routing: AccountRouting,
            token_amount: int,
            max_sol_cost: int,
            track_volume: Optional[bool],
    ) -> Instruction:
        _require_u64("token_amount", token_amount)
        _require_u64("max_sol_cost", max_sol_cost)

        instruction_data = BUY_DISCRIMINATOR + BUY_ARGS_LAYOUT.build(
            {"amount": token_amount, "max_sol_cost": max_sol_cost}
        )
        if track_volume is not None:
            instruction_data += TRACK_VOLUME_LAYOUT.build(track_volume)

        bonding_curve = bonding_curve_address(mint)
        token_program_id = routing.token_program_id

        accounts = [
            AccountMeta(pubkey=PumpAddresses.GLOBAL_STATE, is_signer=False, is_writable=False),  # 0. global
            AccountMeta(pubkey=routing.fee_recipient, is_signer=False, is_writable=True),  # 1. feeRecipient
            AccountMeta(pubkey=mint, is_signer=False, is_writable=False),  # 2. mint
            AccountMeta(pubkey=bonding_curve, is_signer=False, is_writable=True),  # 3. bondingCurve
            AccountMeta(pubkey=associated_token_address(bonding_curve, mint, token_program_id), is_signer=False,
                        is_writable=True),  # 4. associatedBondingCurve
            AccountMeta(pubkey=associated_token_address(user, mint, token_program_id), is_signer=False,
                        is_writable=True),  # 5. associatedUser
            AccountMeta(pubkey=user, is_signer=True, is_writable=True),  # 6. user
            AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            # 7. systemProgram
            AccountMeta(pubkey=token_program_id, is_signer=False, is_writable=False),  # 8. tokenProgram
            AccountMeta(pubkey=creator_vault_address(creator), is_signer=False, is_writable=True),  # 9. creatorVault
            AccountMeta(pubkey=PumpAddresses.EVENT_AUTHORITY, is_signer=False, is_writable=False),  # 10. eventAuthority
            AccountMeta(pubkey=PumpAddresses.PROGRAM_ID, is_signer=False, is_writable=False),  # 11. program
        ]
        if routing.include_volume_accumulators:
            accounts += [
                AccountMeta(pubkey=PumpAddresses.GLOBAL_VOLUME_ACCUMULATOR, is_signer=False, is_writable=True),
                # 12. globalVolumeAccumulator
                AccountMeta(pubkey=user_volume_accumulator_address(user), is_signer=False, is_writable=True),
                # 13. userVolumeAccumulator
            ]
        accounts += [
            AccountMeta(pubkey=PumpAddresses.FEE_CONFIG, is_signer=False, is_writable=False),  # feeConfig
            AccountMeta(pubkey=PumpAddresses.FEE_PROGRAM, is_signer=False, is_writable=False),  # feeProgram
        ]

        logger.debug(
            f"Built buy instruction ({routing.mode.name}) for {mint}: amount={token_amount}, max_sol_cost={max_sol_cost}")
        return Instruction(
            program_id=PumpAddresses.PROGRAM_ID,
            accounts=accounts,
            data=instruction_data
        )

    @staticmethod
    def _sell_instruction(
            user: Pubkey,
            mint: Pubkey,
            creator: Pubkey,
            routing: AccountRouting,
            token_amount: int,
            min_sol_output: int,
    ) -> Instruction:
        _require_u64("token_amount", token_amount)
        _require_u64("min_sol_output", min_sol_output)

        instruction_data = SELL_DISCRIMINATOR + SELL_ARGS_LAYOUT.build(
            {"amount": token_amount, "min_sol_output": min_sol_output}
        )

        bonding_curve = bonding_curve_address(mint)
        token_program_id = routing.token_program_id

        # Sell takes the creator vault before the token program, unlike buy.
        accounts = [
            AccountMeta(pubkey=PumpAddresses.GLOBAL_STATE, is_signer=False, is_writable=False),  # 0. global
            AccountMeta(pubkey=routing.fee_recipient, is_signer=False, is_writable=True),  # 1. feeRecipient
            AccountMeta(pubkey=mint, is_signer=False, is_writable=False),  # 2. mint
            AccountMeta(pubkey=bonding_curve, is_signer=False, is_writable=True),  # 3. bondingCurve
            AccountMeta(pubkey=associated_token_address(bonding_curve, mint, token_program_id), is_signer=False,
                        is_writable=True),  # 4. associatedBondingCurve
            AccountMeta(pubkey=associated_token_address(user, mint, token_program_id), is_signer=False,
                        is_writable=True),  # 5. associatedUser
            AccountMeta(pubkey=user, is_signer=True, is_writable=True),  # 6. user
            AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            # 7. systemProgram
            AccountMeta(pubkey=creator_vault_address(creator), is_signer=False, is_writable=True),  # 8. creatorVault
            AccountMeta(pubkey=token_program_id, is_signer=False, is_writable=False),  # 9. tokenProgram
            AccountMeta(pubkey=PumpAddresses.EVENT_AUTHORITY, is_signer=False, is_writable=False),  # 10. eventAuthority
            AccountMeta(pubkey=PumpAddresses.PROGRAM_ID, is_signer=False, is_writable=False),  # 11. program
            AccountMeta(pubkey=PumpAddresses.FEE_CONFIG, is_signer=False, is_writable=False),  # 12. feeConfig
            AccountMeta(pubkey=PumpAddresses.FEE_PROGRAM, is_signer=False, is_writable=False),  # 13. feeProgram
        ]

        logger.debug(
            f"Built sell instruction ({routing.mode.name}) for {mint}: amount={token_amount}, min_sol_output={min_sol_output}")
        return Instruction(
            program_id=PumpAddresses.PROGRAM_ID,
            accounts=accounts,
            data=instruction_data
        )


build_create_instruction = InstructionBuilder.build_create_instruction
build_buy_instruction = InstructionBuilder.build_buy_instruction
build_sell_instruction = InstructionBuilder.build_sell_instruction
build_create_and_buy_instructions = InstructionBuilder.build_create_and_buy_instructions
