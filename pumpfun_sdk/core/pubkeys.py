# pumpfun_sdk/core/pubkeys.py

from typing import Final

from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID_SOLDERS  # Renamed to avoid conflict
from spl.token.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID as ASSOCIATED_TOKEN_PROGRAM_ID_SPL,
    TOKEN_2022_PROGRAM_ID as TOKEN_2022_PROGRAM_ID_SPL,
    TOKEN_PROGRAM_ID as TOKEN_PROGRAM_ID_SPL,
)

from .constants import EVENT_AUTHORITY_SEED, GLOBAL_SEED, GLOBAL_VOLUME_ACCUMULATOR_SEED


class PumpAddresses:
    # (1) The on-chain pump.fun program ID
    PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P")

    # (2) Global config PDA (seed = b"global")
    GLOBAL_STATE: Final[Pubkey] = Pubkey.find_program_address([GLOBAL_SEED], PROGRAM_ID)[0]

    # (3) Event authority PDA (seed = b"__event_authority")
    EVENT_AUTHORITY: Final[Pubkey] = Pubkey.find_program_address([EVENT_AUTHORITY_SEED], PROGRAM_ID)[0]

    # (4) Volume tracking (seed = b"global_volume_accumulator")
    GLOBAL_VOLUME_ACCUMULATOR: Final[Pubkey] = Pubkey.find_program_address(
        [GLOBAL_VOLUME_ACCUMULATOR_SEED], PROGRAM_ID
    )[0]

    # (5) Fee program and its config account for this program
    FEE_PROGRAM: Final[Pubkey] = Pubkey.from_string("pfeeUxB6jkeY1Hxd7CsFCAjcbHA9rWtchMGdZ6VojVZ")
    FEE_CONFIG: Final[Pubkey] = Pubkey.from_string("8Wf5TiAheLUqBrKXeYg2JtAFFMWtKdG2BSFgqUcPVwTt")

    # (6) Token metadata program (create)
    METADATA_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")


class MayhemAddresses:
    PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("MAyhSmzXzV1pTf7LsNkrNwkWKTo4ougAJ1PPg47MD4e")
    FEE_RECIPIENT: Final[Pubkey] = Pubkey.from_string("GesfTA3X2arioaHp8bbKdjG9vJtskViWACZoYvxp4twS")
    GLOBAL_PARAMS: Final[Pubkey] = Pubkey.from_string("13ec7XdrjF3h3YcqBTFDSReRcUFwbCnJaAQspM4j6DDJ")
    SOL_VAULT: Final[Pubkey] = Pubkey.from_string("BwWK17cbHxwWBKZkUYvzxLcNQ1YVyaFezduWbtm2de6s")


class SolanaProgramAddresses:
    SYSTEM_PROGRAM_ID: Final[Pubkey] = SYSTEM_PROGRAM_ID_SOLDERS
    TOKEN_PROGRAM_ID: Final[Pubkey] = TOKEN_PROGRAM_ID_SPL
    TOKEN_2022_PROGRAM_ID: Final[Pubkey] = TOKEN_2022_PROGRAM_ID_SPL
    ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID: Final[Pubkey] = ASSOCIATED_TOKEN_PROGRAM_ID_SPL
    RENT_SYSVAR_PUBKEY: Final[Pubkey] = Pubkey.from_string(
        "SysvarRent111111111111111111111111111111111"
    )


# for convenience, re-export the program ID at module scope
PROGRAM_ID = PumpAddresses.PROGRAM_ID
