# pumpfun_sdk/core/pda.py
"""
Program-derived address derivation.

`derive_address` runs the runtime's canonical bump search through solders:
bumps are tried from 255 down to 0 and the first off-curve hash is the
address. The helpers below pin the seed sets the pump program uses for each
of its accounts.
"""

from typing import Sequence, Tuple

from solders.pubkey import Pubkey

from .constants import (
    BONDING_CURVE_SEED,
    CREATOR_VAULT_SEED,
    EVENT_AUTHORITY_SEED,
    GLOBAL_SEED,
    GLOBAL_VOLUME_ACCUMULATOR_SEED,
    MAYHEM_STATE_SEED,
    METADATA_SEED,
    MINT_AUTHORITY_SEED,
    USER_VOLUME_ACCUMULATOR_SEED,
)
from .exceptions import NoValidAddress
from .pubkeys import MayhemAddresses, PumpAddresses, SolanaProgramAddresses

MAX_SEED_LENGTH = 32
MAX_SEEDS = 16  # including the bump byte

_find_program_address = Pubkey.find_program_address


def _validate_seeds(seeds: Sequence[bytes]) -> None:
    if len(seeds) + 1 > MAX_SEEDS:
        raise ValueError(f"At most {MAX_SEEDS - 1} seeds are allowed, got {len(seeds)}")
    for index, seed in enumerate(seeds):
        if len(seed) > MAX_SEED_LENGTH:
            raise ValueError(f"Seed {index} is {len(seed)} bytes, max is {MAX_SEED_LENGTH}")


def derive_address(program_id: Pubkey, seeds: Sequence[bytes]) -> Tuple[Pubkey, int]:
    """
    Finds the program address for `seeds` under `program_id`.

    Returns:
        (address, bump) for the highest bump whose address is off-curve.

    Raises:
        ValueError: more than 15 seeds, or a seed longer than 32 bytes.
        NoValidAddress: every bump from 255 to 0 produced an on-curve point.
    """
    seeds = [bytes(seed) for seed in seeds]
    _validate_seeds(seeds)
    try:
        address, bump = _find_program_address(seeds, program_id)
    except ValueError as e:
        raise NoValidAddress(f"No off-curve address for {len(seeds)} seeds under {program_id}") from e
    return address, bump


def global_config_address(program_id: Pubkey = PumpAddresses.PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [GLOBAL_SEED])[0]


def mint_authority_address(program_id: Pubkey = PumpAddresses.PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [MINT_AUTHORITY_SEED])[0]


def bonding_curve_address(mint: Pubkey, program_id: Pubkey = PumpAddresses.PROGRAM_ID) -> Pubkey:
    """Curve state account for `mint`."""
    return derive_address(program_id, [BONDING_CURVE_SEED, bytes(mint)])[0]


def metadata_address(mint: Pubkey) -> Pubkey:
    metadata_program = PumpAddresses.METADATA_PROGRAM_ID
    return derive_address(metadata_program, [METADATA_SEED, bytes(metadata_program), bytes(mint)])[0]


def creator_vault_address(creator: Pubkey, program_id: Pubkey = PumpAddresses.PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [CREATOR_VAULT_SEED, bytes(creator)])[0]


def user_volume_accumulator_address(user: Pubkey, program_id: Pubkey = PumpAddresses.PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [USER_VOLUME_ACCUMULATOR_SEED, bytes(user)])[0]


def global_volume_accumulator_address(program_id: Pubkey = PumpAddresses.PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [GLOBAL_VOLUME_ACCUMULATOR_SEED])[0]


def event_authority_address(program_id: Pubkey = PumpAddresses.PROGRAM_ID) -> Pubkey:
    return derive_address(program_id, [EVENT_AUTHORITY_SEED])[0]


def associated_token_address(
        owner: Pubkey,
        mint: Pubkey,
        token_program_id: Pubkey = SolanaProgramAddresses.TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Associated token account of `owner` for `mint` under the given token program."""
    return derive_address(
        SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID,
        [bytes(owner), bytes(token_program_id), bytes(mint)],
    )[0]


def associated_bonding_curve_address(
        mint: Pubkey,
        token_program_id: Pubkey = SolanaProgramAddresses.TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Token account holding the curve's real token reserves."""
    return associated_token_address(bonding_curve_address(mint), mint, token_program_id)


def mayhem_state_address(mint: Pubkey) -> Pubkey:
    return derive_address(MayhemAddresses.PROGRAM_ID, [MAYHEM_STATE_SEED, bytes(mint)])[0]
