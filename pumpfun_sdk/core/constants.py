from typing import Final

# Anchor discriminators: sha256("account:<Type>")[:8] / sha256("global:<ix>")[:8]
GLOBAL_ACCOUNT_DISCRIMINATOR: Final[bytes] = bytes([167, 232, 232, 177, 200, 108, 114, 127])
BONDING_CURVE_DISCRIMINATOR: Final[bytes] = bytes([23, 183, 248, 55, 96, 216, 172, 96])

CREATE_DISCRIMINATOR: Final[bytes] = bytes.fromhex("181ec828051c0777")
CREATE_V2_DISCRIMINATOR: Final[bytes] = bytes.fromhex("d6904cec5f8b31b4")
BUY_DISCRIMINATOR: Final[bytes] = bytes.fromhex("66063d1201daebea")
SELL_DISCRIMINATOR: Final[bytes] = bytes.fromhex("33e685a4017f83ad")

# Associated token program instruction tag for CreateIdempotent
CREATE_ATA_IDEMPOTENT_DATA: Final[bytes] = b"\x01"

# PDA seeds
GLOBAL_SEED: Final[bytes] = b"global"
MINT_AUTHORITY_SEED: Final[bytes] = b"mint-authority"
BONDING_CURVE_SEED: Final[bytes] = b"bonding-curve"
METADATA_SEED: Final[bytes] = b"metadata"
CREATOR_VAULT_SEED: Final[bytes] = b"creator-vault"
USER_VOLUME_ACCUMULATOR_SEED: Final[bytes] = b"user_volume_accumulator"
GLOBAL_VOLUME_ACCUMULATOR_SEED: Final[bytes] = b"global_volume_accumulator"
EVENT_AUTHORITY_SEED: Final[bytes] = b"__event_authority"
MAYHEM_STATE_SEED: Final[bytes] = b"mayhem-state"

# Solana-wide constants
LAMPORTS_PER_SOL: Final[int] = 1_000_000_000
DEFAULT_TOKEN_DECIMALS: Final[int] = 6
BASIS_POINTS_DENOMINATOR: Final[int] = 10_000
U64_MAX: Final[int] = 2**64 - 1
