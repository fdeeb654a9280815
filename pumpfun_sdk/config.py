# pumpfun_sdk/config.py

import os
from dotenv import load_dotenv

# Load .env from the project root (or the current directory when installed)
package_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(package_dir)
dotenv_path = os.path.join(project_root, '.env')
load_dotenv(dotenv_path=dotenv_path)
load_dotenv()

# --- Solana Node Connection (only used by the CLI / PumpAccountClient) ---
SOLANA_NODE_RPC_ENDPOINT = os.getenv("SOLANA_NODE_RPC_ENDPOINT", "https://api.mainnet-beta.solana.com")
# It's highly recommended to use a private RPC provider via .env
DEFAULT_COMMITMENT = os.getenv("PUMPFUN_COMMITMENT", "confirmed")

# --- Slippage defaults (basis points) ---
BUY_SLIPPAGE_BPS = int(os.getenv("PUMPFUN_BUY_SLIPPAGE_BPS", "500"))    # Default 5%
SELL_SLIPPAGE_BPS = int(os.getenv("PUMPFUN_SELL_SLIPPAGE_BPS", "500"))  # Default 5%

# --- Logging ---
LOG_LEVEL = os.getenv("PUMPFUN_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("PUMPFUN_LOG_FILE")  # No file logging unless set
