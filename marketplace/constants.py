from pathlib import Path

#
# Filesystem
#

PACKAGE_DIR = Path(__file__).parent
PROJECT_DIR = PACKAGE_DIR.parent
CONFIG_DIR = PROJECT_DIR / "configs"
DEFAULT_FRONTEND_CONFIG = CONFIG_DIR / "frontend.yml"

# sibling checkout of the nextjs front-end
FRONTEND_CONSTANTS_DIR = PROJECT_DIR.parent / "nextjs-nft-marketplace" / "constants"
REGISTRY_FILENAME = "ContractAddresses.json"

STANDARD_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}

#
# Contracts
#

NFT_MARKETPLACE = "NftMarketplace"
BASIC_NFT = "BasicNft"

SUPPORTED_CONTRACTS = [NFT_MARKETPLACE, BASIC_NFT]

#
# Networks
#

HARDHAT_CHAIN_ID = 31337
APE_LOCAL_CHAIN_ID = 1337
SEPOLIA_CHAIN_ID = 11155111

LOCAL_CHAIN_IDS = (HARDHAT_CHAIN_ID, APE_LOCAL_CHAIN_ID)
DEVELOPMENT_CHAINS = ["localhost", "hardhat", "local"]

DEFAULT_BLOCK_CONFIRMATIONS = 1

#
# Verification
#

ETHERSCAN_API_KEY_ENVVAR = "ETHERSCAN_API_KEY"

#
# Local chain pacing
#

# event indexers miss blocks when several are mined at once
MINT_ADVANCE_BLOCKS = 1
BUY_ADVANCE_BLOCKS = 2
ADVANCE_SLEEP_MS = 1000
