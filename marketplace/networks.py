from typing import Dict, NamedTuple, Optional

from ape import networks

from marketplace.constants import (
    APE_LOCAL_CHAIN_ID,
    DEFAULT_BLOCK_CONFIRMATIONS,
    DEVELOPMENT_CHAINS,
    HARDHAT_CHAIN_ID,
    LOCAL_CHAIN_IDS,
    SEPOLIA_CHAIN_ID,
)
from marketplace.errors import ConfigError


class NetworkConfig(NamedTuple):
    """Parameters of a target network, resolved once and handed to each component."""

    chain_id: int
    name: str
    block_confirmations: int = DEFAULT_BLOCK_CONFIRMATIONS
    vrf_coordinator: Optional[str] = None
    key_hash: Optional[str] = None
    callback_gas_limit: Optional[int] = None
    subscription_id: Optional[int] = None


# VRF values from https://docs.chain.link/vrf/v2/subscription/supported-networks#sepolia-testnet
_SEPOLIA_VRF_COORDINATOR = "0x8103B0A8A00be2DDC778e6e7eaa21791Cd364625"
_SEPOLIA_KEY_HASH = "0x474e34a077df58807dbe9c96d3c009b23b3c6d0cce433e59bbf5b34f823bc56c"

NETWORK_CONFIG: Dict[int, NetworkConfig] = {
    HARDHAT_CHAIN_ID: NetworkConfig(
        chain_id=HARDHAT_CHAIN_ID,
        name="localhost",
        vrf_coordinator=_SEPOLIA_VRF_COORDINATOR,
        key_hash=_SEPOLIA_KEY_HASH,
        callback_gas_limit=500000,
    ),
    APE_LOCAL_CHAIN_ID: NetworkConfig(chain_id=APE_LOCAL_CHAIN_ID, name="local"),
    SEPOLIA_CHAIN_ID: NetworkConfig(
        chain_id=SEPOLIA_CHAIN_ID,
        name="sepolia",
        block_confirmations=6,
        vrf_coordinator=_SEPOLIA_VRF_COORDINATOR,
        key_hash=_SEPOLIA_KEY_HASH,
        callback_gas_limit=500000,
        subscription_id=4648,
    ),
}


def get_network_config(chain_id: int) -> NetworkConfig:
    try:
        return NETWORK_CONFIG[int(chain_id)]
    except (KeyError, ValueError):
        raise ConfigError(f"No network configuration for chain ID {chain_id}.")


def is_development_chain(network_config: NetworkConfig) -> bool:
    return network_config.name in DEVELOPMENT_CHAINS


def is_local_network() -> bool:
    """Whether the connected provider is a local test chain."""
    network = networks.provider.network
    return network.name in DEVELOPMENT_CHAINS or network.chain_id in LOCAL_CHAIN_IDS


def active_network_config() -> NetworkConfig:
    """Resolves the configuration of the connected network."""
    return get_network_config(networks.provider.chain_id)
