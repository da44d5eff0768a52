import copy
from pathlib import Path
from typing import Dict, List, Optional

from ape.logging import logger

from marketplace.errors import InvalidArgument, StorageError
from marketplace.utils import _load_json, _write_json

ChainId = int
ContractName = str
AddressHistory = List[str]
ContractRecord = Dict[ContractName, AddressHistory]

# keyed by decimal chain id string, exactly as stored on disk
Registry = Dict[str, ContractRecord]


def _validate_registry(data, filepath: Path) -> Registry:
    """Checks that parsed JSON has the chain id -> contract name -> addresses shape."""
    if not isinstance(data, dict):
        raise StorageError(f"Registry at {filepath} is not a JSON object.", filepath=filepath)
    for chain_id, contracts in data.items():
        if not isinstance(contracts, dict):
            raise StorageError(
                f"Registry at {filepath} has a malformed entry for chain {chain_id}.",
                filepath=filepath,
            )
        for contract_name, history in contracts.items():
            if not isinstance(history, list) or not all(isinstance(a, str) for a in history):
                raise StorageError(
                    f"Registry at {filepath} has a malformed address history "
                    f"for {contract_name} on chain {chain_id}.",
                    filepath=filepath,
                )
    return data


def _validate_entry(chain_id: ChainId, contract_name: ContractName, address: str) -> None:
    if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id < 0:
        raise InvalidArgument(f"chain_id must be a non-negative integer; got {chain_id!r}.")
    if not isinstance(contract_name, str) or not contract_name:
        raise InvalidArgument(f"contract_name must be a non-empty string; got {contract_name!r}.")
    if not isinstance(address, str) or not address:
        raise InvalidArgument(f"address must be a non-empty string; got {address!r}.")


def read_registry(filepath: Path) -> Registry:
    data = _load_json(filepath)
    return _validate_registry(data, filepath)


def write_registry(registry: Registry, filepath: Path) -> Path:
    """Rewrites the whole registry file."""
    return _write_json(registry, filepath)


def create_registry(filepath: Path) -> Path:
    """Seeds an empty registry; the front-end expects the file to exist."""
    if filepath.exists():
        raise FileExistsError(f"Registry already exists at {filepath}")
    filepath.parent.mkdir(parents=True, exist_ok=True)
    return write_registry(registry=dict(), filepath=filepath)


def upsert(
    registry: Registry, chain_id: ChainId, contract_name: ContractName, address: str
) -> Registry:
    """
    Returns a copy of the registry with the address recorded for the contract on the chain.

    The address is appended to the contract's history unless it is already part of it,
    in which case the returned registry is equal to the input. Entries of other chains
    and contracts are left untouched. The input registry is never mutated.
    """
    _validate_entry(chain_id=chain_id, contract_name=contract_name, address=address)

    updated = copy.deepcopy(registry)
    contracts = updated.setdefault(str(chain_id), dict())
    history = contracts.setdefault(contract_name, list())
    if address not in history:
        history.append(address)
    return updated


def get_addresses(
    registry: Registry, chain_id: ChainId, contract_name: ContractName
) -> AddressHistory:
    """Returns the address history of a contract on a chain, earliest first."""
    return list(registry.get(str(chain_id), {}).get(contract_name, []))


def latest_address(
    registry: Registry, chain_id: ChainId, contract_name: ContractName
) -> Optional[str]:
    history = get_addresses(registry, chain_id=chain_id, contract_name=contract_name)
    return history[-1] if history else None


class RegistryStore:
    """The on-disk address registry shared with the front-end."""

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)

    def load(self) -> Registry:
        return read_registry(self.filepath)

    def save(self, registry: Registry) -> Path:
        return write_registry(registry=registry, filepath=self.filepath)

    def update(self, chain_id: ChainId, contract_name: ContractName, address: str) -> bool:
        """
        Records a deployment address. Returns True if the registry file was rewritten,
        False if the address was already recorded.
        """
        _validate_entry(chain_id=chain_id, contract_name=contract_name, address=address)

        registry = self.load()
        updated = upsert(registry, chain_id=chain_id, contract_name=contract_name, address=address)
        if updated == registry:
            logger.info(f"{contract_name} at {address} already recorded for chain {chain_id}.")
            return False

        self.save(updated)
        logger.info(f"Recorded {contract_name} at {address} for chain {chain_id}.")
        return True
