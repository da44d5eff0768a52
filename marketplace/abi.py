from pathlib import Path

from ape.logging import logger
from eth_typing import ABI

from marketplace.errors import InvalidArgument, StorageError
from marketplace.utils import _write_json


def get_abi(contract) -> ABI:
    """Returns the ABI of a contract instance or container as plain JSON dicts."""
    contract_abi = list()
    for entry in contract.contract_type.abi:
        contract_abi.append(entry.model_dump(mode="json", by_alias=True))
    return contract_abi


def _entry_sort_key(entry) -> tuple:
    # overloads share type and name; their input types tell them apart
    input_types = tuple(i.get("type") or "" for i in entry.get("inputs") or [])
    return entry.get("type") or "", entry.get("name") or "", input_types


def canonical_abi(abi: ABI) -> ABI:
    """Orders ABI entries by type, name and input types so repeated syncs write identical files."""
    entries = list(abi)
    entries.sort(key=_entry_sort_key)
    return entries


class AbiSynchronizer:
    """Writes one ABI artifact per contract, replacing whatever was there before."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def filepath(self, contract_name: str) -> Path:
        return self.directory / f"{contract_name}.json"

    def sync(self, contract_name: str, abi: ABI) -> Path:
        if not isinstance(contract_name, str) or not contract_name:
            raise InvalidArgument(
                f"contract_name must be a non-empty string; got {contract_name!r}."
            )
        if not isinstance(abi, list):
            raise InvalidArgument(f"ABI for {contract_name} must be a list of entries.")

        filepath = self.filepath(contract_name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Cannot create ABI directory for {filepath}: {e}", filepath=filepath
            ) from e
        _write_json(canonical_abi(abi), filepath)
        logger.info(f"Wrote {contract_name} ABI to {filepath}.")
        return filepath
