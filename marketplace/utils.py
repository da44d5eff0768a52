import json
import os
from pathlib import Path
from typing import Any

import yaml
from ape import project
from ape.contracts import ContractContainer, ContractInstance

from marketplace.constants import STANDARD_JSON_FORMAT
from marketplace.errors import StorageError, VerificationError


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> Any:
    """Loads a JSON artifact, raising StorageError if it is missing or malformed."""
    try:
        with open(filepath, "r", encoding="utf-8") as file:
            return json.load(file)
    except FileNotFoundError as e:
        raise StorageError(f"Artifact not found at {filepath}.", filepath=filepath) from e
    except json.JSONDecodeError as e:
        raise StorageError(f"Malformed JSON in {filepath}: {e}", filepath=filepath) from e
    except UnicodeDecodeError as e:
        raise StorageError(f"{filepath} is not UTF-8 encoded JSON: {e}", filepath=filepath) from e
    except OSError as e:
        raise StorageError(f"Cannot read {filepath}: {e}", filepath=filepath) from e


def _write_json(data: Any, filepath: Path) -> Path:
    """
    Replaces the content of a JSON artifact.
    Data is written to a sibling temp file which is then renamed over the target,
    so readers never observe a partially written artifact.
    """
    temp_filepath = filepath.with_suffix(".temp.json")
    try:
        with open(temp_filepath, "w", encoding="utf-8") as file:
            json.dump(data, file, **STANDARD_JSON_FORMAT)
            file.flush()
            os.fsync(file.fileno())
        temp_filepath.replace(filepath)
    except (OSError, TypeError, ValueError) as e:
        temp_filepath.unlink(missing_ok=True)
        raise StorageError(f"Failed to write {filepath}: {e}", filepath=filepath) from e
    return filepath


def check_etherscan_plugin() -> None:
    """Checks that the ape-etherscan plugin is installed."""
    try:
        import ape_etherscan  # noqa: F401
    except ImportError:
        raise VerificationError("Please install the ape-etherscan plugin to verify contracts.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        return getattr(project, contract)
    except AttributeError:
        raise ValueError(f"No contract found with name '{contract}'.")


def get_latest_deployment(contract: str) -> ContractInstance:
    """Returns the most recent deployment of a contract on the connected network."""
    contract_instances = get_contract_container(contract).deployments
    if not contract_instances:
        raise ValueError(f"No deployment of '{contract}' found on the current network.")
    return contract_instances[-1]
