from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple

import yaml

from marketplace.constants import DEFAULT_FRONTEND_CONFIG, REGISTRY_FILENAME
from marketplace.errors import ConfigError
from marketplace.utils import _load_yaml


def _contract_list(contracts: Dict, key: str) -> Tuple[str, ...]:
    names = contracts.get(key) or list()
    if not isinstance(names, list) or not all(isinstance(n, str) and n for n in names):
        raise ConfigError(f"'contracts.{key}' must be a list of contract names.")
    return tuple(names)


class FrontEndConfig(NamedTuple):
    """Where the front-end expects its contract artifacts, and which ones to publish."""

    directory: Path
    registry_filename: str = REGISTRY_FILENAME
    address_contracts: Tuple[str, ...] = ()
    abi_contracts: Tuple[str, ...] = ()

    @property
    def registry_filepath(self) -> Path:
        return self.directory / self.registry_filename

    @classmethod
    def from_dict(cls, config: Dict, base_dir: Optional[Path] = None) -> "FrontEndConfig":
        if not isinstance(config, dict):
            raise ConfigError("Front-end config must be a mapping.")

        frontend = config.get("frontend")
        if not frontend:
            raise ConfigError("'frontend' is not set in config file.")
        if not isinstance(frontend, dict):
            raise ConfigError("'frontend' must be a mapping.")
        directory = frontend.get("dir")
        if not directory:
            raise ConfigError("'frontend.dir' is not set in config file.")
        directory = Path(directory)
        if base_dir and not directory.is_absolute():
            directory = base_dir / directory

        registry_filename = frontend.get("registry", REGISTRY_FILENAME)
        if not isinstance(registry_filename, str) or not registry_filename:
            raise ConfigError("'frontend.registry' must be a non-empty file name.")

        contracts = config.get("contracts") or dict()
        if not isinstance(contracts, dict):
            raise ConfigError("'contracts' must be a mapping.")
        address_contracts = _contract_list(contracts, "addresses")
        abi_contracts = _contract_list(contracts, "abis")
        if not (address_contracts or abi_contracts):
            raise ConfigError(
                "No contracts to publish; set 'contracts.addresses' or 'contracts.abis'."
            )

        return cls(
            directory=directory,
            registry_filename=registry_filename,
            address_contracts=address_contracts,
            abi_contracts=abi_contracts,
        )

    @classmethod
    def from_yaml(cls, filepath: Path = DEFAULT_FRONTEND_CONFIG) -> "FrontEndConfig":
        """Loads the config; relative directories resolve against the YAML file's location."""
        filepath = Path(filepath)
        try:
            config = _load_yaml(filepath)
        except FileNotFoundError:
            raise ConfigError(f"Config file not found at {filepath}.")
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {filepath}: {e}")
        return cls.from_dict(config, base_dir=filepath.parent)
