from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from ape.contracts import ContractInstance
from ape.logging import logger
from eth_typing import ABI
from eth_utils import is_hex_address, to_checksum_address

from marketplace.abi import AbiSynchronizer, get_abi
from marketplace.config import FrontEndConfig
from marketplace.errors import ConfigError
from marketplace.registry import ChainId, ContractName, RegistryStore
from marketplace.verify import SourceVerifier, VerificationResult, VerificationStatus


class PublishReport(NamedTuple):
    contract_name: ContractName
    address: str
    registry_updated: bool
    abi_filepath: Optional[Path]


def _normalize_address(address: str) -> str:
    if is_hex_address(address):
        return to_checksum_address(address)
    return address


class FrontEndPublisher:
    """Hands deployment results over to the front-end: address history, then ABI."""

    def __init__(
        self,
        store: RegistryStore,
        abis: AbiSynchronizer,
        verifier: Optional[SourceVerifier] = None,
    ):
        self.store = store
        self.abis = abis
        self.verifier = verifier

    @classmethod
    def from_config(
        cls, config: FrontEndConfig, verifier: Optional[SourceVerifier] = None
    ) -> "FrontEndPublisher":
        return cls(
            store=RegistryStore(config.registry_filepath),
            abis=AbiSynchronizer(config.directory),
            verifier=verifier,
        )

    def publish(
        self,
        chain_id: ChainId,
        contract_name: ContractName,
        address: str,
        abi: Optional[ABI] = None,
        record_address: bool = True,
    ) -> PublishReport:
        address = _normalize_address(address)

        registry_updated = False
        if record_address:
            registry_updated = self.store.update(
                chain_id=chain_id, contract_name=contract_name, address=address
            )

        abi_filepath = None
        if abi is not None:
            abi_filepath = self.abis.sync(contract_name=contract_name, abi=abi)

        return PublishReport(
            contract_name=contract_name,
            address=address,
            registry_updated=registry_updated,
            abi_filepath=abi_filepath,
        )

    def verify(self, address: str, constructor_args: Sequence[Any] = ()) -> VerificationResult:
        if self.verifier is None:
            return VerificationResult(address=address, status=VerificationStatus.SKIPPED)
        return self.verifier.verify(address, constructor_args)


def publish_deployments(
    publisher: FrontEndPublisher,
    config: FrontEndConfig,
    chain_id: ChainId,
    instances: Dict[ContractName, ContractInstance],
) -> List[PublishReport]:
    """Publishes the configured contracts out of a name -> deployed instance mapping."""
    contract_names = list(config.address_contracts)
    contract_names.extend(n for n in config.abi_contracts if n not in contract_names)

    reports = list()
    for contract_name in contract_names:
        try:
            instance = instances[contract_name]
        except KeyError:
            raise ConfigError(f"No deployment of {contract_name} to publish for chain {chain_id}.")

        abi = get_abi(instance) if contract_name in config.abi_contracts else None
        report = publisher.publish(
            chain_id=chain_id,
            contract_name=contract_name,
            address=instance.address,
            abi=abi,
            record_address=contract_name in config.address_contracts,
        )
        reports.append(report)

    logger.success(f"Published {len(reports)} contract(s) to {config.directory}.")
    return reports
