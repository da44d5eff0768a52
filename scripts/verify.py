from pathlib import Path

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, network_option

from marketplace.config import FrontEndConfig
from marketplace.constants import SUPPORTED_CONTRACTS
from marketplace.options import config_option
from marketplace.registry import RegistryStore, latest_address
from marketplace.types import ChecksumAddress
from marketplace.verify import SourceVerifier


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@click.option(
    "--contract-name",
    "-n",
    "contract_names",
    help="Contract whose latest registry address should be verified",
    type=click.Choice(SUPPORTED_CONTRACTS),
    multiple=True,
)
@click.option(
    "--address",
    "-a",
    "addresses",
    help="Contract address to verify",
    type=ChecksumAddress(),
    multiple=True,
)
@config_option
def cli(network, contract_names, addresses, config_filepath: Path):
    """Verify deployed contracts on the network's block explorer."""
    if not (contract_names or addresses):
        raise click.BadOptionUsage(
            option_name="--contract-name",
            message="Provide at least one '--contract-name' or '--address'.",
        )

    addresses = list(addresses)
    if contract_names:
        config = FrontEndConfig.from_yaml(config_filepath)
        chain_id = networks.provider.chain_id
        registry = RegistryStore(config.registry_filepath).load()
        for contract_name in contract_names:
            address = latest_address(registry, chain_id=chain_id, contract_name=contract_name)
            if address is None:
                raise click.ClickException(
                    f"Contract '{contract_name}' not found in registry, "
                    f"'{config.registry_filepath}', for chain {chain_id}"
                )
            addresses.append(address)

    verifier = SourceVerifier()
    for address in addresses:
        result = verifier.verify(address)
        print(f"(i) {address}: {result.status.value}")


if __name__ == "__main__":
    cli()
