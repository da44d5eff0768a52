#!/usr/bin/python3
from pathlib import Path

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from marketplace.config import FrontEndConfig
from marketplace.networks import active_network_config
from marketplace.options import config_option, contract_name_option
from marketplace.publish import FrontEndPublisher, publish_deployments
from marketplace.utils import get_contract_container, get_latest_deployment
from marketplace.verify import SourceVerifier, verification_enabled


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_option()
@contract_name_option
@config_option
@click.option(
    "--skip-frontend",
    help="Do not publish addresses and ABIs to the front-end",
    is_flag=True,
    default=False,
)
def cli(network, account, contract_names, config_filepath: Path, skip_frontend: bool):
    """Deploy marketplace contracts, verify them and publish them to the front-end."""
    network_config = active_network_config()
    config = FrontEndConfig.from_yaml(config_filepath)
    verifier = SourceVerifier(enabled=verification_enabled(network_config))

    print(
        f"Account: {account.address}",
        f"Network: {network_config.name}",
        f"Chain ID: {network_config.chain_id}",
        f"Confirmations: {network_config.block_confirmations}",
        f"Verify: {verifier.enabled}",
        sep="\n",
    )

    deployments = dict()
    for contract_name in contract_names:
        container = get_contract_container(contract_name)
        print(f"\nDeploying {contract_name}...")
        instance = account.deploy(
            container, required_confirmations=network_config.block_confirmations
        )
        print(f"(i) {contract_name} deployed at {instance.address}")
        deployments[contract_name] = instance

        result = verifier.verify(instance.address, [])
        print(f"(i) Verification of {contract_name}: {result.status.value}")

    if skip_frontend:
        return

    # contracts left out of this run are published from their latest deployment
    for contract_name in (*config.address_contracts, *config.abi_contracts):
        if contract_name not in deployments:
            deployments[contract_name] = get_latest_deployment(contract_name)

    print("\nUpdating contract information to front-end...")
    publisher = FrontEndPublisher.from_config(config, verifier=verifier)
    publish_deployments(publisher, config, network_config.chain_id, deployments)
    print("Update success!!")


if __name__ == "__main__":
    cli()
