#!/usr/bin/python3
from pathlib import Path

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, network_option

from marketplace.config import FrontEndConfig
from marketplace.options import config_option
from marketplace.publish import FrontEndPublisher, publish_deployments
from marketplace.utils import get_latest_deployment


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@config_option
def cli(network, config_filepath: Path):
    """Publish the latest deployed addresses and ABIs to the front-end."""
    config = FrontEndConfig.from_yaml(config_filepath)
    chain_id = networks.provider.chain_id

    deployments = dict()
    for contract_name in (*config.address_contracts, *config.abi_contracts):
        deployments[contract_name] = get_latest_deployment(contract_name)

    print("Updating contract information to front-end...")
    publisher = FrontEndPublisher.from_config(config)
    reports = publish_deployments(publisher, config, chain_id, deployments)
    for report in reports:
        status = "recorded" if report.registry_updated else "unchanged"
        print(f"\t{report.contract_name} at {report.address}: address {status}")
    print("Update success!!")


if __name__ == "__main__":
    cli()
