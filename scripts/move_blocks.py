#!/usr/bin/python3
import click
from ape.cli import ConnectedProviderCommand, network_option

from marketplace.chain import move_blocks
from marketplace.networks import is_local_network
from marketplace.options import blocks_option, sleep_ms_option


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@blocks_option
@sleep_ms_option
def cli(network, blocks: int, sleep_ms: int):
    """Mine blocks on a local test chain, one at a time."""
    if not is_local_network():
        raise click.UsageError("Blocks can only be moved on a local test chain.")
    move_blocks(amount=blocks, sleep_ms=sleep_ms)
    print(f"Moved {blocks} blocks")


if __name__ == "__main__":
    cli()
