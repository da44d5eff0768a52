#!/usr/bin/python3
import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from marketplace.chain import move_blocks
from marketplace.constants import ADVANCE_SLEEP_MS, BASIC_NFT, MINT_ADVANCE_BLOCKS
from marketplace.networks import is_local_network
from marketplace.utils import get_latest_deployment


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_option()
def cli(network, account):
    """Mint a BasicNft token."""
    basic_nft = get_latest_deployment(BASIC_NFT)

    print("Minting NFT...")
    receipt = basic_nft.mintNft(sender=account, required_confirmations=1)
    token_id = receipt.events[0].event_arguments["tokenId"]
    print(f"Minted tokenId {token_id} from contract: {basic_nft.address}")

    if is_local_network():
        move_blocks(MINT_ADVANCE_BLOCKS, sleep_ms=ADVANCE_SLEEP_MS)


if __name__ == "__main__":
    cli()
