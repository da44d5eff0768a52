#!/usr/bin/python3
import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from marketplace.chain import move_blocks
from marketplace.constants import (
    ADVANCE_SLEEP_MS,
    BASIC_NFT,
    BUY_ADVANCE_BLOCKS,
    NFT_MARKETPLACE,
)
from marketplace.networks import is_local_network
from marketplace.options import token_id_option
from marketplace.utils import get_latest_deployment


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_option()
@token_id_option
def cli(network, account, token_id: int):
    """Buy a listed BasicNft token at its listing price."""
    marketplace = get_latest_deployment(NFT_MARKETPLACE)
    basic_nft = get_latest_deployment(BASIC_NFT)

    listing = marketplace.getListingItem(basic_nft.address, token_id)
    price = listing.price
    print(f"The price to buy NFT: {price}")

    marketplace.buyItem(
        basic_nft.address, token_id, value=price, sender=account, required_confirmations=1
    )
    print(f"NFT with tokenId: {token_id} has been bought!")

    if is_local_network():
        move_blocks(BUY_ADVANCE_BLOCKS, sleep_ms=ADVANCE_SLEEP_MS)


if __name__ == "__main__":
    cli()
