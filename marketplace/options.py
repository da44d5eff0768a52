from pathlib import Path

import click

from marketplace.constants import (
    ADVANCE_SLEEP_MS,
    DEFAULT_FRONTEND_CONFIG,
    SUPPORTED_CONTRACTS,
)
from marketplace.types import MinInt

config_option = click.option(
    "--config",
    "-c",
    "config_filepath",
    help="Front-end publishing config (YAML)",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=DEFAULT_FRONTEND_CONFIG,
    show_default=True,
)

contract_name_option = click.option(
    "--contract-name",
    "-n",
    "contract_names",
    help="Contract(s) to act on",
    type=click.Choice(SUPPORTED_CONTRACTS),
    multiple=True,
    default=SUPPORTED_CONTRACTS,
    show_default=True,
)

blocks_option = click.option(
    "--blocks",
    "-b",
    help="Number of blocks to mine",
    type=MinInt(0),
    default=1,
    show_default=True,
)

sleep_ms_option = click.option(
    "--sleep-ms",
    "-s",
    help="Milliseconds to wait after each mined block",
    type=MinInt(0),
    default=ADVANCE_SLEEP_MS,
    show_default=True,
)

token_id_option = click.option(
    "--token-id",
    "-t",
    help="ID of the listed BasicNft token",
    type=MinInt(0),
    required=True,
)
