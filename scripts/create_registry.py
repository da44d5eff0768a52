#!/usr/bin/python3
from pathlib import Path

import click

from marketplace.config import FrontEndConfig
from marketplace.options import config_option
from marketplace.registry import create_registry


@click.command()
@config_option
def cli(config_filepath: Path):
    """Seed an empty contract address registry for the front-end."""
    config = FrontEndConfig.from_yaml(config_filepath)
    filepath = create_registry(config.registry_filepath)
    print(f"(i) Empty registry created at {filepath}")


if __name__ == "__main__":
    cli()
