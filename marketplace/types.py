import click
from eth_utils import is_hex_address, to_checksum_address


class MinInt(click.ParamType):
    """An integer option with an inclusive lower bound (block counts, sleep durations)."""

    name = "minint"

    def __init__(self, min_value: int):
        self.min_value = min_value

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            ivalue = value
        else:
            try:
                ivalue = int(value)
            except ValueError:
                self.fail(f"{value} is not a valid integer", param, ctx)
        if ivalue < self.min_value:
            self.fail(f"{value} is below the minimum of {self.min_value}", param, ctx)
        return ivalue


class ChecksumAddress(click.ParamType):
    name = "checksum_address"

    def convert(self, value, param, ctx):
        if not is_hex_address(value):
            self.fail(f"{value} is not a valid ethereum address", param, ctx)
        return to_checksum_address(value)
