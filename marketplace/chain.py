import time
from typing import Callable, Optional, Protocol

from ape import chain
from ape.logging import logger

from marketplace.errors import ChainServiceError, InvalidArgument


class ChainService(Protocol):
    def mine_one_block(self) -> None:
        ...


class ApeChainService:
    """Mines blocks on the chain of the connected ape provider."""

    def __init__(self, chain_manager=None):
        self._chain = chain if chain_manager is None else chain_manager

    def mine_one_block(self) -> None:
        try:
            self._chain.mine(num_blocks=1)
        except Exception as e:
            raise ChainServiceError(f"Failed to mine a block: {e}") from e


def _validate_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgument(f"{name} must be a non-negative integer; got {value!r}.")


class ChainAdvancer:
    """
    Produces blocks one at a time on a test chain.

    Indexers watching the chain key off individual block events, so each block can be
    followed by a pause (``delay_ms``) before the next one is mined. An advance is not
    transactional: if mining fails partway, the blocks already produced remain on chain
    and the ChainServiceError propagates to the caller.
    """

    def __init__(
        self,
        service: Optional[ChainService] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.service = ApeChainService() if service is None else service
        self._sleep = sleep

    def advance(self, blocks: int, delay_ms: int = 0) -> int:
        _validate_count("blocks", blocks)
        _validate_count("delay_ms", delay_ms)

        logger.info(f"Moving {blocks} blocks...")
        for _ in range(blocks):
            self.service.mine_one_block()
            if delay_ms:
                logger.info(f"Sleeping for {delay_ms}ms")
                self._sleep(delay_ms / 1000)
        logger.info(f"Moved {blocks} blocks")
        return blocks


def move_blocks(amount: int, sleep_ms: int = 0) -> int:
    """Advances the connected chain by `amount` blocks, pausing `sleep_ms` after each."""
    return ChainAdvancer().advance(blocks=amount, delay_ms=sleep_ms)
