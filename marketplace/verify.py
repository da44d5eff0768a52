import os
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional, Protocol, Sequence

from ape import networks
from ape.logging import logger

from marketplace.constants import ETHERSCAN_API_KEY_ENVVAR
from marketplace.errors import VerificationError
from marketplace.networks import NetworkConfig, is_development_chain
from marketplace.utils import check_etherscan_plugin


class VerificationService(Protocol):
    def verify_source(self, address: str, constructor_args: Sequence[Any]) -> None:
        ...


class ExplorerVerificationService:
    """
    Publishes contract source through the explorer of the connected ape network.
    The explorer plugin recovers constructor arguments from the creation transaction,
    so they are not forwarded.
    """

    def __init__(self, explorer=None):
        self._explorer = explorer

    def verify_source(self, address: str, constructor_args: Sequence[Any]) -> None:
        explorer = self._explorer
        if explorer is None:
            check_etherscan_plugin()
            explorer = networks.provider.network.explorer
        if explorer is None:
            raise VerificationError(
                f"No explorer configured for network {networks.provider.network.name}."
            )
        try:
            explorer.publish_contract(address)
        except Exception as e:
            raise VerificationError(f"Explorer rejected {address}: {e}") from e


class VerificationStatus(Enum):
    VERIFIED = "verified"
    FAILED = "failed"
    SKIPPED = "skipped"


class VerificationResult(NamedTuple):
    address: str
    status: VerificationStatus
    error: Optional[Exception] = None

    @property
    def verified(self) -> bool:
        return self.status is VerificationStatus.VERIFIED


def verification_enabled(
    network_config: NetworkConfig, environ: Optional[Mapping[str, str]] = None
) -> bool:
    """Verification runs only on live networks and only when an explorer API key is set."""
    environ = os.environ if environ is None else environ
    if is_development_chain(network_config):
        return False
    return bool(environ.get(ETHERSCAN_API_KEY_ENVVAR))


class SourceVerifier:
    """
    Best-effort source verification.
    Failures are logged and reported as a FAILED result; they are never raised.
    """

    def __init__(self, service: Optional[VerificationService] = None, enabled: bool = True):
        self.service = ExplorerVerificationService() if service is None else service
        self.enabled = enabled

    def verify(self, address: str, constructor_args: Sequence[Any] = ()) -> VerificationResult:
        if not self.enabled:
            return VerificationResult(address=address, status=VerificationStatus.SKIPPED)

        logger.info(f"Verifying contract at {address}...")
        try:
            self.service.verify_source(address, list(constructor_args))
        except Exception as e:
            logger.warning(f"Verification of {address} failed: {e}")
            return VerificationResult(address=address, status=VerificationStatus.FAILED, error=e)

        logger.success(f"Verified contract at {address}.")
        return VerificationResult(address=address, status=VerificationStatus.VERIFIED)
