from pathlib import Path
from typing import Optional


class MarketplaceError(Exception):
    """Base class for errors raised by the marketplace deployment tooling."""


class StorageError(MarketplaceError):
    """Raised when a registry or ABI artifact cannot be read, parsed or written."""

    def __init__(self, message: str, filepath: Optional[Path] = None):
        super().__init__(message)
        self.filepath = filepath


class ChainServiceError(MarketplaceError):
    """Raised when the connected chain fails to mine a block."""


class VerificationError(MarketplaceError):
    """Raised by verification services; never escapes SourceVerifier."""


class InvalidArgument(MarketplaceError, ValueError):
    pass


class ConfigError(MarketplaceError, ValueError):
    pass
