from typing import Optional


class ChainClientError(RuntimeError):
    """A block could not be fetched or decoded."""

    def __init__(self, message: str, block_number: Optional[int] = None):
        super().__init__(message)
        self.block_number = block_number


class TransportFailure(ChainClientError):
    """Network exchange failed or the endpoint answered with a non-2xx status."""


class DecodeFailure(ChainClientError):
    """Response arrived but is not a well formed block payload."""
