"""Error types raised by the catalog and trending store clients."""


class MovieDiscoveryError(Exception):
    """Base class for all errors raised by this package."""


class CatalogError(MovieDiscoveryError):
    """A search could not produce a result list.

    The message is what the user gets to see.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(CatalogError):
    """Network failure, non-2xx status or an unreadable body."""


class DomainError(CatalogError):
    """Well-formed response whose payload reports a failed lookup."""


class TrendingStoreError(MovieDiscoveryError):
    """The hosted trending store rejected or failed a request."""


class TrendingReadError(TrendingStoreError):
    pass


class TrendingWriteError(TrendingStoreError):
    pass
