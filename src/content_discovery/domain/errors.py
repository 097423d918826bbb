"""Error taxonomy shared by the core, the store adapters and the service layer.

Callers can catch ``ContentDiscoveryError`` for everything raised here, or the
builtin base (``ValueError``, ``LookupError``, ``RuntimeError``) each subclass
also derives from.
"""


class ContentDiscoveryError(Exception):
    """Base class for content discovery failures."""


class InvalidArgumentError(ContentDiscoveryError, ValueError):
    """Raised for malformed caller input (bad page, limit, sort field, empty tag or query).

    Never retried.
    """


class DocumentNotFoundError(ContentDiscoveryError, LookupError):
    """Raised when a document looked up by id or slug does not exist."""

    def __init__(self, key: str, *, by: str = "id") -> None:
        self.key = key
        self.by = by
        super().__init__(f"Document not found ({by}={key!r})")


class StoreUnavailableError(ContentDiscoveryError, RuntimeError):
    """Raised by document store adapters when the backing store cannot be read.

    The core propagates it unchanged; retry policy belongs to the store's owner.
    """
