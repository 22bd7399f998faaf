"""Exceptions raised by the catalog pipeline."""


class PokedexError(Exception):
    """Base class for catalog errors."""


class InvalidArgumentError(PokedexError, TypeError):
    """A lookup was given a value of the wrong type."""


class MissingReferenceError(PokedexError, ValueError):
    """A detail load was attempted for a stub without a detail URL."""


class InvalidStateError(PokedexError, ValueError):
    """Neighbor resolution was asked for a name absent from its own forms."""


class RemoteFailureError(PokedexError, RuntimeError):
    """A request to the remote API failed or returned unusable data.

    The underlying error is available as ``__cause__``.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url
