"""Exceptions raised by OmniSearch."""


class OmniSearchError(Exception):
    """Base class for all OmniSearch errors."""


class ConfigurationError(OmniSearchError, ValueError):
    """A search function was built with invalid options."""


class SearchFunctionClosedError(OmniSearchError, RuntimeError):
    """A disposed search function was used."""


class StreamClosedError(OmniSearchError, RuntimeError):
    """A snapshot was emitted on a closed result stream."""


class RemoteSearchError(OmniSearchError):
    """The remote search endpoint failed or returned an unusable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
