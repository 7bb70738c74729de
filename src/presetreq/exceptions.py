"""src/presetreq/exceptions.py

Presetreq Exceptions hierarchy.
"""

# pylint: disable=redefined-builtin


class PresetreqError(Exception):
    """Base exception for all Presetreq errors."""


class ConfigurationError(PresetreqError):
    """
    The request or preset is not configured well enough to be sent.

    Raised for a missing url or transport, an unknown merge strategy,
    or a status rule outside the supported grammar.
    """


class RequestError(PresetreqError):
    """General exception for Request errors."""


class BodyParseError(RequestError):
    """Response body could not be decoded as JSON."""


class TransportError(RequestError):
    """
    Base exception for failures reported by the transport.
    Wraps whatever the underlying HTTP client raised.
    """


class NetworkError(TransportError):
    """Connection or protocol failure below the HTTP layer."""


class TimeoutError(TransportError):
    """
    Base exception for timeouts.
    """

    def __init__(self, message: str = "Operation timed out"):
        super().__init__(message)


class ConnectTimeout(TimeoutError):
    """Timeout during connection establishment."""


class ReadTimeout(TimeoutError):
    """Timeout during data reception."""
