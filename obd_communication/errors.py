"""
errors.py

Exception hierarchy raised by the OBD-II protocol engine.
"""


class OBDError(Exception):
    """Base class for all OBD-II engine errors."""
    pass


class ConfigurationError(OBDError, ValueError):
    """Raised when the device path or baud rate is invalid."""
    pass


class OBDConnectionError(OBDError, ConnectionError):
    """Raised when the ELM327 device cannot be opened or identified."""
    pass


class ProtocolError(OBDError):
    """Raised when the device answers with the '?' unrecognized-command marker."""
    pass


class MalformedResponseError(ProtocolError):
    """Raised when a response field is not valid hexadecimal."""
    pass


class EmptyResponseError(OBDError):
    """Raised when no data came back from the device."""
    pass


class NotFoundError(OBDError, LookupError):
    """Raised when an unknown PID key is requested."""
    pass


class InvalidStateError(OBDError):
    """Raised when an operation is not allowed in the current connection state."""
    pass
