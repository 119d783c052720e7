"""Exceptions raised by the relay. All of them are fatal to the process."""


class RelayError(Exception):
    """Base class for relay failures."""


class ConfigError(RelayError, ValueError):
    """Configuration document is missing, unreadable or invalid."""


class ConnectError(RelayError):
    """Network connect or serial open failed at startup."""


class StreamError(RelayError):
    """Reading from the network stream failed."""


class WriteError(RelayError):
    """Writing to the serial port failed."""
