"""Configuration document loading and command-line argument parsing for the relay."""

import argparse
import logging
import tomllib
from dataclasses import dataclass

from tcp2serial.errors import ConfigError

logger = logging.getLogger("tcp2serial.config")

DEFAULT_CONFIG = "config.toml"


@dataclass(frozen=True)
class RelayConfig:
    unit_name: str
    central_ip_address: str
    central_ip_port: str
    serial_port: str
    serial_baud_rate: int


def parse_args(argv=None):
    """Parse command-line arguments and return the namespace."""
    parser = argparse.ArgumentParser(
        description="Relay addressed messages from a central TCP server to a local serial port."
    )
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to the TOML configuration file (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging (malformed lines, transport details)",
    )
    return parser.parse_args(argv)


def load_config(path: str) -> RelayConfig:
    """Read and validate the TOML document at ``path``; raise ConfigError on any problem."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    config = _from_document(data)
    _validate(config)
    logger.info("Config loaded from %s", path)
    return config


def _from_document(data: dict) -> RelayConfig:
    missing = [
        key
        for key in (
            "unit_name",
            "central_ip_address",
            "central_ip_port",
            "serial_port",
            "serial_baud_rate",
        )
        if key not in data
    ]
    if missing:
        raise ConfigError(f"Missing config keys: {', '.join(missing)}")

    for key in ("unit_name", "central_ip_address", "serial_port"):
        if not isinstance(data[key], str):
            raise ConfigError(f"{key} must be a string")

    port = data["central_ip_port"]
    # Text in the document, but a bare TOML integer is accepted too.
    if isinstance(port, int) and not isinstance(port, bool):
        port = str(port)
    if not isinstance(port, str):
        raise ConfigError("central_ip_port must be a string or integer")

    baud = data["serial_baud_rate"]
    if isinstance(baud, bool) or not isinstance(baud, int):
        raise ConfigError("serial_baud_rate must be an integer")

    return RelayConfig(
        unit_name=data["unit_name"],
        central_ip_address=data["central_ip_address"],
        central_ip_port=port,
        serial_port=data["serial_port"],
        serial_baud_rate=baud,
    )


def _validate(config: RelayConfig):
    """Validate loaded values; raise ConfigError on invalid values."""
    if not config.central_ip_address.strip():
        raise ConfigError("central_ip_address must be non-empty")
    if not config.serial_port.strip():
        raise ConfigError("serial_port must be non-empty")
    if config.serial_baud_rate <= 0:
        raise ConfigError("serial_baud_rate must be positive")
    try:
        port = int(config.central_ip_port)
    except ValueError:
        port = 0
    if not (1 <= port <= 65535):
        raise ConfigError("central_ip_port must be between 1 and 65535")
