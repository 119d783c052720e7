"""TCP-to-serial relay: forward messages addressed to this unit to a local serial port."""

from tcp2serial.bridge import forward_lines, run_relay
from tcp2serial.config import RelayConfig, load_config
from tcp2serial.protocol import Message, parse_message

__all__ = [
    "Message",
    "RelayConfig",
    "forward_lines",
    "load_config",
    "parse_message",
    "run_relay",
]
