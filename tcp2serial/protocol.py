"""Addressed message grammar: ``:<recipient>;!<payload>``."""

from typing import NamedTuple, Optional, Tuple


def parse_message(line: str) -> Optional[Tuple[str, str]]:
    """Return ``(recipient, payload)`` for an addressed line, or None.

    The line must start with ``:`` and contain exactly one ``;``. Every
    leading ``:`` is stripped from the recipient, and the part after the
    ``;`` must start with ``!``. There is no escaping, so neither field may
    contain ``;``.
    """
    if not line.startswith(":"):
        return None
    parts = line.split(";")
    if len(parts) != 2:
        return None
    recipient = parts[0].lstrip(":")
    control = parts[1]
    if not control.startswith("!"):
        return None
    return recipient, control[1:]


class Message(NamedTuple):
    recipient: str
    payload: str
    raw: str

    @classmethod
    def from_line(cls, line: str) -> Optional["Message"]:
        parsed = parse_message(line)
        if parsed is None:
            return None
        return cls(parsed[0], parsed[1], line)

    def encode(self, encoding: str = "utf-8") -> bytes:
        """Serial wire form: payload bytes and a single newline."""
        return self.payload.encode(encoding) + b"\n"
