"""Asyncio-based relay from a central TCP server to a local serial port."""

import asyncio
import logging
from typing import Tuple

import serial

from tcp2serial.config import RelayConfig
from tcp2serial.errors import ConnectError, StreamError, WriteError
from tcp2serial.protocol import Message

logger = logging.getLogger("tcp2serial")


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def open_serial(port: str, baud: int) -> serial.Serial:
    """Open the serial port with the given settings."""
    try:
        return serial.Serial(port=port, baudrate=baud)
    except (serial.SerialException, ValueError) as e:
        raise ConnectError(f"Cannot open serial port {port} @ {baud} baud: {e}") from e


async def open_network(
    host: str, port: str
) -> Tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Connect to the central server at host:port."""
    try:
        return await asyncio.open_connection(host, int(port))
    except (OSError, ValueError) as e:
        raise ConnectError(f"Cannot connect to {host}:{port}: {e}") from e


def _write_line(ser: serial.Serial, data: bytes):
    ser.write(data)
    ser.flush()


async def _read_line(reader: asyncio.StreamReader, encoding: str):
    """Return the next line without its terminator, or None at end of stream."""
    chunks = []
    try:
        while True:
            try:
                chunks.append(await reader.readuntil(b"\n"))
                break
            except asyncio.IncompleteReadError as e:
                chunks.append(e.partial)
                break
            except asyncio.LimitOverrunError as e:
                # Lines have no length cap: take the buffered part and keep reading.
                chunks.append(await reader.readexactly(e.consumed))
    except OSError as e:
        raise StreamError(f"Network read failed: {e}") from e
    data = b"".join(chunks)
    if not data:
        return None
    if data.endswith(b"\n"):
        data = data[:-1]
        if data.endswith(b"\r"):
            data = data[:-1]
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise StreamError(f"Network stream is not valid {encoding}: {e}") from e


async def forward_lines(
    reader: asyncio.StreamReader,
    ser: serial.Serial,
    unit_name: str,
    encoding: str = "utf-8",
) -> int:
    """Forward messages addressed to unit_name until the stream ends.

    Each line is read, parsed and (if addressed here) written to serial
    before the next read starts, so serial output keeps network order.
    Returns the number of forwarded messages. Read failures raise
    StreamError and write failures raise WriteError.
    """
    forwarded = 0
    while True:
        line = await _read_line(reader, encoding)
        if line is None:
            logger.info("Network stream closed")
            return forwarded
        logger.info("Received: %s", line)

        message = Message.from_line(line)
        if message is None:
            logger.debug("Not an addressed message, ignoring: %r", line)
            continue
        if message.recipient != unit_name:
            logger.info("Different unit (%s), skipping", message.recipient)
            continue

        logger.info("Forwarding: %s", message.payload)
        try:
            await asyncio.to_thread(_write_line, ser, message.encode(encoding))
        except (serial.SerialException, OSError) as e:
            raise WriteError(f"Serial write failed: {e}") from e
        forwarded += 1


async def run_relay_async(config: RelayConfig) -> int:
    """Connect to the server, open the serial port, and relay until the stream closes."""
    reader, writer = await open_network(
        config.central_ip_address, config.central_ip_port
    )
    logger.debug(
        "Connected to %s:%s", config.central_ip_address, config.central_ip_port
    )
    try:
        ser = open_serial(config.serial_port, config.serial_baud_rate)
        logger.debug(
            "Serial opened: %s @ %s baud", config.serial_port, config.serial_baud_rate
        )
        try:
            logger.info("Connection established")
            return await forward_lines(reader, ser, config.unit_name)
        finally:
            ser.close()
            logger.debug("Serial closed")
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            logger.debug("Network connection closed with error", exc_info=True)


def run_relay(config: RelayConfig) -> int:
    """Synchronous entry: run the asyncio relay until the stream closes or interrupted."""
    try:
        return asyncio.run(run_relay_async(config))
    except KeyboardInterrupt:
        return 0
