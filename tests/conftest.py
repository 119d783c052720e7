import threading

import pytest
import serial


class MockSerial:
    """Serial port double that records written bytes."""

    def __init__(self, fail_on_write=False):
        self.written = []
        self.flushes = 0
        self.is_open = True
        self.fail_on_write = fail_on_write
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        if self.fail_on_write:
            raise serial.SerialException("device disconnected")
        with self._lock:
            self.written.append(bytes(data))
        return len(data)

    def flush(self):
        self.flushes += 1

    def close(self):
        self.is_open = False


@pytest.fixture
def mock_serial():
    return MockSerial()


@pytest.fixture
def failing_serial():
    return MockSerial(fail_on_write=True)


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        'unit_name = "alpha"\n'
        'central_ip_address = "127.0.0.1"\n'
        'central_ip_port = "5000"\n'
        'serial_port = "/dev/ttyUSB0"\n'
        "serial_baud_rate = 115200\n"
    )
    return str(path)
