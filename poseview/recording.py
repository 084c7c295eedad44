"""A recording stream that keeps visual log records and can stream them over TCP."""

from __future__ import annotations

import base64
import enum
import json
import logging
import socket
import threading
from dataclasses import dataclass, field

import numpy as np

_logger = logging.getLogger(__name__)


class TextLogLevel(str, enum.Enum):
    """Severity attached to a text log entry."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ColorModel(str, enum.Enum):
    """Channel layout of a logged image."""

    L = "L"
    RGB = "RGB"
    RGBA = "RGBA"
    BGR = "BGR"
    BGRA = "BGRA"


def _encode(value):
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"cannot encode {type(value).__name__}")


@dataclass(frozen=True)
class LogRecord:
    """One entry logged at an entity path."""

    path: str
    kind: str
    data: dict = field(default_factory=dict)

    def to_json(self) -> str:
        """Serialise the record as a single JSON line (without newline)."""
        return json.dumps(
            {"path": self.path, "kind": self.kind, "data": self.data},
            default=_encode,
        )


def _parse_addr(addr: str) -> tuple[str, int]:
    host, sep, port_text = addr.rpartition(":")
    if not sep or not host or not port_text.isdigit():
        raise ValueError(f"address must look like HOST:PORT, got {addr!r}")
    port = int(port_text)
    if port > 65535:
        raise ValueError(f"port out of range: {port}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, port


class RecordingStream:
    """Collects log records; when disabled every log call is a no-op.

    Records logged before a TCP connection is made are sent as soon as it
    is established, followed by every later record as it is logged.
    """

    CONNECT_TIMEOUT = 5.0

    def __init__(self, application_id, enabled=True):
        self.application_id = application_id
        self.enabled = bool(enabled)
        self._records: list[LogRecord] = []
        self._sock: socket.socket | None = None
        self._lock = threading.Lock()

    @property
    def records(self) -> tuple[LogRecord, ...]:
        with self._lock:
            return tuple(self._records)

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def log(self, path, kind, **kwargs):
        """Record an entry of the given kind at path; returns it, or None if disabled."""
        if not self.enabled:
            return None
        record = LogRecord(str(path), str(kind), dict(kwargs))
        with self._lock:
            self._records.append(record)
            if self._sock is not None:
                self._send(record)
        return record

    def connect_tcp(self, addr):
        """Connect to a viewer at HOST:PORT; raises ConnectionError on failure."""
        host, port = _parse_addr(addr)
        try:
            sock = socket.create_connection((host, port), timeout=self.CONNECT_TIMEOUT)
        except OSError as exc:
            raise ConnectionError(f"could not connect to {addr}: {exc}") from exc
        with self._lock:
            self._drop_socket()
            self._sock = sock
            header = json.dumps({"application_id": self.application_id})
            if self._send_line(header):
                for record in self._records:
                    if not self._send(record):
                        break

    def close(self):
        """Close the TCP connection, if any. Safe to call more than once."""
        with self._lock:
            self._drop_socket()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _send(self, record: LogRecord) -> bool:
        return self._send_line(record.to_json())

    def _send_line(self, line: str) -> bool:
        if self._sock is None:
            return False
        try:
            self._sock.sendall((line + "\n").encode("utf-8"))
        except OSError as exc:
            _logger.warning("dropping viewer connection: %s", exc)
            self._drop_socket()
            return False
        return True

    def _drop_socket(self):
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None