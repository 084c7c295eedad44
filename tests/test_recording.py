import json
import socket
import threading

import numpy as np
import pytest

from poseview.recording import ColorModel, LogRecord, RecordingStream, TextLogLevel


def _line_server(count):
    server = socket.create_server(("127.0.0.1", 0))
    port = server.getsockname()[1]
    lines = []

    def run():
        conn, _ = server.accept()
        with conn, conn.makefile("r", encoding="utf-8") as reader:
            for _ in range(count):
                line = reader.readline()
                if not line:
                    break
                lines.append(json.loads(line))
        server.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, lines, thread


def test_disabled_stream_records_nothing():
    rec = RecordingStream("mve", enabled=False)
    assert rec.log("a", "text_log", text="hi") is None
    assert rec.records == ()


def test_enabled_stream_keeps_records_in_order():
    rec = RecordingStream("mve", enabled=True)
    first = rec.log("a", "text_log", text="one")
    rec.log("b/c", "points3d", positions=np.zeros((2, 3)))
    assert [r.path for r in rec.records] == ["a", "b/c"]
    assert first == LogRecord("a", "text_log", {"text": "one"})


def test_record_to_json_encodes_arrays_and_enums():
    record = LogRecord(
        "img",
        "image",
        {"data": np.array([[1, 2]], dtype=np.uint8), "color_model": ColorModel.BGR,
         "level": TextLogLevel.ERROR, "raw": b"\x00\x01"},
    )
    decoded = json.loads(record.to_json())
    assert decoded["data"]["data"] == [[1, 2]]
    assert decoded["data"]["color_model"] == "BGR"
    assert decoded["data"]["level"] == "ERROR"
    assert decoded["data"]["raw"] == "AAE="


def test_connect_sends_backlog_and_new_records():
    port, lines, thread = _line_server(3)
    rec = RecordingStream("mve")
    rec.log("early", "text_log", text="before")
    rec.connect_tcp(f"127.0.0.1:{port}")
    assert rec.connected
    rec.log("late", "text_log", text="after")
    thread.join(timeout=5)
    rec.close()
    assert lines[0] == {"application_id": "mve"}
    assert lines[1]["path"] == "early"
    assert lines[2]["data"]["text"] == "after"
    assert not rec.connected


def test_connect_refused_raises_connection_error():
    server = socket.create_server(("127.0.0.1", 0))
    port = server.getsockname()[1]
    server.close()
    rec = RecordingStream("mve")
    with pytest.raises(ConnectionError):
        rec.connect_tcp(f"127.0.0.1:{port}")
    assert not rec.connected


@pytest.mark.parametrize("addr", ["127.0.0.1", ":9876", "host:port", "host:70000"])
def test_bad_address_rejected(addr):
    with pytest.raises(ValueError):
        RecordingStream("mve").connect_tcp(addr)


def test_close_is_idempotent_and_context_manager():
    with RecordingStream("mve") as rec:
        rec.log("x", "text_log", text="t")
    rec.close()
    assert len(rec.records) == 1
    assert not rec.connected