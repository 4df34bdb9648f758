"""Tests for output handlers and color selection."""

import io

import pytest

from imbusyyall.colors import Colors, colorize
from imbusyyall.config import RunConfig
from imbusyyall.output import StreamHandler, create_output_handler, resolve_color


class TtyStream(io.StringIO):
    def isatty(self):
        return True


def test_stream_handler_keeps_colors():
    stream = io.StringIO()
    handler = StreamHandler(stream=stream, color=True)
    handler.write([colorize("GET", Colors.GREEN), "second"])
    handler.write_blank()
    handler.close()
    assert stream.getvalue() == "\x1b[32mGET\x1b[0m\nsecond\n\n"


def test_stream_handler_strips_colors():
    stream = io.StringIO()
    handler = StreamHandler(stream=stream, color=False)
    handler.write([colorize("ERROR", Colors.RED) + " boom"])
    assert stream.getvalue() == "ERROR boom\n"


def test_resolve_color_explicit_modes():
    stream = io.StringIO()
    assert resolve_color("always", stream) is True
    assert resolve_color("never", TtyStream()) is False


def test_resolve_color_auto(monkeypatch):
    """auto colors terminals unless NO_COLOR is set."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert resolve_color("auto", TtyStream()) is True
    assert resolve_color("auto", io.StringIO()) is False

    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color("auto", TtyStream()) is False


def test_resolve_color_unknown_mode():
    with pytest.raises(ValueError):
        resolve_color("rainbow", io.StringIO())


def test_create_output_handler_from_config():
    stream = io.StringIO()
    config = RunConfig.from_dict({"output": {"color": "never"}})
    handler = create_output_handler(config, stream=stream)
    assert isinstance(handler, StreamHandler)
    assert handler.stream is stream
    assert handler.color is False


class FlushCountingStream(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


def test_blank_lines_are_flushed():
    """Separators reach a piped stream as soon as they are written."""
    stream = FlushCountingStream()
    handler = StreamHandler(stream=stream, color=False)
    handler.write(["one"])
    flushes = stream.flushes
    handler.write_blank()
    assert stream.flushes == flushes + 1
    assert stream.getvalue() == "one\n\n"
