"""Unit tests for StencilLogger."""

import io
import json

from stencil_core.logging import RESET, LogConfig, StencilLogger
from stencil_core.types import LogFormat, LogLevel


def make_logger(**kwargs):
    stream = io.StringIO()
    return StencilLogger(LogConfig(output=stream, **kwargs)), stream


class TestLevels:
    def test_debug_filtered_at_info(self):
        logger, stream = make_logger()
        logger.context().rule_added("global", None, ["x"], 0)
        assert stream.getvalue() == ""

    def test_debug_emitted_at_debug(self):
        logger, stream = make_logger(level=LogLevel.DEBUG)
        logger.context().rule_added("global", None, ["x"], 0)
        assert "Context rule #0 added (global)" in stream.getvalue()


class TestFormats:
    def test_json_line(self):
        logger, stream = make_logger(level=LogLevel.DEBUG, format=LogFormat.JSON)
        logger.normalize().passthrough("Widget")
        entry = json.loads(stream.getvalue())
        assert entry["level"] == "DEBUG"
        assert entry["component"] == "normalize"
        assert entry["event"] == "passthrough"
        assert entry["timestamp"].endswith("Z")

    def test_colored_line(self):
        logger, stream = make_logger(level=LogLevel.DEBUG)
        logger.context().resolved("home", 1, 2, ["x"])
        line = stream.getvalue()
        assert "[CONTEXT]" in line
        assert "resolved (1/2 rules matched)" in line
        assert RESET in line

    def test_context_truncated(self):
        logger, stream = make_logger(level=LogLevel.DEBUG, truncate_at=20)
        logger.context().resolved("home", 1, 1, [f"key{i}" for i in range(50)])
        assert "..." in stream.getvalue()

    def test_hide_data(self):
        logger, stream = make_logger(level=LogLevel.DEBUG, show_data=False)
        logger.context().resolved("home", 0, 0, [])
        assert "event" not in stream.getvalue()


class TestComponents:
    def test_disabled_component(self):
        logger, stream = make_logger(
            level=LogLevel.DEBUG,
            components={"context": False, "normalize": True},
        )
        logger.context().resolved("home", 0, 0, [])
        logger.normalize().passthrough("X")
        assert "[CONTEXT]" not in stream.getvalue()
        assert "[NORMALIZE]" in stream.getvalue()

    def test_configure(self):
        logger, stream = make_logger()
        logger.configure(LogConfig(level=LogLevel.DEBUG, output=stream))
        logger.normalize().passthrough("X")
        assert stream.getvalue()
