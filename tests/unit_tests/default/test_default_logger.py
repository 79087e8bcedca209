import io

import pytest

from gclogger.config import LogFormat
from gclogger.context import CLOUD_TRACE_CONTEXT, use_context, with_value
from gclogger.core import configure_logging
from gclogger.default import DefaultLogger, DefaultLoggerFactory
from gclogger.levels import Level


class TestDefaultLogger:
    def test_emits_through_structlog(self, local_stream, json_lines):
        logger = DefaultLoggerFactory(level=Level.INFO).get_logger("orders")
        logger.info("created order %s", "o-1")

        [event] = json_lines(local_stream)
        assert event["message"] == "created order o-1"
        assert event["level"] == "info"
        assert event["logger"] == "orders"
        assert "timestamp" in event

    def test_level_names(self, local_stream, json_lines):
        logger = DefaultLoggerFactory(level=Level.TRACE).get_logger("orders")
        logger.trace("t")
        logger.debug("d")
        logger.warn("w")
        logger.error("e")

        assert [e["level"] for e in json_lines(local_stream)] == ["trace", "debug", "warning", "error"]

    def test_threshold_filters(self, local_stream, json_lines):
        logger = DefaultLoggerFactory(level=Level.WARN).get_logger("orders")
        logger.info("dropped")
        logger.warn("kept")

        assert [e["message"] for e in json_lines(local_stream)] == ["kept"]
        assert not logger.info_enabled()

    def test_unset_logger_without_parent_is_silent(self, local_stream, json_lines):
        logger = DefaultLogger("orphan")
        logger.error("dropped")

        assert json_lines(local_stream) == []

    def test_ctx_binds_trace(self, local_stream, json_lines):
        logger = DefaultLoggerFactory().get_logger("orders")
        ctx = with_value(None, CLOUD_TRACE_CONTEXT, "projects/p/traces/abc")
        logger.info_ctx(ctx, "with trace")
        logger.info_ctx({CLOUD_TRACE_CONTEXT: 7}, "bad trace")

        with_trace, without_trace = json_lines(local_stream)
        assert with_trace["trace"] == "projects/p/traces/abc"
        assert "trace" not in without_trace

    def test_plain_call_picks_up_current_context(self, local_stream, json_lines):
        logger = DefaultLoggerFactory().get_logger("orders")
        with use_context(with_value(None, CLOUD_TRACE_CONTEXT, "projects/p/traces/t9")):
            logger.info("inside request")

        assert json_lines(local_stream)[0]["trace"] == "projects/p/traces/t9"

    def test_console_format_has_no_prefix_noise(self):
        stream = io.StringIO()
        configure_logging(level="INFO", fmt="console", stream=stream)
        DefaultLoggerFactory().get_logger("orders").info("plain text")

        line = stream.getvalue().rstrip("\n")
        assert line.endswith("plain text")
        assert "\x1b[" not in line
        assert " | " in line

    @pytest.mark.parametrize("pipeline_level", ["TRACE", "INFO", "ERROR", "OFF"])
    def test_enabled_iff_emitted(self, pipeline_level, json_lines):
        stream = io.StringIO()
        configure_logging(level=pipeline_level, fmt="json", stream=stream)
        logger = DefaultLoggerFactory(level=Level.DEBUG).get_logger("orders")

        for method in ("trace", "debug", "info", "warn", "error"):
            before = len(json_lines(stream))
            getattr(logger, method)("%s message", method)
            emitted = len(json_lines(stream)) > before
            assert getattr(logger, f"{method}_enabled")() == emitted

    def test_factory_without_level_uses_configured_default(self, json_lines):
        stream = io.StringIO()
        configure_logging(level="WARN", fmt="json", stream=stream)
        logger = DefaultLoggerFactory().get_logger("orders")
        logger.info("dropped")
        logger.warn("kept")

        assert not logger.info_enabled()
        assert [e["message"] for e in json_lines(stream)] == ["kept"]

    def test_format_accepts_settings_enum(self, json_lines):
        stream = io.StringIO()
        configure_logging(level="INFO", fmt=LogFormat.JSON, stream=stream)
        DefaultLoggerFactory().get_logger("orders").info("as json")

        assert json_lines(stream)[0]["message"] == "as json"
