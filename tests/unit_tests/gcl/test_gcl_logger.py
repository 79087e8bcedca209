import io
import json
from unittest.mock import MagicMock

import pytest

from gclogger.context import CLOUD_TRACE_CONTEXT, use_context, with_value
from gclogger.entry import LogEntry
from gclogger.gcl import GCLogger, GCLoggerFactory
from gclogger.levels import Level
from gclogger.middleware import CloudTraceMiddleware
from gclogger.transports import CloudLoggingTransport, StructuredStdoutTransport


@pytest.fixture
def transport():
    return MagicMock(spec=CloudLoggingTransport)


def sent(transport) -> list[tuple[str, LogEntry]]:
    return [c.args for c in transport.send.call_args_list]


class TestGCLogger:
    def test_builds_entry(self, transport):
        logger = GCLogger("proj", "requests", "api", transport=transport)
        logger.set_level(Level.TRACE)
        logger.warn("slow call: %dms", 950)

        assert sent(transport) == [("requests", LogEntry("slow call: 950ms", "WARNING", "api"))]

    @pytest.mark.parametrize(
        "method, severity",
        [("trace", "DEFAULT"), ("debug", "DEBUG"), ("info", "INFO"), ("warn", "WARNING"), ("error", "ERROR")],
    )
    def test_severity_per_method(self, transport, method, severity):
        logger = GCLogger("proj", "log", transport=transport)
        logger.set_level(Level.TRACE)
        getattr(logger, method)("x")

        assert sent(transport)[0][1].severity == severity

    def test_below_threshold_never_reaches_transport(self, transport):
        logger = GCLogger("proj", "log", transport=transport)
        logger.set_level(Level.ERROR)
        logger.warn("dropped")
        logger.print_ctx(None, Level.INFO, "direct %s", ("call",))

        assert not logger.warn_enabled()
        transport.send.assert_not_called()

    def test_unset_level_without_parent_is_off(self, transport):
        logger = GCLogger("proj", "log", transport=transport)
        logger.error("dropped")

        assert logger.level is Level.OFF
        transport.send.assert_not_called()

    def test_trace_from_context(self, transport):
        logger = GCLogger("proj", "log", transport=transport)
        logger.set_level(Level.INFO)
        ctx = with_value(None, CLOUD_TRACE_CONTEXT, "projects/proj/traces/abc123")
        logger.info_ctx(ctx, "handled")

        assert sent(transport)[0][1].trace == "projects/proj/traces/abc123"

    def test_trace_from_current_context(self, transport):
        logger = GCLogger("proj", "log", transport=transport)
        logger.set_level(Level.INFO)
        with use_context(with_value(None, CLOUD_TRACE_CONTEXT, "projects/proj/traces/t1")):
            logger.info("handled")

        assert sent(transport)[0][1].trace == "projects/proj/traces/t1"

    @pytest.mark.parametrize("ctx", [{}, {CLOUD_TRACE_CONTEXT: 42}, {CLOUD_TRACE_CONTEXT: ""}, object()])
    def test_missing_or_invalid_trace_is_ignored(self, transport, ctx):
        logger = GCLogger("proj", "log", transport=transport)
        logger.set_level(Level.INFO)
        logger.info_ctx(ctx, "handled")

        assert sent(transport)[0][1].trace is None

    def test_middleware_arguments(self, transport):
        logger = GCLogger("proj", "log", transport=transport)
        assert logger.middleware() == (CloudTraceMiddleware, {"project_id": "proj"})


class TestGCLoggerFactory:
    def test_loggers_inherit_factory_level(self, transport):
        factory = GCLoggerFactory("proj", level=Level.WARN, component="worker", transport=transport)
        logger = factory.get_logger("jobs")

        assert logger.level is Level.WARN
        assert logger.log_name == "jobs"
        assert logger.component_name == "worker"
        assert logger.transport is transport

    def test_root_level_change_applies_to_existing_loggers(self, transport):
        factory = GCLoggerFactory("proj", level=Level.ERROR, transport=transport)
        logger = factory.get_logger("jobs")
        logger.info("dropped")

        factory.root.set_level(Level.INFO)
        logger.info("kept")

        assert [e.message for _, e in sent(transport)] == ["kept"]

    def test_get_logger_returns_fresh_instances(self, transport):
        factory = GCLoggerFactory("proj", transport=transport)
        assert factory.get_logger("a") is not factory.get_logger("a")

    def test_construction_does_not_touch_the_api(self):
        client_factory = MagicMock()
        GCLoggerFactory("proj", transport=CloudLoggingTransport("proj", client_factory=client_factory)).get_logger("x")

        client_factory.assert_not_called()

    def test_structured_stdout_end_to_end(self):
        stream = io.StringIO()
        factory = GCLoggerFactory("proj", level=Level.DEBUG, component="api", transport=StructuredStdoutTransport(stream))
        logger = factory.get_logger("requests")
        ctx = with_value(None, CLOUD_TRACE_CONTEXT, "projects/proj/traces/abc")
        logger.debug_ctx(ctx, "user %s logged in", "u-1")
        logger.trace("dropped")

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0]) == {
            "message": "user u-1 logged in",
            "severity": "DEBUG",
            "component": "api",
            "logging.googleapis.com/trace": "projects/proj/traces/abc",
        }
