import io
import json
import typing as t

import pytest

from gclogger.core import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def local_stream() -> io.StringIO:
    """JSON stdio pipeline at TRACE, captured in memory."""
    stream = io.StringIO()
    configure_logging(level="TRACE", fmt="json", stream=stream)
    return stream


@pytest.fixture
def json_lines() -> t.Callable[[io.StringIO], list[dict[str, t.Any]]]:
    def _read(stream: io.StringIO) -> list[dict[str, t.Any]]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return _read
