import json
import logging
import sys

import pytest
from rich.logging import RichHandler

from exif_harvest.config.logging import StructuredFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_only(restore_root_logger):
    setup_logging(log_level="WARNING")

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], RichHandler)
    assert logging.getLogger("minio").level == logging.WARNING


def test_file_handler_writes_json_lines(tmp_path, restore_root_logger):
    log_file = tmp_path / "harvest.log"
    setup_logging(log_level="INFO", log_file_path=log_file)

    logging.getLogger("exif_harvest.test").info(
        "Stored value for key: %s", "a.jpg", extra={"bucket": "photos"}
    )
    for h in restore_root_logger.handlers:
        h.flush()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    record = lines[-1]
    assert record["message"] == "Stored value for key: a.jpg"
    assert record["level"] == "INFO"
    assert record["logger"] == "exif_harvest.test"
    assert record["bucket"] == "photos"


def test_structured_formatter_includes_exception():
    try:
        raise ValueError("bad header")
    except ValueError:
        record = logging.LogRecord(
            "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )

    out = json.loads(StructuredFormatter().format(record))

    assert out["message"] == "failed"
    assert "ValueError: bad header" in out["exception"]
    assert "exc_info" not in out
