import logging
from pathlib import Path

from logging_utils import log_exception, setup_service_logging


def test_setup_service_logging_writes_a_log_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        service_logger, path = setup_service_logging(str(tmp_path / "logs"), level="warning")
        assert service_logger.name == "brief_service"
        assert path is not None and path.endswith(".log")
        logging.getLogger("intake").warning("webhook received")
        for handler in root.handlers:
            handler.flush()
        assert "intake - WARNING - webhook received" in Path(path).read_text(encoding="utf-8")
        assert [h.level for h in root.handlers] == [logging.WARNING, logging.DEBUG]
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_setup_service_logging_console_only():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        _, path = setup_service_logging(None)
        assert path is None
        assert len(root.handlers) == 1
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_log_exception_records_traceback_and_context(caplog):
    logger = logging.getLogger("brief_service.test")
    try:
        raise ValueError("bad coupon table")
    except ValueError as exc:
        with caplog.at_level(logging.ERROR, logger="brief_service.test"):
            log_exception(logger, exc, context="render", survey_id="1000358733", vertical="hvac")

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "render - Exception occurred: ValueError: bad coupon table"
    assert messages[1].startswith("Traceback:\n")
    assert "bad coupon table" in messages[1]
    assert "Survey ID: 1000358733" in messages
    assert "Context: {'vertical': 'hvac'}" in messages
