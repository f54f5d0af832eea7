"""
Logging Utilities for the Survey Brief Service

Centralized logging configuration for the webhook server and the CLI, plus
helpers that record failed submissions with enough context to replay them.
"""

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Tuple

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def setup_service_logging(log_dir: Optional[str] = None, level: str = "INFO") -> Tuple[logging.Logger, Optional[str]]:
    """
    Configure the ROOT logger so every module logger inherits the handlers.

    Args:
        log_dir: Optional directory for a timestamped log file. Console only when empty.
        level: Console log level name (DEBUG, INFO, WARNING, ...)

    Returns:
        Tuple of (service logger, log file path or None)
    """
    numeric_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates on reload
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    root_logger.addHandler(console_handler)

    log_file_path = None
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file_path = str(Path(log_dir) / f"brief_service_{timestamp}.log")
        file_handler = logging.FileHandler(log_file_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        root_logger.addHandler(file_handler)

    service_logger = logging.getLogger('brief_service')
    service_logger.info("Logging configured (level=%s, file=%s)", logging.getLevelName(numeric_level), log_file_path or "-")
    return service_logger, log_file_path


def log_exception(logger: logging.Logger, exc: Exception, context: str = "",
                  survey_id: Optional[str] = None, **kwargs: Any) -> None:
    """
    Log a full exception with traceback and context information.

    Args:
        logger: Logger instance to use
        exc: Exception that was raised
        context: Pipeline step that failed
        survey_id: Survey id of the submission, when known
        **kwargs: Additional context key-value pairs
    """
    error_msg = f"Exception occurred: {type(exc).__name__}: {exc}"
    if context:
        error_msg = f"{context} - {error_msg}"
    logger.error(error_msg)

    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(f"Traceback:\n{tb_str}")

    if survey_id:
        logger.error(f"Survey ID: {survey_id}")
    if kwargs:
        logger.error(f"Context: {kwargs}")
