"""Tests for the command-line driven logging setup."""

import logging

import pytest

from quantumsketches.logging_config import setup_logging
from quantumsketches.main import parse_args


@pytest.fixture
def package_logger():
    logger = logging.getLogger("quantumsketches")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_level_name_from_command_line(package_logger):
    args = parse_args(["--log-level", "DEBUG"])
    logger = setup_logging(level=args.log_level, log_file=args.log_file)
    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_log_file_receives_messages(package_logger, tmp_path):
    path = tmp_path / "sketches.log"
    args = parse_args(["--log-level", "INFO", "--log-file", str(path)])
    setup_logging(level=args.log_level, log_file=args.log_file)
    logging.getLogger("quantumsketches.model.state").info("Entangled pair generated.")
    for handler in package_logger.handlers:
        handler.flush()
    text = path.read_text(encoding="utf-8")
    assert "Logging initialized at INFO" in text
    assert "Entangled pair generated." in text


def test_repeated_setup_does_not_duplicate_handlers(package_logger):
    setup_logging(logging.WARNING)
    setup_logging(logging.WARNING)
    assert len(package_logger.handlers) == 1


def test_unknown_level_name_raises(package_logger):
    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_default_arguments():
    args = parse_args([])
    assert args.log_level == "INFO"
    assert args.log_file is None
