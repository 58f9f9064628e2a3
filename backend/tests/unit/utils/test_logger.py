"""
Unit tests for the logger module.
"""
import logging

from venturescope.utils import logger as logger_module
from venturescope.utils.logger import LOG_FILES, configure_loggers, get_logger, setup_logger


def test_setup_logger():
    """Test that setup_logger creates a logger with the expected configuration."""
    logger = setup_logger("test_logger", level=logging.INFO)

    assert logger.name == "test_logger"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1

    has_console_handler = any(
        isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
        for handler in logger.handlers
    )
    assert has_console_handler, "Logger should have a console handler"

    logger.info("Test message from test_setup_logger")


def test_setup_logger_does_not_duplicate_handlers():
    setup_logger("test_dupes")
    logger = setup_logger("test_dupes")
    assert len(logger.handlers) == 1


def test_setup_logger_with_file(tmp_path):
    logger = setup_logger("test_file_logger", "test.log", logs_dir=str(tmp_path))
    logger.info("written to disk")

    for handler in logger.handlers:
        handler.flush()
    assert "written to disk" in (tmp_path / "test.log").read_text()


def test_get_logger():
    """Test that get_logger returns service loggers and creates new ones."""
    logger = get_logger("test_component")
    assert logger.name == "test_component"
    logger.info("Test message from test_get_logger")

    agent_logger = get_logger("agent")
    assert agent_logger is logging.getLogger("agent")


def test_configure_loggers(tmp_path, monkeypatch):
    """Test that configure_loggers adds file handlers to every service logger."""
    monkeypatch.setattr(logger_module, "_loggers_configured", False)

    configure_loggers(str(tmp_path))

    for name, log_file in LOG_FILES.items():
        handlers = get_logger(name).handlers
        assert any(isinstance(h, logging.FileHandler) for h in handlers), name
        assert (tmp_path / log_file).exists()

    # Later calls are ignored
    configure_loggers(str(tmp_path / "other"))
    assert not (tmp_path / "other").exists()
