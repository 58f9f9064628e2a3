"""
Logger Configuration Module

Provides centralized logging configuration for all VentureScope services.
Supports both file and console logging with different formatters.

Key Features:
- Configurable log levels
- File and console output
- Service-specific loggers
- Rotating file handlers
"""

import os
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import settings

# Service loggers and the file each one writes to once configure_loggers() runs
LOG_FILES = {
    'app': 'app.log',
    'api': 'api.log',
    'agent': 'agent.log',
    'evaluator': 'evaluator.log',
    'extractor': 'extractor.log',
    'sessions': 'sessions.log',
    'storage': 'storage.log',
    'frontend': 'frontend.log',
}


def setup_logger(name: str, log_file: Optional[str] = None, level=None,
                 logs_dir: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with file and console handlers.

    Args:
        name: Logger name (e.g., 'agent', 'sessions')
        log_file: Optional log file name. If None, only console logging is used
        level: Optional log level. If None, uses level from settings
        logs_dir: Directory for the log file. Defaults to settings.LOGS_DIR

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Remove any existing handlers to prevent duplicates
    if logger.handlers:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(level or settings.LOG_LEVEL)

    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_formatter = logging.Formatter(
        '%(levelname)s - %(name)s - %(message)s'
    )

    # Always add console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        target_dir = logs_dir or settings.LOGS_DIR
        try:
            os.makedirs(target_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(target_dir, log_file),
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            )
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file handler for {name}: {str(e)}")

    return logger


log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

# Initialize service loggers with console logging only
app_logger = setup_logger('app', None, level=log_level)
api_logger = setup_logger('api', None, level=log_level)
agent_logger = setup_logger('agent', None, level=log_level)
evaluator_logger = setup_logger('evaluator', None, level=log_level)
extractor_logger = setup_logger('extractor', None, level=log_level)
sessions_logger = setup_logger('sessions', None, level=log_level)
storage_logger = setup_logger('storage', None, level=log_level)
frontend_logger = setup_logger('frontend', None, level=log_level)

# Track if loggers have been reconfigured
_loggers_configured = False


def configure_loggers(logs_dir: str) -> None:
    """
    Add rotating file handlers to the service loggers.

    Args:
        logs_dir: Directory path for log files

    Note:
        Called once at application startup; later calls are ignored.
    """
    global _loggers_configured
    if _loggers_configured:
        return

    os.makedirs(logs_dir, exist_ok=True)
    for name, log_file in LOG_FILES.items():
        setup_logger(name, log_file, level=log_level, logs_dir=logs_dir)

    app_logger.info(f"Loggers configured with directory: {logs_dir}")
    _loggers_configured = True


def get_logger(name: str, level=None) -> logging.Logger:
    """
    Get or create a logger for a component.

    For known services, returns the pre-configured logger.
    For new services, creates a console-only logger.
    """
    if name in LOG_FILES:
        return logging.getLogger(name)
    return setup_logger(name, None, level=level or log_level)


__all__ = [
    'app_logger',
    'api_logger',
    'agent_logger',
    'evaluator_logger',
    'extractor_logger',
    'sessions_logger',
    'storage_logger',
    'frontend_logger',
    'setup_logger',
    'get_logger',
    'configure_loggers',
]
