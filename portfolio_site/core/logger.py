"""
Centralized logging setup for the portfolio site builder.

This module provides functions to configure and obtain logger instances
throughout the application. It reads logging settings from the
`ConfigurationManager`, supporting console and rotating file handlers.

Key Functions:
- `setup_logging()`: Initializes the logging system based on external configuration.
                     Should be called once at application startup (the CLI does).
- `get_logger(name)`: Returns a logger instance for the specified module name.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from portfolio_site.core.config import ConfigurationManager

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# _logging_initialized: Global flag to prevent multiple initializations of the logging system.
_logging_initialized = False


def setup_logging(config: Optional['ConfigurationManager'] = None, force: bool = False) -> None:
    """
    Sets up centralized logging using the 'logging' section of the configuration.

    Falls back to `logging.basicConfig` when no configuration is given or the
    section is missing.

    Args:
        config (Optional[ConfigurationManager]): The application's configuration.
        force (bool): Re-run the setup even if logging was already initialized.
    """
    global _logging_initialized
    if _logging_initialized and not force:
        logging.getLogger(__name__).debug("setup_logging: Already initialized.")
        return

    log_settings: Optional[Dict[str, Any]] = config.get("logging") if config is not None else None

    if not log_settings:
        logging.basicConfig(level=logging.INFO, format=DEFAULT_LOG_FORMAT)
        logging.getLogger(__name__).warning(
            "Logging setup: 'logging' section not available in configuration. Using basicConfig."
        )
        _logging_initialized = True
        return

    log_level_str = str(log_settings.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    log_format = log_settings.get("format", DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()

    # Drop handlers left by basicConfig or a previous setup to avoid duplicate lines.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)
    formatter = logging.Formatter(log_format)

    handlers_settings = log_settings.get("handlers", {}) or {}

    console_handler_settings = handlers_settings.get("console", {}) or {}
    if console_handler_settings.get("enabled", False):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    file_handler_settings = handlers_settings.get("file", {}) or {}
    log_file_path = None
    if file_handler_settings.get("enabled", False):
        log_file_path = os.path.abspath(file_handler_settings.get("path", "logs/portfolio_site.log"))
        max_bytes = int(file_handler_settings.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_handler_settings.get("backup_count", 3))

        try:
            os.makedirs(os.path.dirname(log_file_path), exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=log_file_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Continue with the remaining handlers.
            logging.error(
                f"Logging setup: Failed to configure file logging at '{log_file_path}': {e}. File logging disabled.",
                exc_info=True,
            )
            log_file_path = None

    _logging_initialized = True
    logging.info(f"Logging system initialized. Level: {log_level_str}.")
    if log_file_path:
        logging.debug(f"File logging handler enabled at path: {log_file_path}")


def reset_logging() -> None:
    """Clears the initialization flag so `setup_logging` runs again (used by tests)."""
    global _logging_initialized
    _logging_initialized = False


def is_logging_initialized() -> bool:
    return _logging_initialized


def get_logger(name: str) -> logging.Logger:
    """
    Retrieves a logger instance with the specified name.

    Modules call this at import time; handlers are attached later by
    `setup_logging()` on the root logger, so records propagate once it runs.

    Args:
        name (str): The name for the logger, typically `__name__` of the calling module.

    Returns:
        logging.Logger: An instance of `logging.Logger`.
    """
    return logging.getLogger(name)
