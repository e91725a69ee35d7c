"""Logging configuration for SNAPP.

Modules log through ``logging.getLogger(__name__)``, so every record lands
on a child of the ``snapp`` logger and carries its module name. Nothing is
written unless logging is enabled; the environment is read each time
:func:`setup_logging` runs, not at import.

Environment Variables:
    SNAPP_LOG: "true", "1" or "yes" enables logging (default: off)
    SNAPP_LOG_FILE: Path to log file (default: ~/.snapp.log)
"""

import logging
import os
from pathlib import Path

LOGGER_NAME = "snapp"
LOG_ENV_VAR = "SNAPP_LOG"
LOG_FILE_ENV_VAR = "SNAPP_LOG_FILE"
DEFAULT_LOG_FILE_NAME = ".snapp.log"

LOG_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Silent until setup_logging() decides otherwise
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def log_enabled() -> bool:
    """Whether SNAPP_LOG currently asks for logging."""
    return os.environ.get(LOG_ENV_VAR, "").strip().lower() in ("true", "1", "yes")


def log_file_path() -> Path:
    """Log file named by SNAPP_LOG_FILE, or ~/.snapp.log."""
    configured = os.environ.get(LOG_FILE_ENV_VAR, "").strip()
    if configured:
        return Path(configured).expanduser()
    return Path.home() / DEFAULT_LOG_FILE_NAME


def setup_logging() -> logging.Logger:
    """Configure the ``snapp`` logger from the current environment.

    Can be called repeatedly: handlers from an earlier call are closed and
    replaced, so a changed SNAPP_LOG or SNAPP_LOG_FILE takes effect.

    Returns:
        The ``snapp`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_enabled():
        log_file = log_file_path()
        log_file.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    else:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    return logger


def log_message(message: str) -> None:
    """Log a message on the ``snapp`` logger."""
    logging.getLogger(LOGGER_NAME).info(message)


def log_command(command: str, exit_code: int = 0, logger: logging.Logger | None = None) -> None:
    """Record an external command and its exit status.

    Args:
        command: The command line that was run
        exit_code: Its exit status
        logger: Logger to write to; the ``snapp`` logger when omitted
    """
    (logger or logging.getLogger(LOGGER_NAME)).info(
        "COMMAND: %s | EXIT_CODE: %d", command, exit_code
    )


__all__ = [
    "LOGGER_NAME",
    "log_enabled",
    "log_file_path",
    "setup_logging",
    "log_message",
    "log_command",
]
