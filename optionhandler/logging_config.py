"""Centralized logging setup for optionhandler."""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


_CONFIGURED_ATTR = "_optionhandler_logging_configured"


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    *,
    force: bool = False,
) -> None:
    """Setup logging with rich console output.

    Args:
        level: Logging level (default: WARNING)
        log_file: Optional log file path
        force: If True, reconfigure even if already set up (default: False)

    Note:
        Environment variables:
        - LOG_LEVEL: Override the level parameter (accepts int or name like "DEBUG")
        - LOG_FILE: Override the log_file parameter
    """
    root_logger = logging.getLogger()
    if getattr(root_logger, _CONFIGURED_ATTR, False) and not force:
        # Allow runtime level bumps without rebuilding handlers
        root_logger.setLevel(level)
        return

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    env_level = os.getenv("LOG_LEVEL")
    if env_level:
        if env_level.isdigit():
            level = int(env_level)
        else:
            level = getattr(logging, env_level.upper(), level)

    log_file = os.getenv("LOG_FILE", log_file)

    handlers = []

    # Console output goes to stderr so generated code on stdout stays clean
    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(
            log_file, mode="a", encoding="utf-8", delay=True
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    root_logger.setLevel(level)
    for handler in handlers:
        root_logger.addHandler(handler)

    for noisy in ("urllib3", "requests"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    setattr(root_logger, _CONFIGURED_ATTR, True)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
