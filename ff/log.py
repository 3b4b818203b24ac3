"""Logger configuration for ff.

The library never installs handlers on import; applications (and ``ff.main``)
call ``setup_logger`` once.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "ff"


def setup_logger(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Configure the ``ff`` logger with a rich console handler.

    Args:
        level: Console logging level.
        log_file: Optional rotating log file. Parent directories are created.
        file_level: Logging level for the file handler.

    Returns:
        logging.Logger: The configured ``ff`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(min(level, file_level) if log_file is not None else level)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True, soft_wrap=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved = Path(log_file).expanduser().resolve()
        resolved.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            resolved,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
