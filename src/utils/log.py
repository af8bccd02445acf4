"""
Logging setup shared by the CLI and the web viewer.
"""

import logging
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from config.settings import LoggingConfig, config

ROOT_LOGGER = "src"


def setup_logging(
    logging_config: Optional[LoggingConfig] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the package logger with rich console output and an optional log file.

    Args:
        logging_config: Settings to use, defaults to ``config.logging``
        verbose: Force DEBUG level
        console: Console for the rich handler (stderr by default)

    Returns:
        The configured package logger
    """
    cfg = logging_config or config.logging
    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if cfg.log_to_console:
        console_handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if cfg.log_to_file:
        cfg.ensure_dirs()
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = cfg.log_dir / f"tag_analyzer_{timestamp}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        logger.debug("Logging to %s", log_file)

    return logger
