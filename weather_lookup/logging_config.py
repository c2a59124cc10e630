# ABOUTME: Centralized logging setup for applications embedding the weather lookup core.
# ABOUTME: Installs a single console handler and aligns the httpx logger with the same format.

import logging

from weather_lookup import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging once; repeated calls replace the previous handler."""
    level = level if level is not None else config.LOG_LEVEL
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO; keep it one notch quieter than the app
    httpx_logger = logging.getLogger("httpx")
    httpx_logger.setLevel(max(root_logger.level, logging.WARNING))
