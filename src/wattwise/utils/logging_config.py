"""Logging setup shared by the CLI and API server."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("wattwise")


def init_console_logging(level: str = "WARNING") -> None:
    """Attach a console handler to the ``wattwise`` logger.

    Parameters
    ----------
    level : str, optional
        Log level name, by default "WARNING"
    """
    logger.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.debug(f"Console logging initialised at {level}")
