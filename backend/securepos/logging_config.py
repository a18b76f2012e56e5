"""
Logging Setup — console plus ``server.log`` in the configured log directory.
"""
import logging
import os

from securepos.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach console and file handlers to the ``securepos`` logger.

    Calling it again replaces the handlers it installed before, so the latest
    ``LOG_DIR`` and ``LOG_LEVEL`` always win.
    """
    logger = logging.getLogger("securepos")
    logger.setLevel(settings.LOG_LEVEL.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_securepos_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    file_handler = logging.FileHandler(os.path.join(settings.LOG_DIR, "server.log"), encoding="utf-8")

    for handler in (console, file_handler):
        handler.setFormatter(formatter)
        handler._securepos_handler = True
        logger.addHandler(handler)

    return logger
