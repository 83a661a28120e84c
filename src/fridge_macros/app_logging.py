"""Logging setup for the fridge macros service."""

import logging

APP_LOGGER = "fridge_macros"

# supabase-py talks to PostgREST through httpx, which logs every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the app logger and set its level.

    Safe to call repeatedly: later calls only change the level.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if not any(handler.get_name() == APP_LOGGER for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(APP_LOGGER)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
        logger.propagate = False
    return logger
