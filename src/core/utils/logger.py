import logging
import sys

from pythonjsonlogger import json as pythonjson

from src.core.utils.configs import engine_config

LOGGER_NAME = "crawl_engine"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Return a logger that writes JSON lines to stdout.

    The handler is attached once per logger name; the level comes from
    LOG_LEVEL.
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = pythonjson.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
        handler.setFormatter(formatter)
        log.addHandler(handler)
        log.setLevel(engine_config().log_level)
    return log


logger = get_logger()
