# logger.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logger(log_file: Union[str, Path] = "films_client.log", level: str = "INFO") -> logging.Logger:
    """Configures the root logger once: rotating file + stderr."""
    logger = logging.getLogger()
    logger.setLevel(level)
    if getattr(logger, "_films_configured", False):
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(logging.WARNING)
    logger.addHandler(stream_handler)

    # requests/urllib3 chatter stays out of the log unless debugging
    if logging.getLevelName(level) > logging.DEBUG:
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger._films_configured = True
    return logger
