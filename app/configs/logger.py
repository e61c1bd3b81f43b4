"""File logging helper shared by every module logger."""

from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from app.configs.settings import settings

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def file_logger(logger: Logger) -> Logger:
    """
    Attach the rotating JSON file handler to `logger` when file logging is enabled.

    Args:
        logger: Logger to decorate (usually ``getLogger(__name__)``).

    Returns:
        Logger: The same logger, for one-line module setup.
    """
    if not settings.LOG_TO_FILE:
        return logger

    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT)
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger
