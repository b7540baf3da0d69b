"""
oraculo/utils/logger.py
Engine logger: Rich console + rotating file under LOG_DIR.
One file per logger name, so parser / selector / pipeline logs stay apart.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

from oraculo.utils import config

_loggers: dict[str, logging.Logger] = {}

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def log_file_for(name: str, log_dir: Path | None = None) -> Path:
    """`pipeline.generator` -> <log_dir>/pipeline.generator.log"""
    return Path(log_dir or config.LOG_DIR) / f"{name}.log"


def get_logger(name: str = "oraculo", log_dir: Path | None = None) -> logging.Logger:
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    if not logger.handlers:
        console = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
        console.setLevel(logging.DEBUG)
        logger.addHandler(console)

        path = log_file_for(name, log_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    _loggers[name] = logger
    return logger
