import os
import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Optional, Union
import threading

import colorama
from colorama import Fore, Style

colorama.init()


class LoggingError(Exception):
    """Logging related errors"""
    pass


class ColoredFormatter(logging.Formatter):
    """Colored console formatter"""

    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA + Style.BRIGHT,
    }

    def format(self, record):
        if record.levelname in self.COLORS:
            # Other handlers share the record, so color a copy.
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = (
                self.COLORS[record.levelname] + record.levelname + Style.RESET_ALL
            )

        return super().format(record)


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_loggers: Dict[str, logging.Logger] = {}
_logger_lock = threading.Lock()


def setup_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 3,
) -> logging.Logger:
    """Setup logger with console and optional rotating file handlers

    Loggers are cached per name. A later call only changes the level; asking
    it for a different log file raises LoggingError, and its format_string
    is not applied.
    """

    with _logger_lock:
        if name in _loggers:
            logger = _loggers[name]
            if log_file is not None:
                wanted = os.path.abspath(log_file)
                current = [
                    handler.baseFilename
                    for handler in logger.handlers
                    if isinstance(handler, logging.FileHandler)
                ]
                if wanted not in current:
                    raise LoggingError(
                        f"Logger {name} already set up without {log_file}"
                    )
            logger.setLevel(level)
            return logger

        logger = logging.getLogger(name)
        logger.setLevel(level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        if format_string is None:
            format_string = DEFAULT_FORMAT

        try:
            logging.Formatter(format_string)
        except (ValueError, KeyError) as e:
            raise LoggingError(f"Invalid log format: {e}")

        if log_file is not None:
            log_file = Path(log_file)
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)

                file_handler = logging.handlers.RotatingFileHandler(
                    log_file,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
                file_handler.setFormatter(logging.Formatter(format_string))
                logger.addHandler(file_handler)

            except PermissionError:
                raise LoggingError("Permission denied: Cannot create log file")
            except OSError as e:
                raise LoggingError(f"Error creating log file: {e}")

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter(format_string))
        logger.addHandler(console_handler)

        logger.propagate = False
        _loggers[name] = logger

        return logger
