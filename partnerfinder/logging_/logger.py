import inspect
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from loguru import logger
from loguru._logger import Logger

from partnerfinder.core.config import settings


def dynamic_formatter(record: Any) -> str:
    base = "[{time:HH:mm:ss}] [{level}] {name}:{function}:{line} - {message}"

    extras = record.get("extra", {})
    if extras:
        base += " ("
        for key, value in extras.items():
            base += f"{key}={value}, "
        base += ")\n"
    else:
        base += "\n"

    if record["exception"]:
        base += "{exception}"

    return base


def dynamic_console_formatter(record: Any) -> str:
    base = "[<green>{time:HH:mm:ss}</green>] <level>[{level}]</level> {name}:{function}:<blue>{line}</blue> - {message}\n"

    if record["exception"]:
        base += "{exception}"

    return base


class InterceptHandler(logging.Handler):
    """Forwards standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller outside the logging module so loguru reports the right origin
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logger(name: str, log_dir: str | None = None) -> Logger:
    log_dir = log_dir or settings.LOG_DIR

    logger.remove()  # Remove default handler

    if settings.LOG_TO_FILE:
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        log_path = os.path.join(log_dir, today, name)
        os.makedirs(log_path, exist_ok=True)

        log_file_debug = os.path.join(log_path, "debug.log")
        log_file_errors = os.path.join(log_path, "error.log")
        log_file_info = os.path.join(log_path, "info.log")

        if settings.DEBUG:
            logger.add(
                log_file_debug,
                format=dynamic_formatter,
                level="DEBUG",
                rotation="00:00",  # Rotate daily at midnight
                compression="zip",  # Compress rotated logs
                enqueue=True,
                backtrace=True,
                diagnose=True,
                retention="7 days",
            )

        logger.add(
            log_file_errors,
            format=dynamic_formatter,
            level="ERROR",
            rotation="00:00",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
            retention="30 days",
        )

        logger.add(
            log_file_info,
            format=dynamic_formatter,
            level="INFO",
            rotation="00:00",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=False,
            retention="14 days",
        )

    logger.add(
        sys.stderr,
        format=dynamic_console_formatter,
        level="DEBUG" if settings.DEBUG else "INFO",
        backtrace=True,
        diagnose=settings.DEBUG,
        colorize=True,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.NOTSET, force=True)
    for uvicorn_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(uvicorn_logger).handlers = [InterceptHandler()]
        logging.getLogger(uvicorn_logger).propagate = False

    return logger  # type: ignore
