"""
Logging setup.

Configures loguru and routes standard library logging (uvicorn, fastapi)
through it.
"""

import logging
import sys

from loguru import logger

from shortlink_app.config import settings


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging():
    """
    Configure application logging using loguru.

    Replaces the default handler with a stderr sink at settings.log_level,
    JSON-serialized when settings.log_json is set.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        serialize=settings.log_json,
        backtrace=settings.debug,
        diagnose=settings.debug,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for log_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi"]:
        logging_logger = logging.getLogger(log_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    return logger
