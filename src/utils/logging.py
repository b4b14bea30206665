"""
Logging setup.

Routes everything through loguru with a per-module tag.
"""

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]: <14}</cyan> | <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO", intercept: tuple[str, ...] = ("urllib3",)) -> None:
    """
    Configure the loguru sink.

    Args:
        level: Minimum level for the stderr sink
        intercept: Standard library loggers to forward into loguru
    """
    logger.configure(extra={"module": "App"})
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())

    for name in intercept:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
