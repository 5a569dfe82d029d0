import logging
import sys

from rental_quotes.core.config import settings


def setup_logging() -> None:
    """Send log records to stdout using the configured level."""
    root_logger = logging.getLogger()
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper())

    logging.getLogger("redis").setLevel(logging.WARNING)
