"""Centralized logging configuration."""

import logging

from config import settings

# Third-party loggers that only report problems unless asked otherwise
_QUIET_LOGGERS = (
    "sqlalchemy.pool",
    "httpx",
    "httpcore",
    "uvicorn.access",
)


def setup_logging() -> None:
    """Configure logging for the application.

    The root level comes from settings.LOG_LEVEL. SQL statements are logged
    only when settings.LOG_SQL is on; the HTTP client and pool loggers stay
    at WARNING so CoinGecko calls do not flood the output.
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=getattr(logging, settings.LOG_LEVEL),
        force=True,
    )

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.LOG_SQL else logging.WARNING
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
