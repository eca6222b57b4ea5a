"""
Logging setup for the users API.

Every module logs through the standard library (`logging.getLogger(__name__)`);
this function wires the root handler once at startup.
"""

import logging
import sys

from users_api.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "aiosqlite")


def setup_logging(settings: Settings) -> None:
    """Configure root logging from LOG_LEVEL."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        format=LOG_FORMAT,
        stream=sys.stdout,
        level=log_level,
    )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger("users_api").setLevel(log_level)
