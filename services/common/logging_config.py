"""
Logging configuration shared by every service process.

Each service calls ``configure_logging()`` once when its FastAPI application
module is imported; repeated calls are no-ops.
"""
import logging
import os

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from the LOG_LEVEL environment variable."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
