"""Basic logging configuration."""

import logging

from sessionflash.config import get_settings


def configure_logging() -> None:
    """Configure logging for the application."""
    # Keep simple, Uvicorn config remains for access logs
    level = logging.DEBUG if get_settings().debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
