"""
Logging configuration for the Trending GIF Pipeline.
"""

import logging
import sys

from gif_pipeline.config import get_settings

# Configure logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging():
    """
    Set up logging configuration.

    Returns:
        Logger instance
    """
    settings = get_settings()

    log_level = logging.DEBUG if settings.DEV_MODE else logging.INFO
    if settings.LOG_LEVEL:
        named_level = logging.getLevelName(settings.LOG_LEVEL.upper())
        # getLevelName returns a "Level X" string for unknown names
        if isinstance(named_level, int):
            log_level = named_level

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    # Configure root logger
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=handlers)

    # Set log levels for libraries to avoid excessive logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    # Create pipeline logger
    pipeline_logger = logging.getLogger("gif_pipeline")
    pipeline_logger.setLevel(log_level)

    return pipeline_logger


# Create logger instance
logger = setup_logging()
