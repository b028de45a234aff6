"""
Logging configuration for the NoiseSentinel API.
"""
import sys
from loguru import logger
from noise_sentinel.core.config import settings


def setup_logging():
    """
    Configure the loguru stderr sink.
    """
    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format=log_format,
        level=settings.LOG_LEVEL,
        diagnose=False
    )

    return logger
