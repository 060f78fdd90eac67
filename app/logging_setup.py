"""
Logging setup (loguru)
"""
import sys
from pathlib import Path

from loguru import logger

from .config import Settings


def configure_logging(settings: Settings) -> None:
    """stderr sink, plus a daily rotating file when log_dir is set"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=settings.log_level
    )

    if settings.log_dir:
        Path(settings.log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(
            str(Path(settings.log_dir) / "speedball_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="30 days",
            level="DEBUG"
        )
