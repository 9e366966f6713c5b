"""
Logging configuration using Loguru
"""
import sys
from pathlib import Path

from loguru import logger


def setup_logger(level: str = "WARNING", log_dir: Path = Path("logs")):
    """Configure logger with custom format and level"""

    # Remove default handler
    logger.remove()

    # stderr keeps log lines out of the streamed answers on stdout
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level.upper(),
        colorize=True
    )

    # Add file handler for errors
    logger.add(
        str(log_dir / "errors.log"),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="ERROR",
        rotation="10 MB",
        retention="30 days",
        delay=True
    )

    return logger
