"""
Logging Setup
Configures loguru sinks for the deployment scripts
"""

import os
import sys
from loguru import logger


def configure_logging(level: str = None, log_file: str = None):
    """
    Replace loguru's default handler with the deployer's sinks

    Args:
        level: Console log level (defaults to LOG_LEVEL or INFO)
        log_file: Optional file sink path (defaults to LOG_FILE)
    """
    level = level or os.getenv('LOG_LEVEL', 'INFO')
    log_file = log_file or os.getenv('LOG_FILE')

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )
