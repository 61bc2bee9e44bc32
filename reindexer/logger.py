from loguru import logger

from .config import settings

logger.add(
    settings.LOG_FILE,
    rotation="500 MB",
    retention="1 week",
    level=settings.LOG_LEVEL,
    format="{time} {level} {message}",
)
