"""
Configuracion de logging (loguru) para el CLI.
"""
import sys

from loguru import logger

from positions_sync.core.config import Settings


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}"


def configure_logging(settings: Settings) -> None:
    """
    Reemplaza el sink por defecto de loguru.

    - stderr con el nivel LOG_LEVEL
    - archivo LOG_FILE (si esta definido) con rotacion
    """
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL, format=LOG_FORMAT)

    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            format=LOG_FORMAT,
            rotation="500 MB",
            retention="10 days",
            level=settings.LOG_LEVEL
        )
