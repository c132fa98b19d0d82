import sys
import os
from typing import Optional
from loguru import logger

from .config import AppConfig

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[category]}</cyan> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> "
    "- <level>{message}</level>"
)


def setup_logging(config: Optional[AppConfig] = None):
    """
    Configures Loguru logger.

    Console output is always installed; a rotating file sink is added
    when ``config.logging.log_dir`` is set.
    """
    config = config or AppConfig()

    # Remove default handler
    logger.remove()
    logger.configure(extra={"category": "-"})

    level = "DEBUG" if config.general.debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    log_dir = config.logging.log_dir
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, f"{config.general.app_name}_{{time}}.log"),
            rotation=config.logging.rotation,
            retention=config.logging.retention,
            level="DEBUG",
        )

    logger.info("Logging initialized.")


class LoggerFactory:
    """
    Hands out category-scoped loguru loggers.

    Registered in a ContainerProvider so components can resolve their
    logger from the scope of the page they live on.
    """

    def __init__(self, **extra):
        self._extra = extra

    def create_logger(self, category: str):
        return logger.bind(category=category, **self._extra)
