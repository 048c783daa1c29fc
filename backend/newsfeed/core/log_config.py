import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogConfig(BaseSettings):
    """Logging configuration management"""

    model_config = SettingsConfigDict(env_prefix="NEWSFEED_LOG_")

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: Optional[str] = None

    def configure(self, name: str = "newsfeed") -> logging.Logger:
        """Install handlers on the package logger once"""
        logger = logging.getLogger(name)

        if not logger.handlers:
            formatter = logging.Formatter(self.LOG_FORMAT)

            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

            if self.LOG_FILE:
                file_handler = logging.FileHandler(self.LOG_FILE)
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)

            logger.setLevel(getattr(logging, self.LOG_LEVEL.upper()))

        return logger

