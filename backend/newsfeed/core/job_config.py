from pydantic_settings import BaseSettings, SettingsConfigDict


class JobConfig(BaseSettings):
    """Job queue configuration management"""

    model_config = SettingsConfigDict(env_prefix="NEWSFEED_JOB_")

    # Worker configuration
    MAX_WORKERS: int = 3

    # Retry configuration
    MAX_ATTEMPTS: int = 3
    RETRY_DELAY: float = 0  # seconds

    # Timeout per attempt
    ATTEMPT_TIMEOUT: float = 60  # seconds
