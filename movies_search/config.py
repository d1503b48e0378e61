import logging
from typing import Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    STORE_BACKEND: Literal['dynamodb', 'memory'] = 'dynamodb'
    MOVIES_TABLE_NAME: str = 'Movies'
    AWS_REGION: Optional[str] = None
    DYNAMODB_ENDPOINT_URL: Optional[str] = None  # e.g. "http://localhost:8000"
    SEARCH_TIMEOUT_SECONDS: Optional[float] = None
    MEMORY_PAGE_SIZE: int = 25
    MEMORY_SEED_FILE: Optional[str] = None  # JSON array of movie items
    LOG_LEVEL: str = 'INFO'

    model_config = ConfigDict(
        env_file=".env"
    )


def configure_logging(level: str = 'INFO') -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


settings = Settings()
