# salesboard/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

SEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"

class Settings(BaseSettings):
    API_TITLE: str = "Sales Transaction API"
    API_DESCRIPTION: str = "Month-filtered listing, statistics and charts over seeded sales transactions."

    DATABASE_URL: str = "sqlite:///./database.db"

    # Either an http(s) URL or a path to a local JSON file
    SEED_SOURCE: str = SEED_URL
    SEED_TIMEOUT: float = 30.0
    SEED_ON_STARTUP: bool = True
    # Block startup until seeding finishes instead of serving an empty table
    WAIT_FOR_SEED: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
