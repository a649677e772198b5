# app/core/config.py

from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STUDENT_RECORDS_", case_sensitive=False)

    # Storage
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "student_records"

    # HTTP surface
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    # Default page size for GET /students
    DEFAULT_PAGE_LIMIT: int = 10

    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
