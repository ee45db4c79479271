from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    database_url: str = Field(default="sqlite+pysqlite:///./stylefinder.db")
    base_dashboard_url: str = "http://localhost:5173"
    cors_extra_origins: str = ""

    secret_key: str = "change-me"
    access_token_expire_minutes: int = 1440

    roboflow_api_key: str = ""
    roboflow_model_url: str = "https://detect.roboflow.com/clothing-detection-s4ioc/4"
    detector_confidence: int = 30
    detector_overlap: int = 30
    detector_max_concurrency: int = 3

    serpapi_api_key: str = ""
    serpapi_base_url: str = "https://serpapi.com/search.json"
    web_search_country: str = "in"
    web_search_language: str = "en"

    products_per_slot: int = 10
    pipeline_deadline_sec: float = 45.0
    http_timeout_sec: float = 20.0


settings = Settings()
