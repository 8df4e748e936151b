"""
Configuration management for Job Sentinel.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # LLM
    deepseek_api_key: str = ""
    deepseek_model: str = "deepseek-chat"
    llm_temperature: float = 0.1

    # Search APIs
    tavily_api_key: str = ""
    brave_api_key: str = ""

    # Database
    database_url: str = "sqlite:///./sentinel.db"
    storage_key: str = "sentinel_state"

    # Monitor pacing
    scan_pause_seconds: float = 2.0
    cycle_interval_seconds: float = 60.0

    # Agent settings
    max_candidates: int = 3
    freshness_days: int = 7
    search_timeout: float = 30.0

    # Diagnostics
    activity_log_size: int = 50
    log_level: str = "INFO"

    # API
    cors_origins: str = "http://localhost:5173"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
