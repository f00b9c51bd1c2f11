from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    redis_url: str = "redis://localhost:6379/0"
    log_level: str = "INFO"

    # AI
    ai_mode: str = "mock"  # "mock" or "gemini"
    gemini_api_key: Optional[str] = None
    gemini_text_model: str = "gemini-2.5-flash"
    ai_batch_size: int = 5
    ai_batch_delay_sec: float = 0.1
    ai_timeout_sec: float = 10.0

    # Category cache (AI answers), 30 days
    category_cache_ttl_sec: int = 60 * 60 * 24 * 30

    # Shopping list
    duplicate_threshold: float = 0.7

    # Rate limit (per-IP, slowapi syntax)
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://localhost",
        "http://127.0.0.1",
    ]


settings = Settings()
