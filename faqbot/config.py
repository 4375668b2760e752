from typing import List

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "FAQ Bot"
    debug: bool = False
    cors_allow_origins: List[str] = ["*"]

    # Notion (knowledge base + query log)
    notion_api_key: str = ""
    notion_knowledge_base_id: str = ""
    notion_log_db_id: str = ""  # Empty disables query logging
    notion_version: str = "2022-06-28"
    notion_page_size: int = 100

    # Knowledge cache
    cache_ttl_seconds: float = 600.0  # 10 minutes

    # OpenAI (classifier via gen_ai_hub proxy)
    # No API key needed - uses gen_ai_hub proxy
    openai_model: str = "gpt-4o"
    temperature: float = 0.0

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
