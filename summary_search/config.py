"""
Summary Search Engine Configuration
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Supabase (corpus + analytics); unset means in-memory only
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    summaries_table: str = "summaries"
    analytics_table: str = "search_analytics"

    # Logging
    log_level: str = "info"

    # Analytics
    analytics_enabled: bool = True

    # Search
    relevance_threshold: float = 0.3
    max_results: int = 5
    default_lookback_days: int = 30
    recent_summary_window: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
