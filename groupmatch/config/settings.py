"""Application configuration settings."""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List, Literal, Optional

# Get the project root path
PROJECT_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Document store
    STORE_BACKEND: Literal["supabase", "memory"] = "supabase"
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None
    PENDING_EVENTS_COLLECTION: str = "events"
    PLANNED_EVENTS_COLLECTION: str = "planned_events"

    # Matching
    MATCH_MAX_DISTANCE_MILES: float = 25.0
    MATCH_CONFLICT_RETRIES: int = 2
    SUGGESTION_LIMIT: int = 3
    # Seed for venue selection; unset means non-deterministic
    MATCHING_RANDOM_SEED: Optional[int] = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    @model_validator(mode="after")
    def _validate_store(self) -> "Settings":
        if self.STORE_BACKEND == "supabase" and not (self.SUPABASE_URL and self.SUPABASE_KEY):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_KEY are required when STORE_BACKEND=supabase. "
                "Set STORE_BACKEND=memory to run without a database."
            )
        if self.MATCH_CONFLICT_RETRIES < 0:
            raise ValueError("MATCH_CONFLICT_RETRIES must be >= 0")
        return self

    class Config:
        env_file = str(PROJECT_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
