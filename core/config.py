"""
Planner configuration.

Every tunable is read from the environment (or a local .env file) once, at
import, into the module-level `settings`.
"""
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Planner settings with range validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Gemini
    # Absence is a configuration failure: generation short-circuits before any request.
    GOOGLE_AI_API_KEY: Optional[str] = Field(default=None)
    PLAN_MODEL: str = Field(default="gemini-2.5-flash")
    PLAN_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    PLAN_MAX_OUTPUT_TOKENS: int = Field(default=8192, ge=256)
    # Hard cap on a single generation attempt; expiry counts as a service failure.
    PLAN_GENERATION_TIMEOUT_S: float = Field(default=60.0, gt=0)

    # Start new sessions with the three-player demo roster
    SEED_DEMO_ROSTER: bool = Field(default=True)

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: Literal["json", "text"] = Field(default="json")

    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Comma-separated, e.g. "https://coach.example.com,https://www.coach.example.com"
    CORS_ORIGINS: Optional[str] = Field(default=None)


settings = Settings()
