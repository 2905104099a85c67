from pathlib import Path
from typing import List
from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings managed by Pydantic."""

    # Google GenAI Configuration
    GOOGLE_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="Google API Key for Gemini. Supports GOOGLE_API_KEY, GEMINI_API_KEY and API_KEY env vars."
    )
    GEMINI_MODEL_NAME: str = "gemini-2.5-flash"
    ROUTER_MODEL_NAME: str = Field(
        default="gemini-2.5-flash",
        description="Model used for the lightweight persona classification call.",
    )
    IMAGE_MODEL_NAME: str = Field(
        default="gemini-2.5-flash-image",
        description="Image-capable model used for the app thumbnail.",
    )
    THUMBNAIL_ASPECT_RATIO: str = "16:9"

    # Context Configuration
    HISTORY_WINDOW: int = Field(
        default=5, description="Number of daily logs included in persona prompts"
    )
    VIDEO_HOST_MARKERS: List[str] = Field(
        default_factory=lambda: ["youtube.com", "youtu.be"],
        description="URL fragments that identify a citation as a video recommendation",
    )

    # Persistence Configuration
    DATA_DIR: str = Field(
        default="data", description="Directory holding the JSON log and profile documents"
    )

    # Agent Configuration
    LOG_LEVEL: str = "INFO"
    DEBUG_MODE: bool = False

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
