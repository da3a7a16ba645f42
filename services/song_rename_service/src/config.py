"""Configuration management for the Song Rename Service."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "Song Rename Service"
    app_version: str = "0.1.0"
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Render logs as JSON instead of console output")

    # Suggestion service settings
    gemini_api_key: str = Field(default="", description="API key for the Gemini generateContent API")
    gemini_model: str = Field(default="gemini-2.0-flash", description="Gemini model used for suggestions")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Gemini REST API",
    )
    request_timeout: float = Field(default=60.0, gt=0, description="Suggestion request timeout in seconds")
    default_style_prompt: str | None = Field(default=None, description="Style prompt used when none is given")

    # Scanner settings
    supported_extensions: list[str] = Field(
        default=[".mp3", ".wav", ".flac", ".ogg"],
        description="Audio file extensions eligible for renaming",
    )

    @field_validator("supported_extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value if ext]

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
