from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModeEnum(str, Enum):
    development = "development"
    production = "production"
    testing = "testing"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file="../.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── App ───────────────────────────────────────────────────
    MODE: ModeEnum = ModeEnum.production
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Irtus Business"
    LOG_LEVEL: str = "INFO"

    ALLOWED_ORIGINS: list[str] = [
        # Development
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # ── Gemini ────────────────────────────────────────────────
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash-preview-09-2025"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"

    # ── Generation retries ────────────────────────────────────
    GENERATION_MAX_RETRIES: int = 5
    GENERATION_BACKOFF_BASE_SECONDS: float = 1.0
    # None disables the per-request timeout
    REQUEST_TIMEOUT_SECONDS: float | None = None

    @field_validator("GENERATION_MAX_RETRIES")
    @classmethod
    def check_max_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("GENERATION_MAX_RETRIES must be >= 0")
        return v

    @field_validator("GENERATION_BACKOFF_BASE_SECONDS")
    @classmethod
    def check_backoff_base(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("GENERATION_BACKOFF_BASE_SECONDS must be > 0")
        return v

    @field_validator("GEMINI_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def generate_content_url(self) -> str:
        return f"{self.GEMINI_BASE_URL}/models/{self.GEMINI_MODEL}:generateContent"


settings = Settings()
