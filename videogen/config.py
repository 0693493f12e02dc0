from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from videogen.models.generation import Resolution

load_dotenv()

DEFAULT_DEMO_VIDEO_URL = (
    "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True)

    video_api_endpoint: str = Field("https://api.veo3freeai.com/v1/generate", alias="VIDEO_API_ENDPOINT")
    video_api_key: Optional[str] = Field(default=None, alias="VIDEO_API_KEY")
    video_duration_seconds: int = Field(10, alias="VIDEO_DURATION_SECONDS", gt=0)
    video_resolution: Resolution = Field(Resolution.HD, alias="VIDEO_RESOLUTION")

    poll_interval_seconds: float = Field(2.0, alias="POLL_INTERVAL_SECONDS", ge=0)
    poll_max_attempts: int = Field(30, alias="POLL_MAX_ATTEMPTS", gt=0)
    http_timeout_seconds: float = Field(30.0, alias="HTTP_TIMEOUT_SECONDS", gt=0)

    demo_fallback_enabled: bool = Field(False, alias="DEMO_FALLBACK_ENABLED")
    demo_video_url: str = Field(DEFAULT_DEMO_VIDEO_URL, alias="DEMO_VIDEO_URL")
    demo_fallback_delay_seconds: float = Field(2.0, alias="DEMO_FALLBACK_DELAY_SECONDS", ge=0)

    app_host: str = Field("127.0.0.1", alias="APP_HOST")
    app_port: int = Field(8000, alias="APP_PORT")

    prompt_char_limit: int = Field(2400, alias="PROMPT_CHAR_LIMIT")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("video_api_endpoint", mode="before")
    @classmethod
    def normalize_endpoint(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("VIDEO_API_ENDPOINT cannot be empty")
        return value.rstrip("/")

    @field_validator("video_api_key", mode="before")
    @classmethod
    def blank_key_is_none(cls, value: Optional[str]) -> Optional[str]:
        value = (value or "").strip()
        return value or None


@lru_cache()
def get_settings() -> Settings:
    try:
        return Settings()
    except Exception as exc:
        raise RuntimeError("Failed to load application settings. Ensure your .env file is configured.") from exc


settings = get_settings()
