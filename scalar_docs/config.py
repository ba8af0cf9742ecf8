"""
Library config loaded from environment and .env via Pydantic Settings.
"""
from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TITLE = "Scalar API Reference"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "scalar-docs/1.0"
DEFAULT_CDN_URL = "https://cdn.jsdelivr.net/npm/@scalar/api-reference"


class Settings(BaseSettings):
    # Settings from environment (SCALAR_DOCS_*) and .env.

    model_config = SettingsConfigDict(
        env_prefix="SCALAR_DOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_title: str = DEFAULT_TITLE
    default_language: str = DEFAULT_LANGUAGE
    http_timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    cdn_url: str = DEFAULT_CDN_URL

    @field_validator("default_title", "default_language", "user_agent", "cdn_url", mode="before")
    @classmethod
    def blank_uses_default(cls, v: str | None, info: ValidationInfo) -> str:
        defaults = {
            "default_title": DEFAULT_TITLE,
            "default_language": DEFAULT_LANGUAGE,
            "user_agent": DEFAULT_USER_AGENT,
            "cdn_url": DEFAULT_CDN_URL,
        }
        if v is None:
            return defaults[info.field_name]
        s = str(v).strip()
        return s or defaults[info.field_name]

    @field_validator("http_timeout")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            return DEFAULT_TIMEOUT
        return v


settings = Settings()
