"""Application settings using pydantic-settings."""

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_", env_file=".env", extra="ignore", populate_by_name=True
    )

    name: str = Field(default="TTS API", alias="APP_NAME")
    version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: Environment = Field(default=Environment.DEV, alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")


class ServerSettings(BaseSettings):
    """Server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)
    reload: bool = Field(default=False)


class GoogleCloudSettings(BaseSettings):
    """Google Cloud project, credentials and storage settings."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_", env_file=".env", extra="ignore", populate_by_name=True
    )

    project_id: str | None = Field(default=None)
    credentials_file: str | None = Field(
        default=None, description="Path to a service account JSON key file"
    )
    credentials_json: str | None = Field(
        default=None,
        alias="GOOGLE_SERVICE_ACCOUNT",
        description="Service account key as an inline JSON document",
    )
    storage_bucket: str = Field(default="tts-conversions")
    public_base_url: str = Field(default="https://storage.googleapis.com")
    use_mock: bool = Field(
        default=True,
        alias="USE_MOCK",
        description="Use in-memory stores and a mock synthesizer instead of Google Cloud",
    )


class SynthesisSettings(BaseSettings):
    """Fixed speech synthesis parameters."""

    model_config = SettingsConfigDict(env_prefix="TTS_", env_file=".env", extra="ignore")

    default_voice: str = Field(default="en-US-Wavenet-D")
    effects_profile_id: str = Field(default="small-bluetooth-speaker-class-device")
    pitch: float = Field(default=0.0, ge=-20.0, le=20.0)
    speaking_rate: float = Field(default=1.0, ge=0.25, le=4.0)


class ConversionSettings(BaseSettings):
    """Conversion request limits and failure handling."""

    model_config = SettingsConfigDict(
        env_prefix="CONVERSION_", env_file=".env", extra="ignore"
    )

    max_text_length: int = Field(default=5000, ge=1)
    max_upload_size_mb: int = Field(default=10, ge=1, le=100)
    allowed_upload_types: list[str] = Field(
        default_factory=lambda: ["application/pdf", "text/plain"]
    )
    rollback_on_failure: bool = Field(
        default=False,
        description="Delete artifacts written by a conversion that later fails",
    )

    @property
    def max_upload_size_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024


class APISettings(BaseSettings):
    """HTTP surface settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseSettings):
    """Combined application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    google: GoogleCloudSettings = Field(default_factory=GoogleCloudSettings)
    synthesis: SynthesisSettings = Field(default_factory=SynthesisSettings)
    conversion: ConversionSettings = Field(default_factory=ConversionSettings)
    api: APISettings = Field(default_factory=APISettings)

    # Logging settings
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "pretty"] = Field(default="pretty", alias="LOG_FORMAT")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
