"""Settings for the metrics exposition sidecar.

Values are read from the environment (``EXPOFMT_`` prefix) and an optional
``.env`` file in the working directory.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Exposition settings.

    Attributes:
        METRICS_HOST: Interface the sidecar binds to.
        METRICS_PORT: Port the sidecar listens on.
        METRICS_PATH: Route that serves the scrape.
        ENABLE_OPENMETRICS: Allow negotiating the experimental OpenMetrics format.
        LOG_LEVEL: Level of the ``expofmt`` logger.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPOFMT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    METRICS_HOST: str = Field("0.0.0.0", description="Interface to bind the metrics server to")
    METRICS_PORT: int = Field(9090, ge=0, le=65535, description="Port of the metrics server")
    METRICS_PATH: str = Field("/metrics", description="Route serving the metrics scrape")
    ENABLE_OPENMETRICS: bool = Field(
        False, description="Allow negotiating application/openmetrics-text"
    )
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("METRICS_PATH")
    @classmethod
    def _leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else "/" + v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


settings = Settings()
