"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRPG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Placement Configuration
    map_width: float = Field(default=1000.0, gt=0, description="Width of the placement area")
    map_height: float = Field(default=800.0, gt=0, description="Height of the placement area")
    min_spacing: float = Field(default=80.0, ge=0, description="Minimum distance between placed nodes")
    placement_attempts: int = Field(
        default=50, ge=1, description="Resampling attempts per outer node before accepting a crowded point"
    )

    # Generation Limits
    max_outer_node_count: int = Field(
        default=500, ge=0, description="Largest outer node count accepted in one generation call"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (console or json)")


settings = Settings()
