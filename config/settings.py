"""Application settings and configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NOVA_",
        extra="ignore",
    )

    # ==========================================================================
    # New projects
    # ==========================================================================
    default_project_name: str = Field(
        default="New Project",
        description="Name used when a project is created without one",
    )
    canvas_width: int = Field(default=1920, description="Default canvas width in pixels")
    canvas_height: int = Field(default=1080, description="Default canvas height in pixels")

    # ==========================================================================
    # Storage
    # ==========================================================================
    assets_dir_name: str = Field(
        default="assets",
        description="Directory next to the project file that holds imported assets",
    )
    json_indent: int = Field(
        default=2,
        description="Indentation used when writing project files",
    )

    # ==========================================================================
    # Application
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )


# Global settings instance
settings = Settings()
