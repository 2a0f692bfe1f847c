"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Physics constants are not settings; they live on the game state.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Window and scaling settings."""

    # Window
    window_width: int = 400
    window_height: int = 490
    fullscreen: bool = False
    title: str = "planeflap"

    # Rendering
    fps: int = 60
    show_debug: bool = False

    # auto: SHOW_ALL on non-desktop platforms, NO_SCALE otherwise
    scale_mode: Literal["auto", "no_scale", "show_all"] = "auto"


class AudioSettings(BaseModel):
    """Audio settings."""

    enabled: bool = True
    master_volume: float = Field(default=1.0, ge=0.0, le=1.0)
    muted: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PLANEFLAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    log_file: Optional[Path] = None

    # Fixed seed for reproducible pipe rows
    seed: Optional[int] = None

    assets_path: Path = Field(default_factory=lambda: Path.cwd() / "assets")

    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
