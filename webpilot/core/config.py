"""Centralized configuration management using Pydantic Settings."""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserType(str, Enum):
    """Supported browser types."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"


class Settings(BaseSettings):
    """Settings loaded from WEBPILOT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEBPILOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_to_file: bool = Field(default=False, description="Also write logs to logs_dir")
    logs_dir: Path = Field(default=Path("./logs"), description="Log file directory")

    # Browser
    browser_type: BrowserType = Field(default=BrowserType.CHROME, description="Browser type")
    headless: bool = Field(default=True, description="Run browser in headless mode")
    window_width: int = Field(default=1920, ge=1, description="Window width in pixels")
    window_height: int = Field(default=1080, ge=1, description="Window height in pixels")
    user_agent: str | None = Field(default=None, description="User agent override")
    use_driver_manager: bool = Field(
        default=True, description="Resolve driver binaries through webdriver-manager"
    )

    # Timeouts
    page_load_timeout: int = Field(default=30, ge=1, description="Page load timeout in seconds")
    implicit_wait: float = Field(default=0, ge=0, description="Implicit wait in seconds")
    script_timeout: int = Field(default=30, ge=1, description="Async script timeout in seconds")
    explicit_wait: float = Field(default=10.0, gt=0, description="Default explicit wait in seconds")
    poll_frequency: float = Field(default=0.5, gt=0, description="Explicit wait poll interval")

    # Screenshots
    screenshot_dir: Path = Field(
        default=Path("./screenshots"), description="Directory for saved screenshots"
    )

    @field_validator("poll_frequency")
    @classmethod
    def validate_poll_frequency(cls, v: float, info) -> float:
        """Ensure polling is not slower than the wait itself."""
        explicit_wait = info.data.get("explicit_wait", 10.0)
        if v > explicit_wait:
            raise ValueError("poll_frequency must be <= explicit_wait")
        return v

    @property
    def window_size(self) -> tuple[int, int]:
        """Get configured window size."""
        return self.window_width, self.window_height


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
