"""
LiveWatch Configuration Module.

Centralizes all configuration settings using Pydantic Settings.
Requires Python 3.11+.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load .env file into os.environ at module import time
# This ensures nested BaseSettings classes can read the values
_env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    # Try current working directory
    load_dotenv()


def _split_suffixes(v: str | list[str]) -> list[str]:
    """Parse suffixes from comma-separated string or list."""
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    return v


class WatcherSettings(BaseSettings):
    """File watcher configuration settings."""

    model_config = SettingsConfigDict(env_prefix="WATCHER_")

    debounce_delay_ms: int = Field(default=100, ge=1, le=10000)
    recursive: bool = Field(default=True)


class BuildSettings(BaseSettings):
    """Build watcher configuration settings."""

    model_config = SettingsConfigDict(env_prefix="BUILD_")

    root: Path = Field(default=Path("src"), description="Directory to watch")
    suffixes: Annotated[list[str], NoDecode] = Field(
        default=[".elm"],
        description="File suffixes that trigger a build",
    )
    command: str = Field(
        default="elm make src/Main.elm --output=elm.js",
        description="Shell command line run on change",
    )
    cwd: Path | None = Field(default=None, description="Working directory for the command")
    exit_on_failure: bool = Field(default=False)

    @field_validator("suffixes", mode="before")
    @classmethod
    def parse_suffixes(cls, v: str | list[str]) -> list[str]:
        return _split_suffixes(v)


class ReloadSettings(BaseSettings):
    """Live reload shell configuration settings."""

    model_config = SettingsConfigDict(env_prefix="RELOAD_")

    root: Path = Field(default=Path("."), description="Directory to watch")
    suffixes: Annotated[list[str], NoDecode] = Field(default=[".js", ".html"])
    entry_file: Path = Field(default=Path("app.html"), description="Page loaded into the window")
    title: str = Field(default="LiveWatch")
    width: int = Field(default=800, ge=100)
    height: int = Field(default=600, ge=100)
    frameless: bool = Field(default=True)
    background_color: str = Field(default="#002b36")

    @field_validator("suffixes", mode="before")
    @classmethod
    def parse_suffixes(cls, v: str | list[str]) -> list[str]:
        return _split_suffixes(v)


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    format: str = Field(default="console")  # "json" or "console"


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="LiveWatch")
    app_version: str = Field(default="0.1.0")

    # Sub-settings
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)
    reload: ReloadSettings = Field(default_factory=ReloadSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance of Settings.
    """
    return Settings()
