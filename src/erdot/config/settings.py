"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Dict, Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

DIRECTIVES = ("title", "header", "entity", "relationship")


def find_and_load_env_file():
    """Find and load .env file in current directory or parent directories."""
    current = Path.cwd().resolve()
    # Check current directory and up to 3 levels up
    for _ in range(4):
        env_path = current / ".env"
        if env_path.exists():
            # Load the .env file into environment variables
            load_dotenv(env_path, override=False)
            return str(env_path)
        parent = current.parent
        if parent == current:  # Reached root
            break
        current = parent
    return None


class Settings(BaseSettings):
    """Application configuration settings."""

    # Logging Configuration
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # What to do with a relationship whose endpoint names no declared entity
    unresolved_references: Literal["error", "warning", "ignore"] = "error"

    # Global option overrides keyed by directive, e.g.
    # ERDOT_GLOBAL_OPTIONS='{"title": {"direction": "LR"}}'
    global_options: Dict[str, Dict[str, str]] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_prefix="ERDOT_",
        env_file=None,  # We load it manually with dotenv
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("global_options")
    @classmethod
    def _known_directives(cls, value: Dict[str, Dict[str, str]]):
        unknown = sorted(set(value) - set(DIRECTIVES))
        if unknown:
            raise ValueError(
                f"unknown directive(s) {unknown}; expected one of {list(DIRECTIVES)}"
            )
        return value

    def __init__(self, **kwargs):
        """Initialize settings and create the log directory if needed."""
        # Ensure .env is loaded (in case this is called from a different directory)
        find_and_load_env_file()
        super().__init__(**kwargs)
        if self.log_file:
            self.log_file = Path(self.log_file)
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
