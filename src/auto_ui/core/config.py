"""Configuration Management."""

from enum import Enum
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from .hash import Algorithm

# Load environment variables from .env file
load_dotenv()


class Policy(str, Enum):
    """How a pipeline stage treats incomplete input."""

    STRICT = "strict"  # Raise on anything it cannot map
    PERMISSIVE = "permissive"  # Substitute a placeholder and log


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="AUTO_UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Fallback policies
    converter_policy: Policy = Field(
        default=Policy.STRICT, description="Node→View conversion of unknown kinds"
    )
    extractor_policy: Policy = Field(
        default=Policy.PERMISSIVE, description="Widget extraction without a view node"
    )
    bridge_policy: Policy = Field(
        default=Policy.PERMISSIVE, description="Main view that is not a node"
    )

    # Limits
    max_view_depth: int = Field(default=64, gt=0, description="Max Node nesting depth")
    max_source_size: int = Field(
        default=1024 * 1024, gt=0, description="Max .at source size (bytes)"
    )

    # Hot reload
    hot_reload: bool = Field(default=True, description="Enable state-preserving reload")
    watch_poll_interval: float = Field(
        default=0.5, gt=0.0, le=10.0, description="File watcher poll interval (seconds)"
    )
    watch_patterns: list[str] = Field(
        default_factory=lambda: ["*.at"], description="Glob patterns to watch"
    )
    fingerprint_algorithm: Algorithm = Field(
        default=Algorithm.XXHASH64, description="Hash used to skip unchanged saves"
    )

    # Code generation
    indent_width: int = Field(default=4, ge=1, le=8, description="Spaces per indent level")
    output_suffix: str = Field(default=".py", description="Suffix for generated files")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
