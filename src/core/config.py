"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Compiler settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="ANVIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Tree factory
    debug: bool = Field(default=False, description="Attach data-anvil-* debug attributes to nodes")
    validate_components: bool = Field(
        default=True, description="Validate each node before building it"
    )
    max_tree_depth: int = Field(
        default=64, gt=0, le=512, description="Max component/YAML nesting depth"
    )

    # Form template parsing (whole-app loads)
    allow_custom_components: bool = Field(
        default=True, description="Downgrade unknown component types to warnings"
    )
    validate_event_bindings: bool = Field(
        default=True, description="Warn on event handlers without the 'self.' prefix"
    )
    validate_data_bindings: bool = Field(
        default=True, description="Warn on data bindings targeting missing components"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
