"""
Configuration model for schema generation runs.

Provides type-safe configuration using pydantic with validation,
defaults, and schema enforcement.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import ConfigurationError
from ..inputs import DEFAULT_GLOB, DEFAULT_PUBSUB_DIR
from ..logging_config import VALID_LOG_LEVELS


class GeneratorConfig(BaseModel):
    """Settings for one generation run."""

    pubsub_dir: Path = Field(
        default=Path(DEFAULT_PUBSUB_DIR),
        description="Directory containing *.pubsub.proto files",
    )
    glob: str = Field(
        default=DEFAULT_GLOB,
        description="Glob pattern within pubsub_dir to match pubsub proto files",
    )
    output_dir: Optional[Path] = Field(
        default=None,
        description="Directory to write generated schema YAMLs into",
    )
    strict_names: bool = Field(
        default=False,
        description="Fail when two inputs derive the same schema name",
    )
    log_level: str = Field(
        default="WARNING",
        description="Structured log level",
    )

    model_config = ConfigDict(extra="forbid")  # Reject unknown fields

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {VALID_LOG_LEVELS}")
        return v.upper()

    def require_output_dir(self) -> Path:
        """Return output_dir, which has no default.

        Raises:
            ConfigurationError: If no output directory was configured
        """
        if self.output_dir is None:
            raise ConfigurationError(
                "missing required flag: --output-dir", setting="output_dir"
            )
        return self.output_dir
