"""Configuration management for the breath-mark pipeline."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class SegmentationConfig(BaseModel):
    """Configuration for the marking stages."""

    max_length: int = Field(default=20, ge=1, description="Sentences longer than this get split")
    min_length: int = Field(default=6, ge=1, description="Segments shorter than this get merged")
    max_recursion_depth: int = Field(default=3, ge=0)
    format_input: bool = Field(
        default=False, description="Run the note formatter before marking"
    )

    @model_validator(mode="after")
    def check_lengths(self) -> "SegmentationConfig":
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        return self


class DictionaryConfig(BaseModel):
    """Configuration for the word dictionaries."""

    default_dir: Optional[Path] = None  # Packaged word lists when unset
    override_path: Optional[Path] = None  # JSON store of user edits

    @field_validator("default_dir", "override_path", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class OutputConfig(BaseModel):
    """Configuration for output options."""

    output_dir: Path = Path("data/marked_output")
    format: Literal["csv", "jsonl"] = "csv"


class Config(BaseModel):
    """Main configuration for the breath-mark pipeline."""

    input_file: Optional[Path] = None
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    dictionary: DictionaryConfig = Field(default_factory=DictionaryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("input_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
