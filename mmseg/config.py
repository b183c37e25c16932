"""Configuration management for the segmentation pipeline."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class DictionaryConfig(BaseModel):
    """Configuration for dictionary files."""

    words_file: Optional[Path] = Field(
        default=None, description="Words file with '<length> <word>' lines"
    )
    chars_file: Optional[Path] = Field(
        default=None, description="Chars file with '<frequency> <char>' lines"
    )
    word_list_files: list[Path] = Field(
        default_factory=list, description="Plain one-word-per-line files"
    )
    max_word_length: Optional[int] = Field(default=None, ge=1)


class SegmentationConfig(BaseModel):
    """Configuration for segmentation engine."""

    mode: Literal["complex", "simple"] = "complex"
    keep_separators: bool = Field(
        default=True, description="Keep whitespace and punctuation tokens in output"
    )
    encoding: str = "utf-8"
    workers: int = Field(default=1, ge=1)


class OutputConfig(BaseModel):
    """Configuration for output options."""

    output_file: Path = Path("segmented_output.txt")
    format: Literal["text", "jsonl", "csv"] = "text"
    delimiter: str = " "


class Config(BaseModel):
    """Main configuration for the segmentation pipeline."""

    input_file: Optional[Path] = None
    input_format: Literal["text", "jsonl"] = "text"
    dictionary: DictionaryConfig = Field(default_factory=DictionaryConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
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
