"""Conversion configuration.

Settings come from an optional YAML file and CLI flags (flags win). The file
may hold the keys at top level or under a `convert:` section:

    convert:
      repo_path: ../leetcode
      output_format: csv
      output_name: leetcode-solutions
      metadata_strategy: frontmatter

The walker and writers receive a validated ConvertConfig and never look at
arguments or files themselves.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional
import yaml
from .sources.metadata import MetadataStrategy
from .pipeline.walker import METADATA_FILE
from .writers.registry import OutputFormat

class ConfigError(ValueError):
    """Configuration is incomplete or inconsistent."""

_STRING_KEYS = ("repo_path", "output_format", "output_name", "solutions_dir", "metadata_file", "metadata_strategy")

@dataclass
class ConvertConfig:
    repo_path: str = "."
    output_format: str = OutputFormat.PARQUET.value
    output_name: str = "leetcode-solutions"
    solutions_dir: str = "solution"   # walk root, relative to repo_path
    metadata_file: str = METADATA_FILE
    metadata_strategy: str = MetadataStrategy.FRONTMATTER.value
    row_group_size: int = 1000        # parquet only
    log_every: int = 100              # progress log interval, in directories
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConvertConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {unknown}. Available: {sorted(known)}")
        return cls(**data)

    def merged(self, overrides: Dict[str, Any]) -> "ConvertConfig":
        """Copy with non-None overrides applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ConvertConfig.from_dict(values)

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.parse(self.output_format)

    @property
    def strategy(self) -> MetadataStrategy:
        return MetadataStrategy.parse(self.metadata_strategy)

    @property
    def root(self) -> str:
        if not self.solutions_dir:
            return self.repo_path
        return os.path.join(self.repo_path, self.solutions_dir)

    @property
    def output_path(self) -> str:
        return f"{self.output_name}.{self.format.extension}"

    def validate(self) -> "ConvertConfig":
        for key in _STRING_KEYS:
            value = getattr(self, key)
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string, got {value!r}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigError(f"log_file must be a string, got {self.log_file!r}")
        if not self.repo_path:
            raise ConfigError("repository path cannot be empty")
        if not self.output_name:
            raise ConfigError("output name cannot be empty")
        if not self.metadata_file:
            raise ConfigError("metadata file name cannot be empty")
        try:
            self.format
            self.strategy
        except ValueError as e:
            raise ConfigError(str(e)) from e
        for key in ("row_group_size", "log_every"):
            value = getattr(self, key)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(f"{key} must be a positive integer, got {value!r}")
        return self

def _load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def load_config(path: str) -> ConvertConfig:
    try:
        data = _load_yaml(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    section = data.get("convert", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'convert' section in {path} must be a mapping")
    return ConvertConfig.from_dict(section)
