"""Configuration model driving fragment loading.

RegistryConfig

`sources` (`list[Path]`)
: Fragment files or directories to load. Relative entries are resolved
  against the directory holding the configuration file.

`pattern` (`str`)
: Glob applied when a source is a directory. JSON documents (`*.json`) are
  always picked up in addition to the pattern.

`validate_descriptors` (`bool`)
: Check every implementor record against `ImplementorDescriptor` before
  registering it. Sidebar files are always validated.

`attach` (`AttachMode`)
: `early` attaches the consumer before any producer registers, `late`
  (default) lets producers fill the pending buffer first.

`namespaces` (`list[str]`)
: Optional allow-list of namespace keys; other fragments are skipped.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import ConfigError
from .loader import DEFAULT_PATTERN


logger = logging.getLogger(__name__)


class AttachMode(str, Enum):
    """Moment at which the consumer attaches to the registry."""

    EARLY = "early"
    LATE = "late"


class RegistryConfig(BaseModel):
    """Settings for a registry loading session."""

    model_config = ConfigDict(extra="forbid")

    sources: list[Path] = Field(default_factory=list)
    pattern: str = DEFAULT_PATTERN
    validate_descriptors: bool = False
    attach: AttachMode = AttachMode.LATE
    namespaces: list[str] = Field(default_factory=list)

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("pattern must not be empty")
        return value

    def resolve_sources(self, base_dir: Path) -> RegistryConfig:
        """Return a copy whose relative sources are anchored at ``base_dir``."""
        resolved = [path if path.is_absolute() else base_dir / path for path in self.sources]
        return self.model_copy(update={"sources": resolved})


def load_config(path: Path) -> RegistryConfig:
    """Load a YAML configuration file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration '{path}': {exc}") from exc

    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in '{path}': {exc}") from exc

    if not isinstance(payload, Mapping):
        raise ConfigError(f"Configuration '{path}' must be a mapping.")

    try:
        config = RegistryConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration '{path}': {exc}") from exc

    logger.debug("Loaded configuration from %s", path)
    return config.resolve_sources(path.parent)


__all__ = ["AttachMode", "RegistryConfig", "load_config"]
