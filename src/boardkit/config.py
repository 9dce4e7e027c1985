"""Codec configuration.

``CodecConfig`` collects the few knobs the codec exposes.  It can be
built directly, from a mapping, or from a YAML file::

    # boardkit.yaml
    max_depth: 16
    indent: 2
    sort_keys: false

All keys are optional; unknown keys are rejected so that typos surface
immediately.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Final

import yaml

DEFAULT_MAX_DEPTH: Final[int] = 32


class ConfigError(ValueError):
    """Raised when codec configuration values are invalid."""


@dataclass(frozen=True)
class CodecConfig:
    """Settings for decoding and encoding widgets.

    Parameters
    ----------
    max_depth:
        Maximum group nesting accepted on decode.  A top-level widget is
        depth 0; a widget inside one group is depth 1.
    indent:
        JSON indentation used by the text encoders.  ``None`` produces
        compact output.
    sort_keys:
        Whether the text encoders sort object keys.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    indent: int | None = None
    sort_keys: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigError(f"max_depth must be an integer, got {self.max_depth!r}")
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.indent is not None and (
            isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 0
        ):
            raise ConfigError(f"indent must be a non-negative integer, got {self.indent!r}")
        if not isinstance(self.sort_keys, bool):
            raise ConfigError(f"sort_keys must be a boolean, got {self.sort_keys!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "CodecConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CodecConfig":
        """Load a config from a YAML file.  An empty file yields the defaults."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_mapping(data)

    def replace(self, **changes: object) -> "CodecConfig":
        """Return a copy with ``changes`` applied; ``None`` values are ignored."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update({k: v for k, v in changes.items() if v is not None})
        return CodecConfig(**current)
