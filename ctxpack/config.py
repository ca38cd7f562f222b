"""Configuration loading for ctxpack (.ctxpack.yml) and option merging."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".ctxpack.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PackConfig:
    """Defaults read from .ctxpack.yml; ``None`` means "not set"."""

    root: Path
    output: Optional[str] = None
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    tokens: Optional[bool] = None
    max_file_size: Optional[int] = None
    max_tokens: Optional[int] = None
    summary: Optional[bool] = None
    recent: Optional[int] = None
    verbose: Optional[bool] = None
    log_file: Optional[str] = None


@dataclass
class PackOptions:
    """Effective options consumed by the packaging pipeline."""

    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    tokens: bool = False
    max_file_size: Optional[int] = None
    max_tokens: Optional[int] = None
    summary: bool = False
    recent: Optional[int] = None
    verbose: bool = False


def load_config(config_path: Path) -> PackConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PackConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    return PackConfig(
        root=root,
        output=_as_str(data.get("output")),
        include=_as_pattern_list(data.get("include")),
        exclude=_as_pattern_list(data.get("exclude")),
        tokens=_as_bool(data.get("tokens")),
        max_file_size=_as_int(data.get("max_file_size")),
        max_tokens=_as_int(data.get("max_tokens")),
        summary=_as_bool(data.get("summary")),
        recent=_as_int(data.get("recent")),
        verbose=_as_bool(data.get("verbose")),
        log_file=_as_str(data.get("log_file")),
    )


def merge_options(config: PackConfig | None = None, **overrides: Any) -> PackOptions:
    """Combine config-file defaults with explicit options.

    Any override that is not ``None`` wins over the config file; an empty
    pattern list counts as "not given" so the config's patterns survive.
    """
    options = PackOptions()
    if config is not None:
        for item in fields(PackOptions):
            value = getattr(config, item.name)
            if value is None or value == []:
                continue
            options = replace(options, **{item.name: value})

    known = {item.name for item in fields(PackOptions)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"Unknown options: {', '.join(sorted(unknown))}")

    for name, value in overrides.items():
        if value is None:
            continue
        if name in {"include", "exclude"}:
            value = _as_pattern_list(value)
            if not value:
                continue
        options = replace(options, **{name: value})
    return options


def split_patterns(raw: str | None) -> List[str]:
    """Split a comma-separated pattern string, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_pattern_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return split_patterns(value)
    if isinstance(value, Sequence):
        return [str(item).strip() for item in value if isinstance(item, str) and item.strip()]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "PackConfig",
    "PackOptions",
    "load_config",
    "merge_options",
    "split_patterns",
]
