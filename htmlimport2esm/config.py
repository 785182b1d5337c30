"""Configuration loading for htmlimport2esm (.htmlimport2esm.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".htmlimport2esm.yml"

DEFAULT_LIBRARY_SEGMENT = "lib"
DEFAULT_FALLBACK_DEPTH = 2
DEFAULT_DEPRECATED_IMPORTS: tuple[str, ...] = (
    "polymer.html",
    "polymer-element.html",
    "iron-flex-layout.html",
    "iron-flex-layout-classes.html",
)
DEFAULT_RELOCATION_NAMESPACE = "@polymer"
DEFAULT_RELOCATED_PREFIXES: tuple[str, ...] = ("polymer/", "iron-", "paper-")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class RewriteOptions:
    """Settings that steer the rewrite engine for every file pair."""

    library_segment: str = DEFAULT_LIBRARY_SEGMENT
    fallback_depth: int = DEFAULT_FALLBACK_DEPTH
    deprecated_imports: tuple[str, ...] = DEFAULT_DEPRECATED_IMPORTS
    relocation_namespace: str = DEFAULT_RELOCATION_NAMESPACE
    relocated_prefixes: tuple[str, ...] = DEFAULT_RELOCATED_PREFIXES
    legacy_base_class: str = "Polymer.Element"
    modern_base_class: str = "PolymerElement"
    templates_dir: Optional[Path] = None

    def with_library_segment(self, segment: str | None) -> "RewriteOptions":
        if not segment:
            return self
        return replace(self, library_segment=segment.strip("/"))


@dataclass
class ConverterConfig:
    """Represents the settings defined in .htmlimport2esm.yml."""

    root: Path
    rewrite: RewriteOptions = field(default_factory=RewriteOptions)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> ConverterConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ConverterConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    defaults = RewriteOptions()
    relocation = _as_dict(data.get("relocation"))
    base_class = _as_dict(data.get("base_class"))

    segment = _as_str(data.get("library_segment"))
    depth = _as_int(data.get("fallback_depth"))
    if depth is not None and depth < 0:
        raise ConfigError("fallback_depth must not be negative")
    deprecated = _as_str_list(data.get("deprecated_imports"))
    prefixes = _as_str_list(relocation.get("prefixes"))
    templates_dir_str = _as_str(data.get("templates_dir"))

    rewrite = RewriteOptions(
        library_segment=segment.strip("/") if segment else defaults.library_segment,
        fallback_depth=depth if depth is not None else defaults.fallback_depth,
        deprecated_imports=tuple(deprecated) if "deprecated_imports" in data else defaults.deprecated_imports,
        relocation_namespace=_as_str(relocation.get("namespace")) or defaults.relocation_namespace,
        relocated_prefixes=tuple(prefixes) if "prefixes" in relocation else defaults.relocated_prefixes,
        legacy_base_class=_as_str(base_class.get("legacy")) or defaults.legacy_base_class,
        modern_base_class=_as_str(base_class.get("modern")) or defaults.modern_base_class,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )

    return ConverterConfig(
        root=root,
        rewrite=rewrite,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


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


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConverterConfig",
    "RewriteOptions",
    "load_config",
]
