"""Tests for htmlimport2esm.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from htmlimport2esm.config import ConfigError, ConverterConfig, RewriteOptions, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ConverterConfig)
    assert config.root == tmp_path.resolve()
    assert config.rewrite == RewriteOptions()
    assert config.rewrite.library_segment == "lib"
    assert config.rewrite.fallback_depth == 2
    assert "polymer.html" in config.rewrite.deprecated_imports
    assert config.exclude_paths == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".htmlimport2esm.yml"
    config_file.write_text(
        """
library_segment: "bower_components/"
fallback_depth: 3
deprecated_imports:
  - polymer.html
  - old-widget.html
relocation:
  namespace: "@scope"
  prefixes: [polymer/, neon-]
base_class:
  legacy: Polymer.LegacyElement
  modern: LegacyElement
templates_dir: "tools/templates"
exclude_paths:
  - "demo/"
  - "test/"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    rewrite = config.rewrite

    assert rewrite.library_segment == "bower_components"
    assert rewrite.fallback_depth == 3
    assert rewrite.deprecated_imports == ("polymer.html", "old-widget.html")
    assert rewrite.relocation_namespace == "@scope"
    assert rewrite.relocated_prefixes == ("polymer/", "neon-")
    assert rewrite.legacy_base_class == "Polymer.LegacyElement"
    assert rewrite.modern_base_class == "LegacyElement"
    assert rewrite.templates_dir == tmp_path.resolve() / "tools" / "templates"
    assert config.exclude_paths == ["demo/", "test/"]


def test_empty_deprecation_list_disables_filter(tmp_path: Path) -> None:
    (tmp_path / ".htmlimport2esm.yml").write_text("deprecated_imports: []\n", encoding="utf-8")
    assert load_config(tmp_path).rewrite.deprecated_imports == ()


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".htmlimport2esm.yml").write_text("library_segment: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".htmlimport2esm.yml").write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_negative_fallback_depth_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".htmlimport2esm.yml").write_text("fallback_depth: -1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_with_library_segment_override() -> None:
    options = RewriteOptions()
    assert options.with_library_segment(None) is options
    assert options.with_library_segment("/vendor/").library_segment == "vendor"
