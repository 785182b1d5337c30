"""Tests for identity resolution."""

from __future__ import annotations

import pytest

from htmlimport2esm.errors import ConversionError, FailureReason
from htmlimport2esm.rewrite.identity import resolve_identity, strip_directives
from tests._fixtures.samples import CARD_JS, MY_EL_JS


@pytest.mark.parametrize(
    "js",
    [
        MY_EL_JS,
        CARD_JS,
        "class A extends Polymer.Element {\r\n\tstatic get is() {\r\n\t\treturn \"a-b\";\r\n\t}\r\n}\r\n",
        "static get is(){return 'x-y'}",
    ],
)
def test_split_is_lossless(js: str) -> None:
    source = resolve_identity(js)
    assert source.before + source.declaration + source.after == js
    assert source.prefix + source.suffix == js


def test_resolves_identity_and_split_points() -> None:
    source = resolve_identity(MY_EL_JS)
    assert source.identity == "my-el"
    assert source.prefix.endswith("return 'my-el'; }")
    assert source.suffix == " }"


def test_missing_accessor_reports_missing_identity() -> None:
    with pytest.raises(ConversionError) as excinfo:
        resolve_identity("class Foo extends Polymer.Element {}")
    assert excinfo.value.reason is FailureReason.MISSING_IDENTITY


def test_dashless_literal_reports_empty_capture() -> None:
    with pytest.raises(ConversionError) as excinfo:
        resolve_identity("class Foo { static get is() { return 'foo'; } }")
    assert excinfo.value.reason is FailureReason.IDENTITY_CAPTURE_EMPTY
    assert "identity token not extracted" in str(excinfo.value)


def test_module_prefix_drops_directive_and_modernises_base_class() -> None:
    source = resolve_identity(CARD_JS)
    assert "@ts-check" not in source.module_prefix
    assert "class UserCard extends PolymerElement {" in source.module_prefix
    assert source.module_prefix.startswith("/**")


def test_base_class_replacement_is_limited_to_prefix() -> None:
    js = "class A extends Polymer.Element { static get is() { return 'a-b'; } }\nwindow.Base = Polymer.Element;\n"
    source = resolve_identity(js)
    assert "Polymer.Element" not in source.module_prefix
    assert "window.Base = Polymer.Element;" in source.suffix


def test_custom_base_class_tokens() -> None:
    js = "class A extends Legacy.Base { static get is() { return 'a-b'; } }"
    source = resolve_identity(js, legacy_base="Legacy.Base", modern_base="ModernBase")
    assert "extends ModernBase" in source.module_prefix


def test_directive_stripping_is_idempotent() -> None:
    text = "// @ts-check\n// @ts-nocheck\nconst a = 1;\n  // @ts-check\n"
    once = strip_directives(text)
    assert once == "const a = 1;\n"
    assert strip_directives(once) == once


def test_indent_follows_accessor_line() -> None:
    assert resolve_identity(CARD_JS).indent == "  "
    assert resolve_identity(MY_EL_JS).indent == ""
