"""Tests for the extraction pattern library."""

from __future__ import annotations

import pytest

from htmlimport2esm.patterns import (
    DIRECTIVE_COMMENT,
    IDENTITY,
    INLINE_SCRIPT,
    LINK_IMPORT,
    NESTED_SCRIPT,
    STYLE_BLOCK,
    TEMPLATE_BLOCK,
)


@pytest.mark.parametrize(
    "markup, expected",
    [
        ('<link rel="import" href="../x/y.html">', "../x/y.html"),
        ("<link rel='import' href='a.html'>", "a.html"),
        ("<link rel=import href=bare.html>", "bare.html"),
        ("<link href='first.html' rel=import>", "first.html"),
        ('<LINK REL="IMPORT" HREF="upper.html">', "upper.html"),
    ],
)
def test_link_import_captures_href(markup: str, expected: str) -> None:
    matches = LINK_IMPORT.find_all(markup)
    assert len(matches) == 1
    assert LINK_IMPORT.capture(matches[0], "href") == expected


def test_link_import_ignores_other_link_relations() -> None:
    markup = '<link rel="stylesheet" href="site.css">\n<link rel="importer" href="x.html">'
    assert LINK_IMPORT.find_all(markup) == []


def test_link_import_reports_missing_href_capture() -> None:
    matches = LINK_IMPORT.find_all('<link rel="import" href="">')
    assert len(matches) == 1
    assert LINK_IMPORT.capture(matches[0], "href") is None


def test_link_import_returns_matches_in_document_order() -> None:
    markup = (
        '<link rel="import" href="b.html">\n'
        '<link rel="import" href="a.html">\n'
        '<link rel="import" href="b.html">\n'
    )
    hrefs = [LINK_IMPORT.capture(match, "href") for match in LINK_IMPORT.iter(markup)]
    assert hrefs == ["b.html", "a.html", "b.html"]


def test_identity_captures_dashed_token() -> None:
    js = "class A extends B {\n  static get is() {\n    return \"my-app-shell\";\n  }\n}"
    match = IDENTITY.search(js)
    assert match is not None
    assert IDENTITY.capture(match, "is") == "my-app-shell"


def test_identity_distinguishes_missing_capture_from_no_match() -> None:
    plain = IDENTITY.search("class A { static get is() { return 'plain'; } }")
    assert plain is not None
    assert IDENTITY.capture(plain, "is") is None

    assert IDENTITY.search("class A { static get properties() { return {}; } }") is None


def test_nested_script_matches_only_src_scripts() -> None:
    markup = '<script src="a.js"></script>\n<script>inline()</script>\n<script type="module" src=\'b.js\'>\n</script>'
    sources = [NESTED_SCRIPT.capture(match, "src") for match in NESTED_SCRIPT.iter(markup)]
    assert sources == ["a.js", "b.js"]


def test_inline_script_captures_body_with_or_without_attributes() -> None:
    markup = "<script>one();</script><script type=\"text/javascript\">\ntwo();\n</script>"
    bodies = [INLINE_SCRIPT.capture(match, "body") for match in INLINE_SCRIPT.iter(markup)]
    assert bodies == ["one();", "\ntwo();\n"]


def test_inline_script_empty_body_is_absent_capture() -> None:
    match = INLINE_SCRIPT.search("<script></script>")
    assert match is not None
    assert INLINE_SCRIPT.capture(match, "body") is None


@pytest.mark.parametrize(
    "markup",
    [
        '<dom-module id="x-el"><template>Body</template></dom-module>',
        '<dom-module strip-whitespace id="x-el"><template>Body</template></dom-module>',
        '<dom-module id="x-el" strip-whitespace>\n  <template strip-whitespace>\n    Body\n  </template>\n</dom-module>',
    ],
)
def test_template_block_tolerates_strip_whitespace(markup: str) -> None:
    match = TEMPLATE_BLOCK.search(markup)
    assert match is not None
    assert TEMPLATE_BLOCK.capture(match, "id") == "x-el"
    assert TEMPLATE_BLOCK.capture(match, "template") == "Body"


def test_template_block_keeps_nested_templates() -> None:
    markup = (
        '<dom-module id="x-list"><template>'
        '<template is="dom-repeat" items="[[items]]"><p>[[item]]</p></template>'
        "</template></dom-module>"
    )
    match = TEMPLATE_BLOCK.search(markup)
    assert match is not None
    assert TEMPLATE_BLOCK.capture(match, "template") == (
        '<template is="dom-repeat" items="[[items]]"><p>[[item]]</p></template>'
    )


def test_style_block_captures_include_list_and_css() -> None:
    match = STYLE_BLOCK.search('<style include="shared-styles  other-styles">body{color:red}</style>')
    assert match is not None
    assert STYLE_BLOCK.capture(match, "include") == "shared-styles  other-styles"
    assert STYLE_BLOCK.capture(match, "css") == "body{color:red}"


def test_style_block_include_is_optional() -> None:
    match = STYLE_BLOCK.search("<style>p{margin:0}</style>")
    assert match is not None
    assert STYLE_BLOCK.capture(match, "include") is None


def test_directive_comment_matches_standalone_lines_only() -> None:
    text = "// @ts-check\nconst a = 1; // @ts-check\n  //@ts-nocheck\n"
    matches = DIRECTIVE_COMMENT.find_all(text)
    assert [match.group(0) for match in matches] == ["// @ts-check\n", "  //@ts-nocheck\n"]


def test_capture_rejects_unknown_group() -> None:
    match = STYLE_BLOCK.search("<style>x</style>")
    assert match is not None
    with pytest.raises(KeyError):
        STYLE_BLOCK.capture(match, "href")
