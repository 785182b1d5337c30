"""Named extraction patterns over legacy component markup and scripts.

Each rule is a single compiled expression with a documented capture contract.
Rules are independent: they run over a full buffer and yield every
non-overlapping match in document order. A match whose expected capture is
absent (or empty) is reported through :meth:`PatternRule.capture` returning
``None``, which callers treat differently from no match at all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

_FLAGS = re.IGNORECASE


@dataclass(frozen=True)
class PatternRule:
    """A named regular expression with a fixed set of named captures."""

    name: str
    regex: re.Pattern[str]
    captures: tuple[str, ...]

    def find_all(self, text: str) -> List[re.Match[str]]:
        return list(self.regex.finditer(text))

    def iter(self, text: str) -> Iterator[re.Match[str]]:
        return self.regex.finditer(text)

    def search(self, text: str) -> Optional[re.Match[str]]:
        return self.regex.search(text)

    def capture(self, match: re.Match[str], group: str) -> Optional[str]:
        """Return the named capture, or ``None`` when it is absent or empty."""
        if group not in self.captures:
            raise KeyError(f"{self.name} has no capture named '{group}'")
        value = match.group(group)
        if value is None or not value.strip():
            return None
        return value


# <link rel="import" href="...">; rel may be quoted or bare, attributes in any order.
# Captures: href
LINK_IMPORT = PatternRule(
    name="link-import",
    regex=re.compile(
        r"""<link\b(?=[^>]*?\brel\s*=\s*(?:"import"|'import'|import)(?=[\s/>]))"""
        r"""[^>]*?\bhref\s*=\s*(?P<quote>["']?)(?P<href>[^"'\s>]*)(?P=quote)[^>]*>""",
        _FLAGS,
    ),
    captures=("href",),
)

# static get is() { return 'word-word'; }
# Captures: is (absent when the literal has no dash, e.g. 'plain')
IDENTITY = PatternRule(
    name="identity",
    regex=re.compile(
        r"""static\s+get\s+is\s*\(\s*\)\s*\{\s*return\s*(?P<quote>["'])"""
        r"""(?:(?P<is>\w+(?:-\w+)+)|[^"']*)(?P=quote)\s*;*\s*\}""",
        _FLAGS | re.DOTALL,
    ),
    captures=("is",),
)

# <script src="..."></script>, body empty apart from whitespace.
# Captures: src
NESTED_SCRIPT = PatternRule(
    name="nested-script",
    regex=re.compile(
        r"""<script\b[^>]*?\bsrc\s*=\s*(?P<quote>["']?)(?P<src>[^"'\s>]*)(?P=quote)[^>]*>"""
        r"""\s*</script\s*>""",
        _FLAGS,
    ),
    captures=("src",),
)

# <script ...>body</script>, with or without attributes.
# Captures: body
INLINE_SCRIPT = PatternRule(
    name="inline-script",
    regex=re.compile(
        r"""<script\b[^>]*>(?P<body>.*?)</script\s*>""",
        _FLAGS | re.DOTALL,
    ),
    captures=("body",),
)

# <dom-module id="x"><template>...</template></dom-module>, strip-whitespace
# tolerated on either tag.
# Captures: id, template
TEMPLATE_BLOCK = PatternRule(
    name="template-block",
    regex=re.compile(
        r"""<dom-module\s+(?:strip-whitespace\s+)?id\s*=\s*(?P<quote>["'])(?P<id>[\w-]+)(?P=quote)"""
        r"""(?:\s+strip-whitespace)?\s*>\s*<template(?:\s+strip-whitespace)?\s*>\s*"""
        r"""(?P<template>.*?)\s*</template>\s*</dom-module>""",
        _FLAGS | re.DOTALL,
    ),
    captures=("id", "template"),
)

# <style include="a b">css</style>; include optional.
# Captures: include, css
STYLE_BLOCK = PatternRule(
    name="style-block",
    regex=re.compile(
        r"""<style(?:\s+include\s*=\s*(?P<quote>["'])(?P<include>[^"']*)(?P=quote))?\s*>"""
        r"""(?P<css>.*?)</style\s*>""",
        _FLAGS | re.DOTALL,
    ),
    captures=("include", "css"),
)

# A line holding only a // @ts-check or // @ts-nocheck comment, newline included.
DIRECTIVE_COMMENT = PatternRule(
    name="directive-comment",
    regex=re.compile(
        r"""^[ \t]*//[ \t]*@ts-(?:no)?check[ \t]*(?:\r?\n|\Z)""",
        re.MULTILINE,
    ),
    captures=(),
)

DIRECTIVE_LINE = "// @ts-check"


__all__ = [
    "DIRECTIVE_COMMENT",
    "DIRECTIVE_LINE",
    "IDENTITY",
    "INLINE_SCRIPT",
    "LINK_IMPORT",
    "NESTED_SCRIPT",
    "PatternRule",
    "STYLE_BLOCK",
    "TEMPLATE_BLOCK",
]
