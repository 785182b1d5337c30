"""Parse-and-rewrite steps that turn a legacy component pair into a module."""

from __future__ import annotations

from .assembler import Assembler, template_accessor
from .harvest import harvest_dependencies, remove_spans
from .identity import has_identity, resolve_identity, strip_directives
from .paths import PathRewriter, with_relative_prefix
from .template import camel_case, escape_literal, extract_template

__all__ = [
    "Assembler",
    "PathRewriter",
    "camel_case",
    "escape_literal",
    "extract_template",
    "harvest_dependencies",
    "has_identity",
    "remove_spans",
    "resolve_identity",
    "strip_directives",
    "template_accessor",
    "with_relative_prefix",
]
