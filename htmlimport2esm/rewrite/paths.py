"""Rewrite harvested HTML-import and script paths into module imports."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from ..config import RewriteOptions
from ..logging import get_logger
from ..models import ImportReference, ModuleImport
from .template import camel_case

FRAMEWORK_MODULE = "polymer/polymer-element.js"
FRAMEWORK_BINDINGS = "PolymerElement, html"

logger = get_logger("rewrite.paths")


def with_relative_prefix(path: str) -> str:
    """Prefix ``./`` unless the path already starts with ``.`` or ``/``."""
    if path.startswith((".", "/")):
        return path
    return f"./{path}"


def _filename(path: str) -> str:
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def _stem(path: str) -> str:
    name = _filename(path)
    return name.rsplit(".", 1)[0] if "." in name else name


class PathRewriter:
    """Applies deprecation filtering, library relocation and relative prefixing."""

    def __init__(self, options: RewriteOptions | None = None) -> None:
        self.options = options or RewriteOptions()
        self._deprecated = {name.lower() for name in self.options.deprecated_imports}
        segment = re.escape(self.options.library_segment)
        self._segment_pattern = re.compile(rf"(?:^|/){segment}/")
        prefixes = "|".join(re.escape(prefix) for prefix in self.options.relocated_prefixes)
        self._relocation_pattern = (
            re.compile(rf"((?:^|/){segment}/)(?=(?:{prefixes}))") if prefixes else None
        )

    def is_deprecated(self, href: str) -> bool:
        return _filename(href).lower() in self._deprecated

    def is_style_include(self, href: str, style_includes: Iterable[str]) -> bool:
        return _stem(re.sub(r"\.html$", "", href, flags=re.IGNORECASE)) in set(style_includes)

    def tag(self, references: Iterable[ImportReference], style_includes: Iterable[str] = ()) -> None:
        """Mark each harvested reference as deprecated and/or a style include."""
        includes = list(style_includes)
        for reference in references:
            reference.deprecated = self.is_deprecated(reference.href)
            reference.style_include = self.is_style_include(reference.href, includes)

    def rewrite_import(self, href: str, style_includes: Iterable[str] = ()) -> Optional[ModuleImport]:
        """Return the module import for ``href``, or ``None`` when it is deprecated."""
        reference = ImportReference(href=href)
        self.tag([reference], style_includes)
        return self.rewrite_reference(reference)

    def rewrite_reference(self, reference: ImportReference) -> Optional[ModuleImport]:
        """Rewrite an already tagged reference."""
        if reference.deprecated:
            logger.debug("Dropping deprecated import %s", reference.href)
            return None

        path = re.sub(r"\.html$", ".js", reference.href, flags=re.IGNORECASE)
        if reference.style_include:
            return ModuleImport(path=with_relative_prefix(path), binding=camel_case(_stem(path)))
        return ModuleImport(path=with_relative_prefix(self.relocate(path)))

    def relocate(self, path: str) -> str:
        """Nest known sub-namespaces under the registry namespace."""
        if self._relocation_pattern is None:
            return path
        return self._relocation_pattern.sub(
            lambda match: f"{match.group(1)}{self.options.relocation_namespace}/",
            path,
            count=1,
        )

    def rewrite_script(self, src: str) -> ModuleImport:
        return ModuleImport(path=with_relative_prefix(src))

    def rewrite_all(
        self,
        references: Sequence[ImportReference],
        scripts: Sequence[str],
        style_includes: Iterable[str] = (),
    ) -> list[ModuleImport]:
        """Tag ``references`` in place, then rewrite them followed by ``scripts``."""
        self.tag(references, style_includes)
        imports = [self.rewrite_reference(reference) for reference in references]
        rewritten = [item for item in imports if item is not None]
        rewritten.extend(self.rewrite_script(src) for src in scripts)
        return rewritten

    def library_root(self, hrefs: Sequence[str]) -> str:
        """Root of the shared library, e.g. ``../../lib/`` for ``../../lib/polymer/x.html``.

        Without a configured segment in any href this is a guess of two levels
        up, not a resolved location.
        """
        for href in hrefs:
            match = self._segment_pattern.search(href)
            if match is not None:
                return href[: match.end()]
        fallback = "../" * self.options.fallback_depth + f"{self.options.library_segment}/"
        logger.debug("No %s/ segment in imports; assuming %s", self.options.library_segment, fallback)
        return fallback

    def framework_path(self, root: str) -> str:
        module = f"{root}{self.options.relocation_namespace}/{FRAMEWORK_MODULE}"
        return with_relative_prefix(module)


__all__ = ["FRAMEWORK_BINDINGS", "FRAMEWORK_MODULE", "PathRewriter", "with_relative_prefix"]
