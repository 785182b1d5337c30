"""Locate a component's declared identity inside its class source."""

from __future__ import annotations

from ..errors import ConversionError, FailureReason
from ..logging import get_logger
from ..models import ComponentSource
from ..patterns import DIRECTIVE_COMMENT, IDENTITY

LEGACY_BASE_CLASS = "Polymer.Element"
MODERN_BASE_CLASS = "PolymerElement"

logger = get_logger("rewrite.identity")


def resolve_identity(
    js_text: str,
    *,
    legacy_base: str = LEGACY_BASE_CLASS,
    modern_base: str = MODERN_BASE_CLASS,
) -> ComponentSource:
    """Split ``js_text`` around its ``static get is()`` accessor.

    Raises :class:`ConversionError` with ``MissingIdentity`` when no accessor
    exists and ``IdentityCaptureEmpty`` when the accessor returns something
    that is not a dash-separated component name.
    """
    match = IDENTITY.search(js_text)
    if match is None:
        raise ConversionError(FailureReason.MISSING_IDENTITY)

    identity = IDENTITY.capture(match, "is")
    if identity is None:
        raise ConversionError(
            FailureReason.IDENTITY_CAPTURE_EMPTY, match.group(0).strip()
        )

    source = ComponentSource(
        text=js_text,
        identity=identity,
        start=match.start(),
        end=match.end(),
    )
    prefix = strip_directives(source.prefix)
    if legacy_base:
        prefix = prefix.replace(legacy_base, modern_base)
    source.normalized_prefix = prefix
    logger.debug("Resolved identity %s at offset %d", identity, source.start)
    return source


def strip_directives(text: str) -> str:
    """Remove standalone type-check directive lines; applying twice is a no-op."""
    return DIRECTIVE_COMMENT.regex.sub("", text)


def has_identity(js_text: str) -> bool:
    match = IDENTITY.search(js_text)
    return match is not None and IDENTITY.capture(match, "is") is not None


__all__ = [
    "LEGACY_BASE_CLASS",
    "MODERN_BASE_CLASS",
    "has_identity",
    "resolve_identity",
    "strip_directives",
]
