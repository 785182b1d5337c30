"""Failure taxonomy for component rewrites."""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    """Recoverable, per-file reasons a rewrite could not complete."""

    MISSING_IDENTITY = "MissingIdentity"
    IDENTITY_CAPTURE_EMPTY = "IdentityCaptureEmpty"
    MISSING_JS_CONTENT = "MissingJSContent"
    TEMPLATE_NOT_FOUND = "TemplateNotFound"
    TEMPLATE_BODY_MISSING = "TemplateBodyMissing"
    MISSING_COMPANION_FILE = "MissingCompanionFile"
    WRITE_FAILED = "WriteFailed"


_DESCRIPTIONS: dict[FailureReason, str] = {
    FailureReason.MISSING_IDENTITY: "no identity declared",
    FailureReason.IDENTITY_CAPTURE_EMPTY: "identity token not extracted",
    FailureReason.MISSING_JS_CONTENT: "no component script content",
    FailureReason.TEMPLATE_NOT_FOUND: "no template found for identity",
    FailureReason.TEMPLATE_BODY_MISSING: "template id matched but body missing",
    FailureReason.MISSING_COMPANION_FILE: "companion file not found",
    FailureReason.WRITE_FAILED: "converted module could not be written",
}


def describe(reason: FailureReason) -> str:
    """Return the human readable diagnosis for a failure reason."""
    return _DESCRIPTIONS[reason]


class ConversionError(RuntimeError):
    """Raised by an extraction step when a file pair cannot be rewritten."""

    def __init__(self, reason: FailureReason, detail: str | None = None) -> None:
        message = describe(reason)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.reason = reason
        self.detail = detail


__all__ = ["ConversionError", "FailureReason", "describe"]
