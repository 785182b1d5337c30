"""Engine entry point: rewrite one component source pair into a module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import RewriteOptions
from .errors import ConversionError, FailureReason, describe
from .logging import get_logger
from .models import ComponentSource, HarvestResult, RewrittenOutput
from .rewrite import (
    Assembler,
    PathRewriter,
    extract_template,
    harvest_dependencies,
    has_identity,
    resolve_identity,
)


@dataclass
class ConversionResult:
    """Outcome of a single conversion: either output text or a failure reason."""

    output: Optional[RewrittenOutput] = None
    reason: Optional[FailureReason] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.output is not None

    @property
    def text(self) -> Optional[str]:
        return self.output.text if self.output else None

    @property
    def message(self) -> str:
        if self.reason is None:
            return "converted"
        message = describe(self.reason)
        return f"{message}: {self.detail}" if self.detail else message

    @classmethod
    def failed(cls, error: ConversionError) -> "ConversionResult":
        return cls(reason=error.reason, detail=error.detail)


class Converter:
    """Runs identity resolution, harvesting, extraction, path rewriting and assembly."""

    def __init__(
        self,
        options: RewriteOptions | None = None,
        *,
        assembler: Assembler | None = None,
    ) -> None:
        self.options = options or RewriteOptions()
        self.rewriter = PathRewriter(self.options)
        self.assembler = assembler or Assembler(self.options.templates_dir)
        self.logger = get_logger("converter")

    def convert(
        self,
        js_text: Optional[str],
        html_text: str,
        js_filename: str = "",
    ) -> ConversionResult:
        """Rewrite a pair; ``js_text=None`` takes the class from an inline script.

        Never raises for input that simply fails to match; the failure is
        returned on the result instead.
        """
        try:
            output = self.rewrite(js_text, html_text, js_filename)
        except ConversionError as exc:
            self.logger.debug("Conversion of %s failed: %s", js_filename or "<input>", exc)
            return ConversionResult.failed(exc)
        return ConversionResult(output=output)

    def rewrite(
        self,
        js_text: Optional[str],
        html_text: str,
        js_filename: str = "",
    ) -> RewrittenOutput:
        """Like :meth:`convert` but raises :class:`ConversionError` on failure."""
        harvest = harvest_dependencies(html_text, js_filename)
        if js_text is None:
            component = self._component_from_inline(harvest)
        else:
            if not js_text.strip():
                raise ConversionError(FailureReason.MISSING_JS_CONTENT, js_filename or None)
            component = self._resolve(js_text)
        self.logger.debug("Component identity: %s", component.identity)

        template = extract_template(harvest.html, component.identity)

        imports = self.rewriter.rewrite_all(
            harvest.imports,
            harvest.script_paths,
            template.style_includes,
        )
        root = self.rewriter.library_root(harvest.import_paths)

        return self.assembler.assemble(
            component,
            template,
            framework_path=self.rewriter.framework_path(root),
            imports=imports,
            inline_scripts=harvest.inline_scripts,
        )

    def _resolve(self, js_text: str) -> ComponentSource:
        return resolve_identity(
            js_text,
            legacy_base=self.options.legacy_base_class,
            modern_base=self.options.modern_base_class,
        )

    def _component_from_inline(self, harvest: HarvestResult) -> ComponentSource:
        if not harvest.inline_scripts:
            raise ConversionError(FailureReason.MISSING_JS_CONTENT, "no inline <script> in HTML")
        for index, script in enumerate(harvest.inline_scripts):
            if has_identity(script):
                del harvest.inline_scripts[index]
                return self._resolve(script + "\n")
        # Surfaces the precise identity failure for the first script.
        return self._resolve(harvest.inline_scripts[0])


__all__ = ["ConversionResult", "Converter"]
