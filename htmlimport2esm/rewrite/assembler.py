"""Render the final module text from the extracted pieces."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from jinja2 import Environment, FileSystemLoader

from ..models import ComponentSource, ModuleImport, RewrittenOutput, TemplateBlock
from ..patterns import DIRECTIVE_LINE
from .paths import FRAMEWORK_BINDINGS
from .template import escape_literal

STYLE_CONSTANT = "styleTemplate"
MODULE_TEMPLATE = "module.js.j2"


class Assembler:
    """Builds the module body through the ``module.js.j2`` template."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def assemble(
        self,
        component: ComponentSource,
        template: TemplateBlock,
        *,
        framework_path: str,
        imports: Sequence[ModuleImport],
        inline_scripts: Sequence[str] = (),
    ) -> RewrittenOutput:
        text = self._env.get_template(MODULE_TEMPLATE).render(
            directive=DIRECTIVE_LINE,
            framework_bindings=FRAMEWORK_BINDINGS,
            framework_path=framework_path,
            import_statements=[item.statement for item in imports],
            inline_scripts=list(inline_scripts),
            style_constant=STYLE_CONSTANT,
            style_preamble=template.style_preamble,
            prefix=component.module_prefix,
            template_accessor=template_accessor(component.indent, template.markup),
            suffix=component.suffix,
        )
        return RewrittenOutput(identity=component.identity, text=text)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).resolve().parent.parent / "templates"))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )


def template_accessor(indent: str, markup: str) -> str:
    """Return the ``static get template()`` method for the given markup."""
    unit = "\t" if indent.startswith("\t") else "    "
    body = escape_literal(markup)
    return (
        f"\n\n{indent}static get template() {{\n"
        f"{indent}{unit}return html`${{{STYLE_CONSTANT}}}{body}`;\n"
        f"{indent}}}"
    )


__all__ = ["Assembler", "STYLE_CONSTANT", "template_accessor"]
