"""Core data models shared across the rewrite engine."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ComponentSource:
    """Component class text split around its identity declaration."""

    text: str
    identity: str
    start: int
    end: int
    normalized_prefix: Optional[str] = None

    @property
    def before(self) -> str:
        return self.text[: self.start]

    @property
    def declaration(self) -> str:
        return self.text[self.start : self.end]

    @property
    def after(self) -> str:
        return self.text[self.end :]

    @property
    def prefix(self) -> str:
        """Everything up to and including the identity accessor."""
        return self.before + self.declaration

    @property
    def module_prefix(self) -> str:
        """Prefix as it should appear in the rewritten module."""
        if self.normalized_prefix is not None:
            return self.normalized_prefix
        return self.prefix

    @property
    def suffix(self) -> str:
        return self.after

    @property
    def indent(self) -> str:
        """Leading whitespace of the line holding the identity accessor."""
        line_start = self.text.rfind("\n", 0, self.start) + 1
        line = self.text[line_start : self.start]
        return line[: len(line) - len(line.lstrip(" \t"))]


@dataclass
class ImportReference:
    """Link-import href harvested from markup."""

    href: str
    deprecated: bool = False
    style_include: bool = False


@dataclass
class ScriptReference:
    """Nested script src harvested from markup."""

    src: str


@dataclass
class StyleBlock:
    """Inline style element lifted out of a template."""

    includes: List[str]
    css: str


@dataclass
class TemplateBlock:
    """Template markup whose wrapper id matched the component identity."""

    identity: str
    markup: str
    style: Optional[StyleBlock] = None
    style_preamble: str = ""

    @property
    def style_includes(self) -> List[str]:
        return list(self.style.includes) if self.style else []


@dataclass
class HarvestResult:
    """Dependencies collected from markup plus the stripped working buffer."""

    imports: List[ImportReference] = field(default_factory=list)
    scripts: List[ScriptReference] = field(default_factory=list)
    inline_scripts: List[str] = field(default_factory=list)
    html: str = ""

    @property
    def import_paths(self) -> List[str]:
        return [reference.href for reference in self.imports]

    @property
    def script_paths(self) -> List[str]:
        return [reference.src for reference in self.scripts]


@dataclass(frozen=True)
class ModuleImport:
    """A rewritten module import statement."""

    path: str
    binding: Optional[str] = None

    @property
    def statement(self) -> str:
        if self.binding:
            return f"import {{ {self.binding} }} from '{self.path}';"
        return f"import '{self.path}';"


@dataclass
class RewrittenOutput:
    """Final module text, produced only after every extraction succeeded."""

    identity: str
    text: str
