"""Enumerate legacy component file pairs under a directory tree."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "bower_components",
    "__pycache__",
    ".pytest_cache",
    ".idea",
}

_DOM_MODULE_MARKER = "<dom-module"


@dataclass
class FilePair:
    """A component's HTML file and, when present, its co-located JS file."""

    html_path: Path
    js_path: Optional[Path] = None

    @property
    def target_path(self) -> Path:
        """Where the rewritten module is written."""
        return self.js_path or self.html_path.with_suffix(".js")

    @property
    def js_filename(self) -> str:
        return self.target_path.name


def companion_html(js_path: Path) -> Path:
    return js_path.with_suffix(".html")


def _is_excluded(rel_path: str, patterns: Sequence[str]) -> bool:
    for pattern in patterns:
        normalized = pattern.rstrip("/")
        if fnmatchcase(rel_path, normalized) or rel_path.startswith(f"{normalized}/"):
            return True
        if "/" not in normalized and any(fnmatchcase(part, normalized) for part in rel_path.split("/")):
            return True
    return False


def _iter_files(root: Path, exclude_paths: Sequence[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
        kept = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_excluded(rel_path, exclude_paths):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _is_excluded(rel_path, exclude_paths):
                continue
            yield current_dir / filename


def _declares_dom_module(path: Path) -> bool:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False
    return _DOM_MODULE_MARKER in text.lower()


class ComponentScanner:
    """Walks a tree and pairs each ``.js`` file with its ``.html`` companion."""

    def __init__(self, exclude_paths: Sequence[str] | None = None) -> None:
        self.exclude_paths = list(exclude_paths or [])

    def scan(self, root: str | Path) -> List[FilePair]:
        """Return pairs where both files exist, plus standalone ``dom-module`` HTML files."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        files = list(_iter_files(root_path, self.exclude_paths))
        by_lower = {path.as_posix().lower(): path for path in files}

        pairs: List[FilePair] = []
        paired_html: set[str] = set()
        for path in files:
            if path.suffix.lower() != ".js":
                continue
            html = by_lower.get(companion_html(path).as_posix().lower())
            if html is None:
                continue
            pairs.append(FilePair(html_path=html, js_path=path))
            paired_html.add(html.as_posix().lower())

        for path in files:
            if path.suffix.lower() != ".html" or path.as_posix().lower() in paired_html:
                continue
            if by_lower.get(path.with_suffix(".js").as_posix().lower()) is not None:
                continue
            if _declares_dom_module(path):
                pairs.append(FilePair(html_path=path))

        pairs.sort(key=lambda pair: pair.target_path.as_posix())
        return pairs


__all__ = ["ComponentScanner", "FilePair", "companion_html"]
