"""Apply the rewrite engine across a tree and write results to disk."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import RewriteOptions, load_config
from .converter import ConversionResult, Converter
from .errors import ConversionError, FailureReason
from .logging import get_logger
from .scanner import ComponentScanner, FilePair, companion_html


@dataclass
class PairOutcome:
    """Result of processing one file pair."""

    pair: FilePair
    result: ConversionResult
    diff: str = ""
    written: bool = False

    @property
    def ok(self) -> bool:
        return self.result.ok


@dataclass
class MigrationReport:
    """Summary of a migration run."""

    root: Path
    dry_run: bool
    outcomes: List[PairOutcome] = field(default_factory=list)

    @property
    def converted(self) -> List[PairOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> List[PairOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def success(self) -> bool:
        return not self.failed


class Migrator:
    """Coordinates scanning, conversion and the overwrite/delete sink."""

    def __init__(
        self,
        converter: Converter | None = None,
        scanner: ComponentScanner | None = None,
        *,
        library_segment: str | None = None,
    ) -> None:
        self._converter = converter
        self._scanner = scanner
        self._library_segment = library_segment
        self.logger = get_logger("migrator")

    def run(self, path: str | Path, *, dry_run: bool = False) -> MigrationReport:
        """Convert every pair under ``path`` (a directory or a single ``.js``/``.html`` file)."""
        target = Path(path).expanduser().resolve()
        if not target.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        config = load_config(target if target.is_dir() else target.parent)
        converter = self._resolve_converter(config.rewrite)
        report = MigrationReport(root=target, dry_run=dry_run)

        if target.is_dir():
            scanner = self._scanner or ComponentScanner(config.exclude_paths)
            pairs = scanner.scan(target)
            self.logger.info("Found %d component(s) under %s", len(pairs), target)
        else:
            pair = self._pair_for_file(target)
            if pair is None:
                error = ConversionError(FailureReason.MISSING_COMPANION_FILE, str(companion_html(target)))
                self.logger.warning("%s: %s", target, error)
                missing = FilePair(html_path=companion_html(target), js_path=target)
                report.outcomes.append(PairOutcome(pair=missing, result=ConversionResult.failed(error)))
                return report
            pairs = [pair]

        for pair in pairs:
            report.outcomes.append(self.process(pair, converter, dry_run=dry_run))

        self.logger.info(
            "Converted %d of %d component(s)%s",
            len(report.converted),
            len(report.outcomes),
            " (dry-run)" if dry_run else "",
        )
        return report

    def process(self, pair: FilePair, converter: Converter, *, dry_run: bool = False) -> PairOutcome:
        """Convert one pair; files are only touched after a complete transform."""
        self.logger.debug("Parsing %s", pair.target_path)
        try:
            html_text = pair.html_path.read_text(encoding="utf-8")
            js_text = pair.js_path.read_text(encoding="utf-8") if pair.js_path else None
        except FileNotFoundError as exc:
            self.logger.error("Unable to read %s: %s", pair.target_path, exc)
            error = ConversionError(FailureReason.MISSING_COMPANION_FILE, str(exc))
            return PairOutcome(pair=pair, result=ConversionResult.failed(error))
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("Unable to read %s: %s", pair.target_path, exc)
            error = ConversionError(FailureReason.MISSING_JS_CONTENT, str(exc))
            return PairOutcome(pair=pair, result=ConversionResult.failed(error))

        result = converter.convert(js_text, html_text, pair.js_filename)
        if not result.ok or result.text is None:
            self.logger.warning("%s: %s", pair.target_path, result.message)
            return PairOutcome(pair=pair, result=result)

        diff = _unified_diff(pair.target_path, js_text or "", result.text)
        outcome = PairOutcome(pair=pair, result=result, diff=diff)
        if dry_run:
            self.logger.info("Would convert %s (%s)", pair.target_path, result.output.identity)
            return outcome

        try:
            pair.target_path.write_text(result.text, encoding="utf-8")
            outcome.written = True
            pair.html_path.unlink()
        except OSError as exc:
            self.logger.error("Unable to write %s: %s", pair.target_path, exc)
            error = ConversionError(FailureReason.WRITE_FAILED, str(exc))
            return PairOutcome(
                pair=pair,
                result=ConversionResult.failed(error),
                diff=diff,
                written=outcome.written,
            )
        self.logger.info("Converted %s (%s)", pair.target_path, result.output.identity)
        return outcome

    def _resolve_converter(self, options: RewriteOptions) -> Converter:
        if self._converter is not None:
            return self._converter
        return Converter(options.with_library_segment(self._library_segment))

    @staticmethod
    def _pair_for_file(path: Path) -> Optional[FilePair]:
        if path.suffix.lower() == ".html":
            js_path = path.with_suffix(".js")
            return FilePair(html_path=path, js_path=js_path if js_path.exists() else None)
        html_path = companion_html(path)
        if not html_path.exists():
            return None
        return FilePair(html_path=html_path, js_path=path)


def _unified_diff(path: Path, before: str, after: str) -> str:
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{path.name}",
            tofile=f"b/{path.name}",
        )
    )


__all__ = ["MigrationReport", "Migrator", "PairOutcome"]
