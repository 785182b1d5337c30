"""Collect link imports and scripts from a component's HTML companion."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..logging import get_logger
from ..models import HarvestResult, ImportReference, ScriptReference
from ..patterns import INLINE_SCRIPT, LINK_IMPORT, NESTED_SCRIPT

logger = get_logger("rewrite.harvest")

Span = Tuple[int, int]


def remove_spans(text: str, spans: Iterable[Span]) -> str:
    """Cut non-overlapping ``(start, end)`` spans, given in original offsets.

    Spans are applied left to right. Each cut shortens the buffer, so every
    later span is shifted back by the total length removed so far.
    """
    removed = 0
    previous_end = 0
    for start, end in sorted(spans):
        if end < start:
            raise ValueError(f"Invalid span ({start}, {end})")
        if start < previous_end:
            raise ValueError(f"Span ({start}, {end}) overlaps a previous span")
        text = text[: start - removed] + text[end - removed :]
        removed += end - start
        previous_end = end
    return text


def harvest_dependencies(html_text: str, js_filename: str = "") -> HarvestResult:
    """Harvest imports and scripts, returning the script-free working buffer."""
    result = HarvestResult()

    for match in LINK_IMPORT.iter(html_text):
        href = LINK_IMPORT.capture(match, "href")
        if href is None:
            logger.debug("Link import without href skipped: %s", match.group(0))
            continue
        result.imports.append(ImportReference(href=href))

    own_name = js_filename.lower()
    spans: List[Span] = []
    for match in NESTED_SCRIPT.iter(html_text):
        spans.append(match.span())
        src = NESTED_SCRIPT.capture(match, "src")
        if src is None:
            continue
        if own_name and src.lower() == own_name:
            logger.debug("Skipping self-referencing script %s", src)
            continue
        result.scripts.append(ScriptReference(src=src))
    html = remove_spans(html_text, spans)

    spans = []
    for match in INLINE_SCRIPT.iter(html):
        spans.append(match.span())
        body = INLINE_SCRIPT.capture(match, "body")
        if body is not None:
            result.inline_scripts.append(_dedent_block(body))
    result.html = remove_spans(html, spans)

    logger.debug(
        "Harvested %d import(s), %d script(s), %d inline script(s)",
        len(result.imports),
        len(result.scripts),
        len(result.inline_scripts),
    )
    return result


def _dedent_block(body: str) -> str:
    lines = body.strip("\n").splitlines()
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    margin = min(indents) if indents else 0
    return "\n".join(line[margin:] for line in lines).rstrip()


__all__ = ["harvest_dependencies", "remove_spans"]
