"""Extract the identity-matched template and its inline style."""

from __future__ import annotations

from typing import List

from ..errors import ConversionError, FailureReason
from ..logging import get_logger
from ..models import StyleBlock, TemplateBlock
from ..patterns import STYLE_BLOCK, TEMPLATE_BLOCK

logger = get_logger("rewrite.template")


def camel_case(name: str) -> str:
    """Convert ``shared-styles`` into the ``sharedStyles`` import binding."""
    segments = [segment for segment in name.split("-") if segment]
    if not segments:
        return ""
    head, *tail = segments
    return head.lower() + "".join(segment[:1].upper() + segment[1:] for segment in tail)


def extract_template(html: str, identity: str) -> TemplateBlock:
    """Return the template whose ``dom-module`` id equals ``identity``.

    The first id match decides the outcome: if its body is missing the
    extraction fails rather than looking further.
    """
    markup = None
    for match in TEMPLATE_BLOCK.iter(html):
        module_id = TEMPLATE_BLOCK.capture(match, "id")
        if module_id != identity:
            continue
        markup = TEMPLATE_BLOCK.capture(match, "template")
        if markup is None:
            raise ConversionError(FailureReason.TEMPLATE_BODY_MISSING, identity)
        break

    if markup is None:
        raise ConversionError(FailureReason.TEMPLATE_NOT_FOUND, identity)

    block = TemplateBlock(identity=identity, markup=markup)
    style_match = STYLE_BLOCK.search(markup)
    if style_match is None:
        logger.debug("Template for %s has no inline style", identity)
        return block

    include = STYLE_BLOCK.capture(style_match, "include") or ""
    css = style_match.group("css") or ""
    block.style = StyleBlock(includes=include.split(), css=css)
    block.style_preamble = build_style_preamble(block.style)
    block.markup = markup[: style_match.start()] + markup[style_match.end() :]
    logger.debug(
        "Lifted style from %s template (includes: %s)",
        identity,
        ", ".join(block.style.includes) or "none",
    )
    return block


def escape_literal(text: str) -> str:
    """Escape text for embedding in a JavaScript template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def build_style_preamble(style: StyleBlock) -> str:
    placeholders: List[str] = ["${" + camel_case(name) + "}" for name in style.includes]
    return "".join(placeholders) + f"<style>{escape_literal(style.css)}</style>"


__all__ = ["build_style_preamble", "camel_case", "escape_literal", "extract_template"]
