"""CSS selector extraction over a parsed document.

Produces one string per matched node, in document order: either the node's
flattened text (trimmed) or, in raw mode, its inner markup exactly as parsed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from bs4.element import (
    CData,
    NavigableString,
    RubyParenthesisString,
    RubyTextString,
    Script,
    Stylesheet,
    TemplateString,
)
from soupsieve import SelectorSyntaxError

from webselect.errors import SelectorError

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

log = structlog.get_logger()

# Every text node counts, including script and style bodies; comments do not.
_TEXT_TYPES = (
    NavigableString,
    CData,
    Script,
    Stylesheet,
    TemplateString,
    RubyTextString,
    RubyParenthesisString,
)


def extract_elements(doc: BeautifulSoup, selector: str, raw: bool) -> list[str]:
    """Return the text or inner markup of every node matching ``selector``.

    An empty selector short-circuits to ``[]`` without touching the document.
    Raises SelectorError when the selector cannot be parsed.
    """
    if selector == "":
        return []

    try:
        nodes = doc.select(selector)
    except SelectorSyntaxError as exc:
        raise SelectorError(f"Invalid selector {selector!r}: {exc}") from exc

    if raw:
        return [_inner_html(node) for node in nodes]
    return [node.get_text(types=_TEXT_TYPES).strip() for node in nodes]


def _inner_html(node: Tag) -> str:
    """Serialize the children of ``node``; a node that fails yields ``""``."""
    try:
        return node.decode_contents()
    except Exception:
        log.warning("inner_html_failed", node=node.name, exc_info=True)
        return ""
