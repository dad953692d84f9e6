"""Indentation-only reformatter for container markup."""

from __future__ import annotations

import re
from typing import List, Optional

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)
EMPTY_MARKUP_PLACEHOLDER = "No parent element found"

_BETWEEN_TAGS = re.compile(r">\s+<")
_TAG_SPLIT = re.compile(r"(<[^>]*>)")
_TAG_NAME = re.compile(r"<\s*([a-zA-Z][a-zA-Z0-9-]*)")


def _opens_block(tag: str) -> bool:
    if tag.startswith(("<!", "<?")) or tag.endswith("/>"):
        return False
    match = _TAG_NAME.match(tag)
    if not match:
        return False
    return match.group(1).lower() not in VOID_ELEMENTS


def format_markup(markup: Optional[str], indent_size: int = 2) -> str:
    """Puts one tag or text run per line, indenting nested elements.

    This is bracket matching, not parsing: malformed markup still gets
    best-effort output.
    """

    if not markup:
        return EMPTY_MARKUP_PLACEHOLDER

    collapsed = _BETWEEN_TAGS.sub("><", markup).strip()
    lines: List[str] = []
    level = 0

    for part in _TAG_SPLIT.split(collapsed):
        if part.startswith("</"):
            level = max(0, level - 1)
            lines.append(" " * (level * indent_size) + part)
        elif part.startswith("<"):
            lines.append(" " * (level * indent_size) + part)
            if _opens_block(part):
                level += 1
        elif part.strip():
            lines.append(" " * (level * indent_size) + part.strip())

    return "\n".join(lines).strip()
