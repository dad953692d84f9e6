"""Parses raw markup into a read-only, queryable document handle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

logger = logging.getLogger(__name__)

PARSER = "html.parser"
ARIA_INPUT_ROLES = frozenset({"textbox", "password"})
TOP_LEVEL_TAGS = frozenset({"body", "html", "head"})


def _empty_soup() -> BeautifulSoup:
    return BeautifulSoup("", PARSER)


@dataclass(frozen=True)
class Document:
    """Wraps a parsed tree; every stage receives it explicitly."""

    soup: BeautifulSoup

    @property
    def is_empty(self) -> bool:
        return self.soup.find(True) is None

    # ------------------------------------------------------------------
    # Document-wide queries
    # ------------------------------------------------------------------
    def inputs(self, *, include_aria: bool = False) -> List[Tag]:
        """Input-capable elements in document order."""

        if not include_aria:
            return self.soup.find_all("input")
        return self.soup.find_all(self._is_input_like)

    def find_equivalent(self, markup: str) -> Optional[Tag]:
        """Returns the first element whose serialization equals ``markup``."""

        for element in self.soup.find_all(True):
            if str(element) == markup:
                return element
        return None

    # ------------------------------------------------------------------
    # Element helpers
    # ------------------------------------------------------------------
    @staticmethod
    def tag_name(element: Optional[Tag]) -> str:
        if element is None or isinstance(element, BeautifulSoup):
            return ""
        return (element.name or "").lower()

    @staticmethod
    def attribute(element: Tag, name: str) -> Optional[str]:
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    @classmethod
    def input_type(cls, element: Tag) -> str:
        return (cls.attribute(element, "type") or "").strip().lower()

    @classmethod
    def parent_of(cls, element: Tag) -> Optional[Tag]:
        """Parent element, or ``None`` once the walk leaves the element tree."""

        parent = element.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return parent

    @staticmethod
    def closest(element: Tag, name: str) -> Optional[Tag]:
        return element.find_parent(name)

    @classmethod
    def descendant_inputs(cls, element: Tag) -> List[Tag]:
        return element.find_all("input")

    @classmethod
    def visible_input_count(cls, element: Tag) -> int:
        return sum(1 for item in cls.descendant_inputs(element) if cls.input_type(item) != "hidden")

    @staticmethod
    def text_of(element: Optional[Tag]) -> str:
        """Lower-cased text content with whitespace collapsed."""

        if element is None:
            return ""
        return " ".join(element.get_text(" ").split()).lower()

    @staticmethod
    def outer_html(element: Tag) -> str:
        return str(element)

    @staticmethod
    def is_top_level(element: Tag) -> bool:
        return isinstance(element, BeautifulSoup) or (element.name or "").lower() in TOP_LEVEL_TAGS

    @staticmethod
    def _is_input_like(element: Tag) -> bool:
        if element.name == "input":
            return True
        role = (element.get("role") or "")
        if isinstance(role, list):
            role = " ".join(role)
        return role.strip().lower() in ARIA_INPUT_ROLES


def load_document(html: Union[str, bytes, None]) -> Document:
    """Builds a :class:`Document`; failures degrade to an empty tree."""

    if html is None:
        return Document(_empty_soup())

    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    elif not isinstance(html, str):
        logger.debug("Ignoring non-text markup of type %s", type(html).__name__)
        return Document(_empty_soup())

    try:
        soup = BeautifulSoup(html, PARSER)
    except Exception:
        logger.debug("Markup could not be parsed; using an empty document", exc_info=True)
        soup = _empty_soup()

    return Document(soup)


def iter_ancestors(element: Tag, max_depth: int) -> Iterable[Tag]:
    """Yields parents outward, stopping before body/html/head or the root."""

    current = Document.parent_of(element)
    depth = 0
    while current is not None and depth < max_depth:
        if Document.is_top_level(current):
            break
        yield current
        current = Document.parent_of(current)
        depth += 1
