"""Textual and button evidence that an input belongs to an auth surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from bs4.element import Tag

from .loader import Document
from .policy import DetectionPolicy

CONTROL_TAGS = ["button", "a", "input"]


@dataclass(frozen=True, slots=True)
class AuthContextEvidence:
    text: bool = False
    button: bool = False

    def satisfies(self, policy: DetectionPolicy) -> bool:
        if policy.require_text_and_button:
            return self.text and self.button
        return self.text or self.button


def _contains_any(haystack: str, phrases: Sequence[str]) -> bool:
    return bool(haystack) and any(phrase in haystack for phrase in phrases)


def _control_text(control: Tag) -> str:
    if control.name == "input":
        return (Document.attribute(control, "value") or "").lower()
    return Document.text_of(control)


def _nearby_controls(element: Tag, scopes: Iterable[Optional[Tag]]) -> List[Tag]:
    controls: List[Tag] = []
    seen: set[int] = {id(element)}
    for scope in scopes:
        if scope is None:
            continue
        for control in scope.find_all(CONTROL_TAGS):
            if control.name == "input" and Document.input_type(control) != "submit":
                continue
            if id(control) in seen:
                continue
            seen.add(id(control))
            controls.append(control)
    return controls


def collect_auth_context(element: Tag, policy: DetectionPolicy) -> AuthContextEvidence:
    """Looks only at the immediate parent and the closest enclosing form."""

    parent = element.parent
    form = Document.closest(element, "form")

    parent_text = Document.text_of(parent)
    form_text = Document.text_of(form)
    has_text = _contains_any(parent_text, policy.context_phrases) or _contains_any(
        form_text, policy.context_phrases
    )

    button_text = " ".join(_control_text(control) for control in _nearby_controls(element, (parent, form)))
    has_button = _contains_any(button_text, policy.button_phrases)

    return AuthContextEvidence(text=has_text, button=has_button)


def has_auth_context(element: Tag, policy: DetectionPolicy) -> bool:
    return collect_auth_context(element, policy).satisfies(policy)
