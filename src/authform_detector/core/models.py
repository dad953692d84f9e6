"""Shared data structures used across detection stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from bs4.element import Tag

# Attribute name -> InputAttributes field name.
ENUMERATED_ATTRIBUTES: Tuple[Tuple[str, str], ...] = (
    ("name", "name"),
    ("id", "id"),
    ("placeholder", "placeholder"),
    ("type", "type"),
    ("class", "class_name"),
    ("aria-label", "aria_label"),
    ("aria-labelledby", "aria_labelledby"),
    ("autocomplete", "autocomplete"),
    ("role", "role"),
    ("data-testid", "data_testid"),
    ("data-cy", "data_cy"),
    ("data-test", "data_test"),
)

_ABSENT_VALUES = frozenset({"", "undefined"})
BUTTON_INPUT_TYPES = frozenset({"submit", "button", "reset", "image"})


def normalize_attribute(value: Any) -> Optional[str]:
    """Folds an attribute value to lowercase; absent-like values become ``None``."""

    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = " ".join(str(item) for item in value)
    normalized = str(value).strip().lower()
    if normalized in _ABSENT_VALUES:
        return None
    return normalized


@dataclass(frozen=True, slots=True)
class InputAttributes:
    """Case-folded view of the attributes the heuristics look at."""

    name: Optional[str] = None
    id: Optional[str] = None
    placeholder: Optional[str] = None
    type: Optional[str] = None
    class_name: Optional[str] = None
    aria_label: Optional[str] = None
    aria_labelledby: Optional[str] = None
    autocomplete: Optional[str] = None
    role: Optional[str] = None
    data_testid: Optional[str] = None
    data_cy: Optional[str] = None
    data_test: Optional[str] = None

    @classmethod
    def from_mapping(cls, attrs: Mapping[str, Any]) -> "InputAttributes":
        values = {
            field_name: normalize_attribute(attrs.get(attribute))
            for attribute, field_name in ENUMERATED_ATTRIBUTES
        }
        return cls(**values)

    @classmethod
    def from_element(cls, element: Tag) -> "InputAttributes":
        return cls.from_mapping(element.attrs or {})

    def values(self) -> Tuple[str, ...]:
        present = (getattr(self, field_name) for _, field_name in ENUMERATED_ATTRIBUTES)
        return tuple(value for value in present if value)

    @property
    def joined(self) -> str:
        return " ".join(self.values())

    @property
    def is_password(self) -> bool:
        return self.type == "password"

    @property
    def is_hidden(self) -> bool:
        return self.type == "hidden"

    @property
    def is_button(self) -> bool:
        return self.type in BUTTON_INPUT_TYPES


class ClassificationKind(str, Enum):
    PASSWORD = "password"
    KEYWORD = "keyword"
    CONTEXT = "context"
    NONE = "none"


# Highest priority first.
CLASSIFICATION_PRIORITY: Tuple[ClassificationKind, ...] = (
    ClassificationKind.PASSWORD,
    ClassificationKind.KEYWORD,
    ClassificationKind.CONTEXT,
)


@dataclass(frozen=True, slots=True)
class InputClassification:
    """Bucket for one input plus every signal that matched it."""

    kind: ClassificationKind = ClassificationKind.NONE
    reasons: Tuple[ClassificationKind, ...] = ()
    matched_keywords: Tuple[str, ...] = ()

    @classmethod
    def from_reasons(
        cls,
        reasons: Tuple[ClassificationKind, ...],
        matched_keywords: Tuple[str, ...] = (),
    ) -> "InputClassification":
        for candidate in CLASSIFICATION_PRIORITY:
            if candidate in reasons:
                return cls(kind=candidate, reasons=reasons, matched_keywords=matched_keywords)
        return cls(reasons=reasons, matched_keywords=matched_keywords)

    @property
    def is_candidate(self) -> bool:
        return self.kind is not ClassificationKind.NONE


@dataclass(frozen=True, slots=True)
class ScannedInput:
    """One input-like element together with its attributes and classification."""

    element: Tag = field(compare=False)
    attributes: InputAttributes
    classification: InputClassification
    index: int = 0

    @property
    def is_candidate(self) -> bool:
        return self.classification.is_candidate


@dataclass(slots=True)
class ContainerCandidate:
    """Ancestor considered as the bounding box of a credential-entry surface."""

    element: Tag
    has_email_username: bool = False
    has_password: bool = False
    input_count: int = 0
    score: int = 0
    fallback: bool = False

    @property
    def is_traditional_auth(self) -> bool:
        return self.has_email_username and self.has_password

    @property
    def is_multipart_auth(self) -> bool:
        return self.has_email_username and not self.has_password

    @property
    def is_form(self) -> bool:
        return (self.element.name or "").lower() == "form"

    @property
    def outer_html(self) -> str:
        return str(self.element)
