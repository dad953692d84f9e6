"""Report structures produced by the detector and the URL runner."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

DedupeKey = Tuple[Optional[str], Optional[str], Optional[str]]


def _drop_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class InputDescriptor:
    """Serializable projection of one input element."""

    selector: str
    name: Optional[str] = None
    id: Optional[str] = None
    placeholder: Optional[str] = None
    type: Optional[str] = None

    @property
    def dedupe_key(self) -> DedupeKey:
        return (self.id, self.name, self.type)

    @property
    def label(self) -> str:
        return self.name or self.id or self.type or "input"

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty(
            {
                "selector": self.selector,
                "name": self.name,
                "id": self.id,
                "placeholder": self.placeholder,
                "type": self.type,
            }
        )

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "InputDescriptor":
        return cls(
            selector=raw.get("selector", ""),
            name=raw.get("name"),
            id=raw.get("id"),
            placeholder=raw.get("placeholder"),
            type=raw.get("type"),
        )


def deduplicate_descriptors(descriptors: Iterable[InputDescriptor]) -> Tuple[InputDescriptor, ...]:
    """Keeps the first descriptor for each ``(id, name, type)`` triple."""

    unique: List[InputDescriptor] = []
    seen: set[DedupeKey] = set()
    for descriptor in descriptors:
        key = descriptor.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(descriptor)
    return tuple(unique)


@dataclass(frozen=True)
class AuthForm:
    """Outcome of one detection run.

    ``has_password_input`` keeps its historical name but means "a
    credential-entry surface was detected"; see ``auth_surface_detected``.
    """

    has_password_input: bool = False
    form_element: Optional[str] = None
    parent_element: Optional[str] = None
    input_count: int = 0
    password_inputs: Tuple[InputDescriptor, ...] = ()
    other_inputs: Tuple[InputDescriptor, ...] = ()

    @classmethod
    def empty(cls) -> "AuthForm":
        return cls()

    @property
    def auth_surface_detected(self) -> bool:
        return self.has_password_input

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasPasswordInput": self.has_password_input,
            "formElement": self.form_element,
            "parentElement": self.parent_element,
            "inputCount": self.input_count,
            "passwordInputs": [item.to_dict() for item in self.password_inputs],
            "otherInputs": [item.to_dict() for item in self.other_inputs],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    def save(self, path: Path) -> None:
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AuthForm":
        return cls(
            has_password_input=bool(raw.get("hasPasswordInput", False)),
            form_element=raw.get("formElement"),
            parent_element=raw.get("parentElement"),
            input_count=int(raw.get("inputCount", 0)),
            password_inputs=tuple(
                InputDescriptor.from_dict(item) for item in raw.get("passwordInputs", [])
            ),
            other_inputs=tuple(
                InputDescriptor.from_dict(item) for item in raw.get("otherInputs", [])
            ),
        )

    @classmethod
    def load(cls, path: Path) -> "AuthForm":
        return cls.from_dict(json.loads(path.read_text(encoding="utf-8")))


@dataclass(frozen=True)
class DetectionArtifact:
    """Detection result for a single URL or file, plus fetch metadata."""

    source: str
    auth_form: AuthForm
    summary: str
    formatted_markup: str = ""
    status: Optional[int] = None
    fetch_error: Optional[str] = None

    @property
    def detected(self) -> bool:
        return self.auth_form.has_password_input

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty(
            {
                "source": self.source,
                "status": self.status,
                "error": self.fetch_error,
                "summary": self.summary,
                "authForm": self.auth_form.to_dict(),
            }
        )


@dataclass
class BatchArtifact:
    """Container for a multi-URL run, in submission order."""

    artifacts: List[DetectionArtifact] = field(default_factory=list)

    @property
    def detected_sources(self) -> Tuple[str, ...]:
        return tuple(artifact.source for artifact in self.artifacts if artifact.detected)

    def to_json(self) -> str:
        return json.dumps({"results": [item.to_dict() for item in self.artifacts]}, indent=4)

    def save(self, path: Path) -> None:
        path.write_text(self.to_json(), encoding="utf-8")
