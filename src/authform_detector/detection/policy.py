"""Strictness presets shared by every detection stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

DEFAULT_MAX_DEPTH = 10
TRADITIONAL_AUTH_BONUS = 100

PASSWORD_KEYWORDS: Tuple[str, ...] = ("password", "pass", "passwd", "pwd")
IDENTITY_KEYWORDS: Tuple[str, ...] = ("email", "username", "user")
STRONG_INPUT_KEYWORDS: Tuple[str, ...] = (
    "email",
    "username",
    "user",
    "login",
    "signin",
    "sign-in",
)
GENERIC_AUTH_KEYWORDS: Tuple[str, ...] = ("auth", "credential")

AUTH_TEXT_PHRASES: Tuple[str, ...] = (
    "sign in",
    "signin",
    "log in",
    "login",
    "log in to",
    "enter your password",
    "forgot password",
    "reset password",
    "create account",
    "sign up",
    "register",
)
AUTH_BUTTON_PHRASES: Tuple[str, ...] = (
    "sign in",
    "signin",
    "log in",
    "login",
    "sign up",
    "register",
)


class StrictnessMode(str, Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"

    @classmethod
    def parse(cls, value: Union["StrictnessMode", str]) -> "StrictnessMode":
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown strictness mode: {value!r}")


@dataclass(frozen=True)
class DetectionPolicy:
    """Knobs controlling how much evidence each stage requires.

    ``require_keyword_and_context`` and ``require_text_and_button`` tighten the
    scanner and the context heuristic; ``allow_multipart`` lets the container
    locator accept an email/username block with no password field.
    """

    mode: StrictnessMode
    input_keywords: Tuple[str, ...]
    context_phrases: Tuple[str, ...] = AUTH_TEXT_PHRASES
    button_phrases: Tuple[str, ...] = AUTH_BUTTON_PHRASES
    identity_keywords: Tuple[str, ...] = IDENTITY_KEYWORDS
    require_keyword_and_context: bool = False
    require_text_and_button: bool = False
    allow_multipart: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    traditional_bonus: int = TRADITIONAL_AUTH_BONUS
    include_aria_textboxes: bool = False

    @property
    def is_strict(self) -> bool:
        return self.mode is StrictnessMode.STRICT

    def matching_keywords(self, haystack: str) -> Tuple[str, ...]:
        return tuple(keyword for keyword in self.input_keywords if keyword in haystack)

    @classmethod
    def for_mode(cls, mode: Union[StrictnessMode, str]) -> "DetectionPolicy":
        resolved = StrictnessMode.parse(mode)
        if resolved is StrictnessMode.STRICT:
            return STRICT_POLICY
        return PERMISSIVE_POLICY


PERMISSIVE_POLICY = DetectionPolicy(
    mode=StrictnessMode.PERMISSIVE,
    input_keywords=PASSWORD_KEYWORDS + STRONG_INPUT_KEYWORDS + GENERIC_AUTH_KEYWORDS,
)

STRICT_POLICY = DetectionPolicy(
    mode=StrictnessMode.STRICT,
    input_keywords=STRONG_INPUT_KEYWORDS,
    require_keyword_and_context=True,
    require_text_and_button=True,
    allow_multipart=False,
)


def resolve_policy(value: Union[DetectionPolicy, StrictnessMode, str, None]) -> DetectionPolicy:
    """Accepts a policy, a mode or a mode name and returns a policy."""

    if isinstance(value, DetectionPolicy):
        return value
    if value is None:
        return PERMISSIVE_POLICY
    return DetectionPolicy.for_mode(value)
