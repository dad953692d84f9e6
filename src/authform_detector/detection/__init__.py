"""Heuristic detection of login and signup forms in raw HTML."""

from ..core.report import AuthForm, InputDescriptor
from .builder import form_summary
from .detector import debug_auth_detection, detect_auth_form, extract_form_context
from .formatting import format_markup
from .policy import DetectionPolicy, StrictnessMode

__all__ = [
    "AuthForm",
    "DetectionPolicy",
    "InputDescriptor",
    "StrictnessMode",
    "debug_auth_detection",
    "detect_auth_form",
    "extract_form_context",
    "form_summary",
    "format_markup",
]
