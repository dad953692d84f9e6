"""Loader -> scanner -> locator -> builder pipeline."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Union

from ..core.report import AuthForm
from .builder import build_report
from .context import collect_auth_context
from .loader import Document, load_document
from .locator import locate_container
from .policy import DetectionPolicy, StrictnessMode, resolve_policy
from .scanner import InputScanner

logger = logging.getLogger(__name__)

PolicyLike = Union[DetectionPolicy, StrictnessMode, str, None]


def detect_auth_form(html: Union[str, bytes, None], mode: PolicyLike = None) -> AuthForm:
    """Returns the detected auth surface, or ``AuthForm.empty()``.

    Never raises for any markup. ``mode`` must be a known strictness mode;
    an unknown mode name is the only input rejected with ``ValueError``.
    """

    policy = resolve_policy(mode)
    try:
        return _run_pipeline(load_document(html), policy)
    except Exception:
        logger.exception("Auth form detection failed; reporting no form")
        return AuthForm.empty()


def _run_pipeline(document: Document, policy: DetectionPolicy) -> AuthForm:
    if document.is_empty:
        return AuthForm.empty()

    candidates = InputScanner(policy).scan(document)
    if not candidates:
        return AuthForm.empty()

    container = locate_container(candidates[0], policy)
    return build_report(candidates, container)


def extract_form_context(html: Union[str, bytes, None], auth_form: AuthForm) -> str:
    """Inner markup of the container's parent: its siblings and surroundings."""

    if not auth_form.parent_element:
        return ""

    try:
        document = load_document(html)
        container = document.find_equivalent(auth_form.parent_element)
        if container is None or container.parent is None:
            return ""
        return container.parent.decode_contents()
    except Exception:
        logger.debug("Unable to extract form context", exc_info=True)
        return ""


def debug_auth_detection(html: Union[str, bytes, None], mode: PolicyLike = None) -> Dict[str, Any]:
    """Per-input breakdown of every signal, for diagnosing detections."""

    policy = resolve_policy(mode)
    document = load_document(html)
    details: List[Dict[str, Any]] = []
    password_inputs: List[Dict[str, Any]] = []
    potential_auth_inputs: List[Dict[str, Any]] = []

    for item in InputScanner(policy).scan_all(document):
        attributes = item.attributes
        evidence = collect_auth_context(item.element, policy)
        entry = {
            "index": item.index,
            "type": attributes.type,
            "name": attributes.name,
            "id": attributes.id,
            "placeholder": attributes.placeholder,
            "class": attributes.class_name,
            "autocomplete": attributes.autocomplete,
            "classification": item.classification.kind.value,
            "reasons": [reason.value for reason in item.classification.reasons],
            "matched_keywords": list(item.classification.matched_keywords),
            "context_text": evidence.text,
            "context_button": evidence.button,
        }
        details.append(entry)
        if attributes.is_password:
            password_inputs.append(entry)
        elif item.is_candidate:
            potential_auth_inputs.append(entry)

    return {
        "mode": policy.mode.value,
        "totalInputs": len(details),
        "passwordInputs": password_inputs,
        "potentialAuthInputs": potential_auth_inputs,
        "allInputDetails": details,
    }
