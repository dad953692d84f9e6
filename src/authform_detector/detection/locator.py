"""Chooses the ancestor that best bounds a credential-entry surface."""

from __future__ import annotations

import logging
from typing import Optional

from bs4.element import Tag

from ..core.models import ContainerCandidate, ScannedInput
from .loader import Document, iter_ancestors
from .policy import DetectionPolicy

logger = logging.getLogger(__name__)

IDENTITY_ATTRIBUTES = ("name", "id", "placeholder", "class")


def is_email_username_input(element: Tag, policy: DetectionPolicy) -> bool:
    input_type = Document.input_type(element) or "text"
    if input_type == "email":
        return True
    if input_type != "text":
        return False
    for attribute in IDENTITY_ATTRIBUTES:
        value = (Document.attribute(element, attribute) or "").lower()
        if any(keyword in value for keyword in policy.identity_keywords):
            return True
    return False


def evaluate_ancestor(ancestor: Tag, policy: DetectionPolicy) -> Optional[ContainerCandidate]:
    """Scores ``ancestor``; returns ``None`` when it is not eligible."""

    inputs = Document.descendant_inputs(ancestor)
    has_email_username = any(is_email_username_input(item, policy) for item in inputs)
    has_password = any(Document.input_type(item) == "password" for item in inputs)

    candidate = ContainerCandidate(
        element=ancestor,
        has_email_username=has_email_username,
        has_password=has_password,
    )
    if not (candidate.is_traditional_auth or (policy.allow_multipart and candidate.is_multipart_auth)):
        return None

    candidate.input_count = Document.visible_input_count(ancestor)
    candidate.score = candidate.input_count
    if candidate.is_traditional_auth:
        candidate.score += policy.traditional_bonus
    return candidate


def locate_container(first_candidate: ScannedInput, policy: DetectionPolicy) -> Optional[ContainerCandidate]:
    """Walks outward from the first candidate and keeps the best ancestor.

    Ties keep the innermost ancestor. When nothing qualifies within
    ``policy.max_depth`` levels, the candidate's immediate parent is used.
    """

    best: Optional[ContainerCandidate] = None
    for ancestor in iter_ancestors(first_candidate.element, policy.max_depth):
        candidate = evaluate_ancestor(ancestor, policy)
        if candidate is None:
            continue
        if best is None or candidate.score > best.score:
            best = candidate

    if best is not None:
        logger.debug(
            "Container <%s> selected with score %d", Document.tag_name(best.element), best.score
        )
        return best

    parent = first_candidate.element.parent
    if parent is None:
        return None

    logger.debug("No qualifying ancestor; falling back to the immediate parent")
    return ContainerCandidate(
        element=parent,
        has_email_username=any(
            is_email_username_input(item, policy) for item in Document.descendant_inputs(parent)
        ),
        has_password=any(
            Document.input_type(item) == "password" for item in Document.descendant_inputs(parent)
        ),
        input_count=Document.visible_input_count(parent),
        fallback=True,
    )
