"""Turns classified inputs and the chosen container into an ``AuthForm``."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..core.models import ContainerCandidate, ScannedInput
from ..core.report import AuthForm, InputDescriptor, deduplicate_descriptors
from .loader import Document
from .policy import IDENTITY_KEYWORDS

logger = logging.getLogger(__name__)

SUMMARY_SEPARATOR = " • "
SUMMARY_SAMPLE_SIZE = 6
NEGATIVE_SUMMARY = "No authentication forms detected"


def describe_input(item: ScannedInput) -> InputDescriptor:
    element = item.element
    return InputDescriptor(
        selector=Document.outer_html(element),
        name=Document.attribute(element, "name") or None,
        id=Document.attribute(element, "id") or None,
        placeholder=Document.attribute(element, "placeholder") or None,
        type=item.attributes.type,
    )


def is_identity_descriptor(descriptor: InputDescriptor, keywords: Sequence[str] = IDENTITY_KEYWORDS) -> bool:
    if (descriptor.type or "") == "email":
        return True
    for value in (descriptor.name, descriptor.id, descriptor.placeholder):
        lowered = (value or "").lower()
        if any(keyword in lowered for keyword in keywords):
            return True
    return False


def partition_inputs(items: Iterable[ScannedInput]) -> tuple[tuple[InputDescriptor, ...], tuple[InputDescriptor, ...]]:
    """Splits into (password, other) descriptors, each deduplicated."""

    passwords: List[InputDescriptor] = []
    others: List[InputDescriptor] = []
    for item in items:
        descriptor = describe_input(item)
        if descriptor.type == "password":
            passwords.append(descriptor)
        else:
            others.append(descriptor)
    return deduplicate_descriptors(passwords), deduplicate_descriptors(others)


def build_report(items: Sequence[ScannedInput], container: Optional[ContainerCandidate]) -> AuthForm:
    password_inputs, other_inputs = partition_inputs(items)

    if not password_inputs and not any(is_identity_descriptor(item) for item in other_inputs):
        logger.debug("Final identity check rejected %d candidate input(s)", len(items))
        return AuthForm.empty()

    if container is None:
        parent_element = None
        form_element = None
        input_count = 0
    else:
        parent_element = container.outer_html
        form_element = parent_element if container.is_form else None
        input_count = container.input_count

    return AuthForm(
        has_password_input=True,
        form_element=form_element,
        parent_element=parent_element,
        input_count=input_count,
        password_inputs=password_inputs,
        other_inputs=other_inputs,
    )


def form_summary(auth_form: AuthForm) -> str:
    if not auth_form.has_password_input:
        return NEGATIVE_SUMMARY

    sample = ", ".join(item.label for item in auth_form.other_inputs[:SUMMARY_SAMPLE_SIZE])
    parts = [
        f"Found {len(auth_form.password_inputs)} authentication input(s)",
        f"Parent element contains {auth_form.input_count} total input(s)",
        f"Other inputs: {sample or 'N/A'}",
    ]
    return SUMMARY_SEPARATOR.join(parts)
