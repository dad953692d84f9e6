"""Walks input-like elements and classifies each one."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from bs4.element import Tag

from ..core.models import (
    ClassificationKind,
    InputAttributes,
    InputClassification,
    ScannedInput,
)
from .context import has_auth_context
from .loader import Document
from .policy import DetectionPolicy

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InputScanner:
    """Applies the password, keyword and context signals to every input."""

    policy: DetectionPolicy

    def classify(self, element: Tag, attributes: InputAttributes) -> InputClassification:
        if attributes.is_password:
            return InputClassification.from_reasons((ClassificationKind.PASSWORD,))

        matched = self.policy.matching_keywords(attributes.joined)
        has_context = has_auth_context(element, self.policy)

        reasons: List[ClassificationKind] = []
        if matched:
            reasons.append(ClassificationKind.KEYWORD)
        if has_context:
            reasons.append(ClassificationKind.CONTEXT)

        # Button inputs never qualify on surrounding text alone.
        context_only = has_context and not matched
        if attributes.is_button and context_only:
            return InputClassification(reasons=tuple(reasons), matched_keywords=matched)

        if self.policy.require_keyword_and_context and not (matched and has_context):
            # Reasons are kept for debugging even when the input is rejected.
            return InputClassification(reasons=tuple(reasons), matched_keywords=matched)

        return InputClassification.from_reasons(tuple(reasons), matched)

    def scan_all(self, document: Document) -> List[ScannedInput]:
        scanned: List[ScannedInput] = []
        elements = document.inputs(include_aria=self.policy.include_aria_textboxes)
        for index, element in enumerate(elements):
            attributes = InputAttributes.from_element(element)
            scanned.append(
                ScannedInput(
                    element=element,
                    attributes=attributes,
                    classification=self.classify(element, attributes),
                    index=index,
                )
            )
        return scanned

    def scan(self, document: Document) -> List[ScannedInput]:
        candidates = [item for item in self.scan_all(document) if item.is_candidate]
        logger.debug(
            "Scanner (%s) kept %d candidate input(s)", self.policy.mode.value, len(candidates)
        )
        return candidates


def scan(document: Document, policy: DetectionPolicy) -> List[ScannedInput]:
    return InputScanner(policy).scan(document)
