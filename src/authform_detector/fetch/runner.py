"""Fetch-then-detect over one or many URLs."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Callable, Iterable, List, Optional

from ..core.config import DetectorConfig
from ..core.report import BatchArtifact, DetectionArtifact
from ..detection.builder import form_summary
from ..detection.detector import detect_auth_form
from ..detection.formatting import format_markup
from .fetcher import FetchResult, fetch_html

logger = logging.getLogger(__name__)

MAX_THREADS = 5

Fetcher = Callable[..., FetchResult]


def analyze_markup(
    source: str,
    html: Optional[str],
    config: DetectorConfig,
    *,
    status: Optional[int] = None,
    fetch_error: Optional[str] = None,
) -> DetectionArtifact:
    auth_form = detect_auth_form(html, config.policy)
    return DetectionArtifact(
        source=source,
        auth_form=auth_form,
        summary=form_summary(auth_form),
        formatted_markup=format_markup(auth_form.parent_element) if auth_form.parent_element else "",
        status=status,
        fetch_error=fetch_error,
    )


def analyze_url(url: str, config: DetectorConfig, *, fetcher: Fetcher = fetch_html) -> DetectionArtifact:
    """Fetches ``url`` and runs detection on whatever markup came back.

    Error responses that still carry a body are analyzed too.
    """

    result = fetcher(url, timeout=config.fetch_timeout)
    if not result.ok:
        logger.info("Fetching %s failed: %s", url, result.error)
    return analyze_markup(
        url,
        result.html,
        config,
        status=result.status,
        fetch_error=result.error,
    )


def analyze_urls(
    urls: Iterable[str],
    config: DetectorConfig,
    *,
    fetcher: Fetcher = fetch_html,
) -> BatchArtifact:
    """Runs :func:`analyze_url` concurrently and keeps submission order."""

    targets: List[str] = list(urls)
    if not targets:
        return BatchArtifact()

    workers = max(1, min(config.max_threads or MAX_THREADS, len(targets)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(analyze_url, url, config, fetcher=fetcher) for url in targets]
        artifacts = [future.result() for future in futures]

    return BatchArtifact(artifacts=artifacts)
