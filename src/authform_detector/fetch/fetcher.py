"""Fetches page markup for the detector, retrying with alternate headers."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15

USER_AGENTS: Tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15",
)
CRAWLER_USER_AGENT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"

INCOMPATIBLE_BROWSER_MARKERS: Tuple[str, ...] = (
    "incompatible-browser",
    "browser not supported",
    "please use a modern browser",
)


class FetchErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    CONTENT_TYPE = "content_type"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch; errors are data, never exceptions."""

    url: str
    html: Optional[str] = None
    status: Optional[int] = None
    content_type: str = ""
    error: Optional[str] = None
    error_kind: Optional[FetchErrorKind] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def content_length(self) -> int:
        return len(self.html or "")


def build_header_sets(user_agent: Optional[str] = None) -> List[Dict[str, str]]:
    """Header sets tried in order: full browser, minimal, crawler."""

    agent = user_agent or random.choice(USER_AGENTS)
    return [
        {
            "User-Agent": agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
            "DNT": "1",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "none",
            "Sec-Fetch-User": "?1",
            "Cache-Control": "max-age=0",
            "sec-ch-ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
            "sec-ch-ua-mobile": "?0",
            "sec-ch-ua-platform": '"Windows"',
        },
        {
            "User-Agent": agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        },
        {
            "User-Agent": CRAWLER_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
    ]


def _is_incompatible_browser_page(body: str) -> bool:
    lowered = body.lower()
    return any(marker in lowered for marker in INCOMPATIBLE_BROWSER_MARKERS)


def _validate_url(url: str) -> bool:
    parsed = urlparse(url or "")
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def fetch_html(
    url: str,
    *,
    timeout: int = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
    header_sets: Optional[List[Dict[str, str]]] = None,
) -> FetchResult:
    """GETs ``url`` and returns its HTML or a typed failure."""

    if not _validate_url(url):
        return FetchResult(url=url, error="Invalid URL format", error_kind=FetchErrorKind.INVALID_URL)

    if session is None:
        with requests.Session() as owned:
            return fetch_html(url, timeout=timeout, session=owned, header_sets=header_sets)

    http = session
    attempts = header_sets or build_header_sets()
    response: Optional[requests.Response] = None
    last_error: Optional[requests.RequestException] = None
    tried = 0

    for headers in attempts:
        tried += 1
        try:
            response = http.get(url, headers=headers, timeout=timeout, allow_redirects=True)
        except requests.RequestException as exc:
            logger.warning("Fetch attempt %d for %s failed: %s", tried, url, exc)
            last_error = exc
            response = None
            continue

        if response.ok:
            break

        if _is_incompatible_browser_page(response.text or ""):
            logger.warning("Fetch attempt %d for %s hit a browser check; retrying", tried, url)
            response = None
            continue

        break

    if response is None:
        if isinstance(last_error, requests.Timeout):
            return FetchResult(
                url=url,
                error="Request timeout - URL took too long to respond",
                error_kind=FetchErrorKind.TIMEOUT,
                attempts=tried,
            )
        reason = str(last_error) if last_error else "All fetch attempts failed"
        return FetchResult(
            url=url,
            error=f"Failed to fetch URL: {reason}",
            error_kind=FetchErrorKind.NETWORK,
            attempts=tried,
        )

    content_type = response.headers.get("content-type", "")

    if not response.ok:
        return FetchResult(
            url=url,
            html=response.text,
            status=response.status_code,
            content_type=content_type,
            error=f"Failed to fetch URL: {response.status_code} {response.reason}",
            error_kind=FetchErrorKind.HTTP_STATUS,
            attempts=tried,
        )

    if "text/html" not in content_type.lower():
        return FetchResult(
            url=url,
            status=response.status_code,
            content_type=content_type,
            error="URL does not return HTML content",
            error_kind=FetchErrorKind.CONTENT_TYPE,
            attempts=tried,
        )

    return FetchResult(
        url=url,
        html=response.text,
        status=response.status_code,
        content_type=content_type,
        attempts=tried,
    )
