"""Small persisted list of submitted URLs."""

from __future__ import annotations

import json
import logging
import secrets
import string
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 5
_ID_ALPHABET = string.digits + string.ascii_lowercase


class HistoryError(Exception):
    """Base class for rejected history operations."""


class InvalidUrlError(HistoryError):
    pass


class DuplicateUrlError(HistoryError):
    pass


class HistoryFullError(HistoryError):
    pass


def normalize_url(value: str) -> str:
    """Adds ``https://`` when no scheme is given and checks the result."""

    candidate = (value or "").strip()
    if not candidate:
        raise InvalidUrlError("Please enter a URL.")
    if not candidate.startswith(("http://", "https://")):
        candidate = "https://" + candidate

    parsed = urlparse(candidate)
    hostname = parsed.hostname or ""
    if parsed.scheme not in {"http", "https"} or not hostname or " " in candidate:
        raise InvalidUrlError("Please enter a valid URL.")
    if "." not in hostname and hostname != "localhost":
        raise InvalidUrlError("Please enter a valid URL.")
    return candidate


def generate_entry_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"url-{int(time.time() * 1000)}-{suffix}"


@dataclass(frozen=True)
class HistoryEntry:
    id: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "url": self.url}


@dataclass
class UrlHistory:
    """Ordered, de-duplicated URL list capped at ``limit`` entries."""

    entries: List[HistoryEntry] = field(default_factory=list)
    limit: int = HISTORY_LIMIT

    def __len__(self) -> int:
        return len(self.entries)

    def urls(self) -> List[str]:
        return [entry.url for entry in self.entries]

    def add(self, url: str) -> HistoryEntry:
        normalized = normalize_url(url)
        if normalized in self.urls():
            raise DuplicateUrlError("This URL has already been added.")
        if len(self.entries) >= self.limit:
            raise HistoryFullError(f"{self.limit} URLs limit reached.")
        entry = HistoryEntry(id=generate_entry_id(), url=normalized)
        self.entries.append(entry)
        return entry

    def remove(self, entry_id: str) -> Optional[HistoryEntry]:
        for index, entry in enumerate(self.entries):
            if entry.id == entry_id or entry.url == entry_id:
                return self.entries.pop(index)
        return None

    def clear(self) -> None:
        self.entries.clear()

    def to_json(self) -> str:
        return json.dumps([entry.to_dict() for entry in self.entries], indent=4)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def from_list(cls, raw: Any, limit: int = HISTORY_LIMIT) -> "UrlHistory":
        history = cls(limit=limit)
        if not isinstance(raw, list):
            return history
        seen: set[str] = set()
        for item in raw:
            if not isinstance(item, dict):
                continue
            entry_id = item.get("id")
            url = item.get("url")
            if not entry_id or not url or url in seen:
                continue
            seen.add(url)
            history.entries.append(HistoryEntry(id=str(entry_id), url=str(url)))
        del history.entries[limit:]
        return history

    @classmethod
    def load(cls, path: Path, limit: int = HISTORY_LIMIT) -> "UrlHistory":
        if not path.exists():
            return cls(limit=limit)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable history file %s", path, exc_info=True)
            return cls(limit=limit)
        return cls.from_list(raw, limit=limit)
