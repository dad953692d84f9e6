"""Configuration loading utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from ..detection.policy import DetectionPolicy, StrictnessMode

DEFAULT_FETCH_TIMEOUT = 15
DEFAULT_MAX_THREADS = 5
DEFAULT_HISTORY_FILE = ".authform_history.json"


@dataclass(slots=True)
class DetectorConfig:
    """Holds runtime options for a detection run."""

    report_path: Path
    mode: StrictnessMode = StrictnessMode.PERMISSIVE
    fetch_timeout: int = DEFAULT_FETCH_TIMEOUT
    history_path: Path = Path(DEFAULT_HISTORY_FILE)
    max_threads: int = DEFAULT_MAX_THREADS

    @property
    def policy(self) -> DetectionPolicy:
        return DetectionPolicy.for_mode(self.mode)


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    return value if value > 0 else default


def load_configuration(
    report_name: str = "auth_form_report.json",
    *,
    mode: Union[StrictnessMode, str, None] = None,
    fetch_timeout: Optional[int] = None,
    history_name: Optional[str] = None,
) -> DetectorConfig:
    """Builds a ``DetectorConfig`` from CLI input and environment variables."""

    load_dotenv()  # Loads .env values if present

    mode_value = mode if mode is not None else os.getenv("AUTHFORM_MODE", StrictnessMode.PERMISSIVE.value)
    timeout_value = (
        fetch_timeout
        if fetch_timeout is not None
        else _int_from_env("AUTHFORM_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT)
    )
    history_value = history_name or os.getenv("AUTHFORM_HISTORY") or DEFAULT_HISTORY_FILE

    return DetectorConfig(
        report_path=Path(report_name).resolve(),
        mode=StrictnessMode.parse(mode_value),
        fetch_timeout=timeout_value,
        history_path=Path(history_value).expanduser().resolve(),
        max_threads=_int_from_env("AUTHFORM_MAX_THREADS", DEFAULT_MAX_THREADS),
    )
