"""Command line interface for the auth form detector."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .core.config import DetectorConfig, load_configuration
from .core.report import BatchArtifact, DetectionArtifact
from .detection.detector import debug_auth_detection
from .detection.policy import StrictnessMode
from .fetch.runner import analyze_markup, analyze_url, analyze_urls
from .history.store import HistoryError, UrlHistory


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Auth Form Detector")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Detect login/signup forms in URLs or HTML files")
    analyze.add_argument("targets", nargs="+", help="URLs or paths to local HTML files")
    analyze.add_argument("--strict", action="store_true", help="Require keyword and context evidence")
    analyze.add_argument("--report", default="auth_form_report.json", help="JSON report output file")
    analyze.add_argument("--timeout", type=int, default=None, help="Fetch timeout in seconds")
    analyze.add_argument("--show-markup", action="store_true", help="Print the formatted container markup")
    analyze.add_argument("--debug", action="store_true", help="Print the per-input signal breakdown")

    history = subparsers.add_parser("history", help="Manage the saved URL list")
    history.add_argument("action", choices=("list", "add", "remove", "clear", "analyze"))
    history.add_argument("value", nargs="?", help="URL to add, or entry id/URL to remove")
    history.add_argument("--strict", action="store_true", help="Strict mode for 'history analyze'")
    history.add_argument("--report", default="auth_form_report.json", help="JSON report output file")

    return parser.parse_args(argv)


def _read_local_markup(target: str) -> Optional[str]:
    path = Path(target)
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8", errors="replace")


def _print_artifact(artifact: DetectionArtifact, *, show_markup: bool) -> None:
    status = "Form Detected" if artifact.detected else "No Form Detected"
    print(f"\n=== {artifact.source} ===")
    if artifact.fetch_error:
        print(f"[!] {artifact.fetch_error}")
    print(f"[{'+' if artifact.detected else '-'}] {status}")
    print(f" - {artifact.summary}")
    if not artifact.detected:
        print(" - Note: Guardrails or JS may be preventing access.")
    elif show_markup and artifact.formatted_markup:
        print(artifact.formatted_markup)


def _analyze_targets(targets: Sequence[str], config: DetectorConfig) -> BatchArtifact:
    artifacts: List[Optional[DetectionArtifact]] = []
    remote: List[str] = []

    for target in targets:
        markup = _read_local_markup(target)
        if markup is None:
            artifacts.append(None)
            remote.append(target)
        else:
            artifacts.append(analyze_markup(target, markup, config))

    if len(remote) == 1:
        fetched = [analyze_url(remote[0], config)]
    else:
        fetched = analyze_urls(remote, config).artifacts
    fetched_iter = iter(fetched)

    return BatchArtifact(artifacts=[item if item is not None else next(fetched_iter) for item in artifacts])


def run_analyze(args: argparse.Namespace) -> int:
    config = load_configuration(
        args.report,
        mode=StrictnessMode.STRICT if args.strict else None,
        fetch_timeout=args.timeout,
    )
    print(f"[*] Mode: {config.mode.value}")

    batch = _analyze_targets(args.targets, config)
    for artifact in batch.artifacts:
        _print_artifact(artifact, show_markup=args.show_markup)
        if args.debug:
            markup = _read_local_markup(artifact.source)
            if markup is not None:
                print(json.dumps(debug_auth_detection(markup, config.policy), indent=4))

    batch.save(config.report_path)
    print(f"\n[+] Report saved to {config.report_path}")
    return 0


def run_history(args: argparse.Namespace) -> int:
    config = load_configuration(args.report, mode=StrictnessMode.STRICT if args.strict else None)
    history = UrlHistory.load(config.history_path)

    try:
        if args.action == "add":
            entry = history.add(args.value or "")
            history.save(config.history_path)
            print(f"[+] Added {entry.url} ({entry.id})")
        elif args.action == "remove":
            removed = history.remove(args.value or "")
            if removed is None:
                print(f"[!] No saved URL matches {args.value!r}")
                return 1
            history.save(config.history_path)
            print(f"[+] Removed {removed.url}")
        elif args.action == "clear":
            history.clear()
            history.save(config.history_path)
            print("[+] History cleared")
        elif args.action == "analyze":
            if not history.entries:
                print(" - No saved URLs.")
                return 0
            batch = analyze_urls(history.urls(), config)
            for artifact in batch.artifacts:
                _print_artifact(artifact, show_markup=False)
            batch.save(config.report_path)
            print(f"\n[+] Report saved to {config.report_path}")
        else:
            print(f"URLs added: {len(history)}/{history.limit}")
            for entry in history.entries:
                print(f" - {entry.id} :: {entry.url}")
    except HistoryError as exc:
        print(f"[!] {exc}")
        return 1
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "history":
        return run_history(args)
    return run_analyze(args)


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
