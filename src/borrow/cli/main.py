#!/usr/bin/env python3
"""Entry point for the borrow CLI."""

from __future__ import annotations

import argparse
import json
import sys
import time
from collections import deque
from pathlib import Path
from textwrap import dedent
from typing import Any

from borrow import __version__
from borrow.adapters.console_prompt import ConsolePrompter, DefaultsPrompter
from borrow.adapters.git_cli import SubprocessGitCloner
from borrow.app.start_service import NewResult, StartService
from borrow.app.tree_sync import FileFailure
from borrow.domain.errors import (
    BorrowError,
    InvalidSpecifierError,
    MissingValueError,
    UnsupportedSpecifierError,
)
from borrow.settings import RuntimeSettings, load_settings
from borrow.utils.telemetry import clear as telemetry_clear
from borrow.utils.telemetry import iter_events as telemetry_iter
from borrow.utils.telemetry import record_event, record_failure, record_structured_event
from borrow.utils.telemetry import summarize as telemetry_summarize

HELP_OVERVIEW = dedent(
    """
    Scaffold projects from templates.

    Template references:
      - local:<path>            a template directory on disk
      - <name>[@<branch>]       an entry of the borrowdev registry (branch v1 by default)

    Examples:
      borrow start new --template rust-cli --target-dir ./projects
      borrow start new --template local:./my-template --target-dir . --defaults
      borrow start del --template rust-cli@v2
    """
)

SETTINGS = load_settings()


def _settings_for(args: argparse.Namespace) -> RuntimeSettings:
    data_dir = getattr(args, "data_dir", None)
    if data_dir:
        return load_settings(Path(data_dir))
    return SETTINGS


def _build_service(settings: RuntimeSettings) -> StartService:
    return StartService(settings, SubprocessGitCloner())


def _parse_overrides(items: list[str] | None) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for raw in items or []:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid --set value {raw!r}; expected KEY=VALUE")
        overrides[key] = value
    return overrides


def _print_failures(failures: list[FileFailure], stage: str) -> None:
    for failure in failures:
        print(f"Error {stage} file {failure.path}: {failure.reason}", file=sys.stderr)


def _print_diagnostics(result: NewResult) -> None:
    if result.fetch.reused_clone:
        print("Template already exists, skipping download", file=sys.stderr)
    for link in (*result.fetch.sync.symlinks, *result.install.symlinks):
        print(f"Symlinks are not supported yet. Skipping {link}", file=sys.stderr)
    _print_failures(result.fetch.sync.failures, "caching")
    _print_failures(result.install.failures, "processing")


def _print_new_summary(result: NewResult) -> None:
    manifest = result.manifest
    if manifest.name or manifest.description:
        title = manifest.name or result.template.name
        version = f" {manifest.version}" if manifest.version else ""
        print(f"Template: {title}{version}")
        if manifest.description:
            print(f"  {manifest.description}")
    install = result.install
    print(f"Project created at {install.output_dir}")
    print(f"  - rendered templates: {len(install.rendered)}")
    print(f"  - copied files: {len(install.copied)}")
    if install.failures:
        print(f"  - failed files: {len(install.failures)}")


def _start_new_cmd(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    try:
        overrides = _parse_overrides(args.overrides)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    service = _build_service(settings)
    prompter = DefaultsPrompter() if args.defaults else ConsolePrompter()
    target_dir = Path(args.target_dir).expanduser().resolve()
    started = time.monotonic()
    try:
        result = service.new(args.template, target_dir, prompter, overrides=overrides)
    except (InvalidSpecifierError, UnsupportedSpecifierError) as exc:
        print(f"Invalid template reference: {exc}", file=sys.stderr)
        record_failure(settings, "start.new", args.template, exc, status="invalid")
        return 2
    except MissingValueError as exc:
        print(str(exc), file=sys.stderr)
        record_failure(settings, "start.new", args.template, exc, status="missing_value")
        return 2
    except BorrowError as exc:
        print(f"start new failed: {exc}", file=sys.stderr)
        record_failure(settings, "start.new", args.template, exc, status="fail")
        return 1

    duration_ms = (time.monotonic() - started) * 1000
    record_structured_event(
        settings,
        "start.new",
        payload={
            "template": result.specifier.name,
            "fetch": result.fetch.sync.summary(),
            "install": result.install.summary(),
        },
        level="info" if result.ok else "warn",
        status="ok" if result.ok else "partial",
        component="start",
        duration_ms=duration_ms,
    )
    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_new_summary(result)
    _print_diagnostics(result)
    return 0


def _start_del_cmd(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    service = _build_service(settings)
    try:
        outcome = service.delete(args.template)
    except (InvalidSpecifierError, UnsupportedSpecifierError) as exc:
        print(f"Invalid template reference: {exc}", file=sys.stderr)
        return 2
    for path in outcome.result.removed:
        print(f"Removed {path}")
    for path in outcome.result.missing:
        print(f"Nothing to delete at {path}", file=sys.stderr)
    record_event(
        settings,
        "start.del",
        {"template": outcome.specifier.name, "removed": len(outcome.result.removed)},
        status="ok" if outcome.deleted else "missing",
    )
    return 0


def _start_list_cmd(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    service = _build_service(settings)
    entries = service.list_templates()
    if args.json:
        payload = [
            {"name": template.name, "path": str(template.root_dir), "manifest": manifest.to_dict()}
            for template, manifest in entries
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0
    if not entries:
        print("No templates cached", file=sys.stderr)
        return 0
    for template, manifest in entries:
        line = template.name
        if manifest.version:
            line += f" (version {manifest.version})"
        if manifest.description:
            line += f" - {manifest.description}"
        print(line)
    return 0


def _telemetry_cmd(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    if args.telemetry_command == "report":
        recent = getattr(args, "recent", 0)
        if recent and recent > 0:
            events: list[dict[str, Any]] = list(deque(telemetry_iter(settings), maxlen=recent))
        else:
            events = list(telemetry_iter(settings))
        print(json.dumps(telemetry_summarize(events), indent=2, ensure_ascii=False))
        return 0
    if args.telemetry_command == "clear":
        telemetry_clear(settings)
        print("Telemetry log cleared")
        return 0
    if args.telemetry_command == "tail":
        for evt in deque(telemetry_iter(settings), maxlen=args.limit):
            print(json.dumps(evt, ensure_ascii=False))
        return 0
    print("Unsupported telemetry command", file=sys.stderr)
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="borrow",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"borrow {__version__}")
    parser.add_argument("--data-dir", help="Override the data directory (default: $BORROW_HOME or the platform data dir)")

    sub = parser.add_subparsers(dest="command", required=True)

    start_cmd = sub.add_parser("start", help="Scaffold projects and project components from templates")
    start_sub = start_cmd.add_subparsers(dest="start_command", required=True)

    start_new = start_sub.add_parser("new", help="Create a project from a template")
    start_new.add_argument("-t", "--template", required=True, help="Template reference (local:<path> or <name>[@<branch>])")
    start_new.add_argument("-d", "--target-dir", default=".", help="Directory to create the project in (default: current directory)")
    start_new.add_argument("--defaults", action="store_true", help="Do not prompt; use placeholder defaults")
    start_new.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE", help="Set a placeholder value without prompting (repeatable)")
    start_new.add_argument("--json", action="store_true", help="Emit machine-readable JSON result")
    start_new.set_defaults(func=_start_new_cmd)

    start_del = start_sub.add_parser("del", help="Delete a cached template")
    start_del.add_argument("-t", "--template", required=True, help="Template reference to remove from the cache")
    start_del.set_defaults(func=_start_del_cmd)

    start_list = start_sub.add_parser("list", help="List cached templates")
    start_list.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")
    start_list.set_defaults(func=_start_list_cmd)

    telemetry_cmd = sub.add_parser("telemetry", help="Inspect local telemetry logs")
    telemetry_sub = telemetry_cmd.add_subparsers(dest="telemetry_command", required=True)

    telemetry_report = telemetry_sub.add_parser("report", help="Print aggregated telemetry stats")
    telemetry_report.add_argument("--recent", type=int, default=0, help="Only include the last N events")
    telemetry_report.set_defaults(func=_telemetry_cmd)

    telemetry_clear_cmd = telemetry_sub.add_parser("clear", help="Remove telemetry log file")
    telemetry_clear_cmd.set_defaults(func=_telemetry_cmd)

    telemetry_tail = telemetry_sub.add_parser("tail", help="Print last N telemetry events")
    telemetry_tail.add_argument("--limit", type=int, default=20)
    telemetry_tail.set_defaults(func=_telemetry_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
