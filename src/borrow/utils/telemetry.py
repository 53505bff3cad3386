"""Opt-out JSONL log of start pipeline events.

Each line is one record checked against ``resources/telemetry.schema.json``.
Set ``BORROW_TELEMETRY=0`` to stop recording.
"""

from __future__ import annotations

import json
import os
import time
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator

import jsonschema

from borrow.settings import RuntimeSettings

TELEMETRY_ENV = "BORROW_TELEMETRY"
TELEMETRY_FILENAME = "telemetry.jsonl"

_DISABLE_VALUES = {"0", "false", "no", "off"}

_TELEMETRY_VALIDATOR: jsonschema.Draft202012Validator | None = None


def telemetry_enabled() -> bool:
    return os.getenv(TELEMETRY_ENV, "1").lower() not in _DISABLE_VALUES


def telemetry_path(settings: RuntimeSettings) -> Path:
    return settings.log_dir / TELEMETRY_FILENAME


def record_event(settings: RuntimeSettings, event: str, payload: dict[str, Any] | None = None, **extra: Any) -> None:
    record_structured_event(settings, event, payload=payload, **extra)


def record_structured_event(
    settings: RuntimeSettings,
    event: str,
    *,
    payload: dict[str, Any] | None = None,
    level: str = "info",
    status: str | None = None,
    component: str | None = None,
    duration_ms: float | None = None,
) -> None:
    """Append one record; raises ``jsonschema.ValidationError`` for malformed input."""
    if not telemetry_enabled():
        return
    record: dict[str, Any] = {"ts": time.time(), "event": event, "payload": payload or {}, "level": level}
    if status:
        record["status"] = status
    if component:
        record["component"] = component
    if duration_ms is not None:
        record["durationMs"] = duration_ms
    _telemetry_validator().validate(record)
    log_path = telemetry_path(settings)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")


def record_failure(settings: RuntimeSettings, event: str, reference: str, exc: Exception, *, status: str) -> None:
    """Record a start command that stopped on ``exc`` before producing a project."""
    record_structured_event(
        settings,
        event,
        payload={"template": reference, "error": str(exc), "errorType": type(exc).__name__},
        level="error",
        status=status,
        component="start",
    )


def iter_events(settings: RuntimeSettings) -> Iterator[dict[str, Any]]:
    log_path = telemetry_path(settings)
    if not log_path.exists():
        return
    with log_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def summarize(events: Iterable[dict[str, Any]]) -> dict[str, Any]:
    total = 0
    by_event: dict[str, int] = {}
    by_status: dict[str, int] = {}
    for evt in events:
        name = evt.get("event", "unknown")
        by_event[name] = by_event.get(name, 0) + 1
        status = evt.get("status", "unknown")
        by_status[status] = by_status.get(status, 0) + 1
        total += 1
    return {"total": total, "by_event": by_event, "by_status": by_status}


def clear(settings: RuntimeSettings) -> bool:
    log_path = telemetry_path(settings)
    if not log_path.exists():
        return False
    log_path.unlink()
    return True


def _telemetry_validator() -> jsonschema.Draft202012Validator:
    global _TELEMETRY_VALIDATOR
    if _TELEMETRY_VALIDATOR is None:
        schema_resource = resources.files("borrow.resources") / "telemetry.schema.json"
        schema = json.loads(schema_resource.read_text(encoding="utf-8"))
        _TELEMETRY_VALIDATOR = jsonschema.Draft202012Validator(schema)
    return _TELEMETRY_VALIDATOR
