"""Domain model for templates stored in the local cache."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from borrow.domain.errors import MissingContentError
from borrow.domain.placeholders import PLACEHOLDERS_FILENAME

CONTENT_DIR = "content"
MANIFEST_FILENAME = "template.yaml"
TEMPLATE_SUFFIX = ".template"


@dataclass(frozen=True)
class TemplateManifest:
    name: str | None = None
    description: str | None = None
    version: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "TemplateManifest":
        if not isinstance(payload, dict):
            return cls()

        def _field(key: str) -> str | None:
            value = payload.get(key)
            return None if value is None else str(value)

        return cls(name=_field("name"), description=_field("description"), version=_field("version"))

    def to_dict(self) -> dict[str, str | None]:
        return {"name": self.name, "description": self.description, "version": self.version}


@dataclass(frozen=True)
class CachedTemplate:
    """A fetched template: definitions file, ``content/`` tree and optional manifest."""

    root_dir: Path

    @property
    def name(self) -> str:
        return self.root_dir.name

    @property
    def content_dir(self) -> Path:
        return self.root_dir / CONTENT_DIR

    @property
    def placeholders_file(self) -> Path:
        return self.root_dir / PLACEHOLDERS_FILENAME

    @property
    def manifest_file(self) -> Path:
        return self.root_dir / MANIFEST_FILENAME

    def validate(self) -> None:
        if not self.content_dir.is_dir():
            raise MissingContentError(f"Template content directory missing: {self.content_dir}")

    def manifest(self) -> TemplateManifest:
        if not self.manifest_file.exists():
            return TemplateManifest()
        try:
            payload = yaml.safe_load(self.manifest_file.read_text("utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError):
            return TemplateManifest()
        return TemplateManifest.from_payload(payload)


def rendered_name(filename: str) -> str | None:
    """Output name for a ``*.template`` file, ``None`` for files copied verbatim."""
    if filename.endswith(TEMPLATE_SUFFIX) and len(filename) > len(TEMPLATE_SUFFIX):
        return filename[: -len(TEMPLATE_SUFFIX)]
    return None
