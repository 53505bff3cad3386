"""Filesystem-backed template cache."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from borrow.domain.errors import InvalidSpecifierError, NotApplicableError
from borrow.domain.specifier import LocalSpecifier, RemoteSpecifier, TemplateSpecifier
from borrow.domain.template import CachedTemplate
from borrow.settings import RuntimeSettings


@dataclass
class DeleteResult:
    removed: list[Path] = field(default_factory=list)
    missing: list[Path] = field(default_factory=list)


def _entry_dir(base: Path, name: str) -> Path:
    """Cache entry ``base/name``, refusing names that point at or above ``base``."""
    root = base.resolve()
    entry = Path(os.path.normpath(root / name))
    if entry == root or not entry.is_relative_to(root):
        raise InvalidSpecifierError(f"Template name {name!r} resolves outside {base}")
    return base / name


class FSTemplateStore:
    def __init__(self, settings: RuntimeSettings) -> None:
        self._settings = settings

    def template_dir(self, spec: TemplateSpecifier) -> Path:
        return _entry_dir(self._settings.templates_dir, spec.name)

    def git_dir(self, spec: TemplateSpecifier) -> Path:
        if isinstance(spec, RemoteSpecifier):
            return _entry_dir(self._settings.git_dir, spec.name)
        if isinstance(spec, LocalSpecifier):
            raise NotApplicableError("Git directory is only applicable for remote templates")
        raise TypeError(f"Unknown specifier type: {type(spec).__name__}")

    def cache_dirs(self, spec: TemplateSpecifier) -> list[Path]:
        if isinstance(spec, RemoteSpecifier):
            return [self.template_dir(spec), self.git_dir(spec)]
        if isinstance(spec, LocalSpecifier):
            return [self.template_dir(spec)]
        raise TypeError(f"Unknown specifier type: {type(spec).__name__}")

    def cached(self, spec: TemplateSpecifier) -> CachedTemplate:
        return CachedTemplate(root_dir=self.template_dir(spec))

    def list_templates(self) -> Iterable[CachedTemplate]:
        base = self._settings.templates_dir
        if not base.exists():
            return []
        return [CachedTemplate(root_dir=entry) for entry in sorted(base.iterdir()) if entry.is_dir()]

    def delete(self, spec: TemplateSpecifier) -> DeleteResult:
        result = DeleteResult()
        for directory in self.cache_dirs(spec):
            if directory.is_dir() and not directory.is_symlink():
                shutil.rmtree(directory)
                result.removed.append(directory)
            elif directory.exists() or directory.is_symlink():
                directory.unlink()
                result.removed.append(directory)
            else:
                result.missing.append(directory)
        return result
