"""Idempotent directory copy used to populate the template cache.

Existing directories and files at the destination are never touched: the first
copy of a file wins and later syncs only fill in what is missing. Symlinks are
skipped rather than followed or recreated.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

MAX_DEPTH = 100


@dataclass(frozen=True)
class FileFailure:
    path: Path
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"path": str(self.path), "reason": self.reason}


@dataclass
class SyncReport:
    created_dirs: list[Path] = field(default_factory=list)
    copied_files: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    symlinks: list[Path] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> dict[str, int]:
        return {
            "created_dirs": len(self.created_dirs),
            "copied_files": len(self.copied_files),
            "skipped": len(self.skipped),
            "symlinks": len(self.symlinks),
            "failures": len(self.failures),
        }


def walk_tree(
    root: Path,
    *,
    max_depth: int = MAX_DEPTH,
    on_error: Callable[[Path, OSError], None] | None = None,
) -> Iterator[Path]:
    """Yield ``root`` and its descendants, parents before children.

    Symlinked directories are yielded but never descended into. Directories that
    cannot be listed are reported through ``on_error`` and pruned.
    """
    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        path, depth = stack.pop()
        yield path
        if depth >= max_depth or path.is_symlink() or not path.is_dir():
            continue
        try:
            children = sorted(path.iterdir(), reverse=True)
        except OSError as exc:
            if on_error is not None:
                on_error(path, exc)
            continue
        stack.extend((child, depth + 1) for child in children)


def sync_tree(source: Path, destination: Path, *, max_depth: int = MAX_DEPTH) -> SyncReport:
    report = SyncReport()

    def _record(path: Path, exc: OSError) -> None:
        report.failures.append(FileFailure(path=path, reason=exc.strerror or str(exc)))

    for path in walk_tree(source, max_depth=max_depth, on_error=_record):
        target = destination / path.relative_to(source)
        try:
            if path.is_symlink():
                report.symlinks.append(path)
            elif path.is_dir():
                if target.exists():
                    report.skipped.append(target)
                else:
                    target.mkdir(parents=True)
                    report.created_dirs.append(target)
            elif target.exists():
                report.skipped.append(target)
            else:
                shutil.copyfile(path, target)
                report.copied_files.append(target)
        except OSError as exc:
            _record(path, exc)
    return report

