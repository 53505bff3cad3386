"""Populate the template cache from a local directory or the remote registry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from borrow.adapters.fs_template_store import FSTemplateStore
from borrow.app.tree_sync import SyncReport, sync_tree
from borrow.domain.errors import FetchError, MissingSourceError, MissingSubdirectoryError
from borrow.domain.specifier import LocalSpecifier, RemoteSpecifier, TemplateSpecifier
from borrow.ports.git import DEFAULT_CLONE_BRANCH, CloneDestinationExistsError, CloneError, GitCloner


@dataclass
class FetchResult:
    specifier: TemplateSpecifier
    source_dir: Path
    cache_dir: Path
    sync: SyncReport
    reused_clone: bool = False


class FetchService:
    def __init__(self, store: FSTemplateStore, cloner: GitCloner) -> None:
        self._store = store
        self._cloner = cloner

    def fetch(self, spec: TemplateSpecifier, cache_dir: Path | None = None) -> FetchResult:
        target = cache_dir if cache_dir is not None else self._store.template_dir(spec)
        if isinstance(spec, LocalSpecifier):
            return self._fetch_local(spec, target)
        if isinstance(spec, RemoteSpecifier):
            return self._fetch_remote(spec, target)
        raise TypeError(f"Unknown specifier type: {type(spec).__name__}")

    def _fetch_local(self, spec: LocalSpecifier, target: Path) -> FetchResult:
        source = spec.path.expanduser()
        if not source.is_dir():
            raise MissingSourceError(f"Template directory {source} does not exist")
        report = sync_tree(source, target)
        return FetchResult(specifier=spec, source_dir=source, cache_dir=target, sync=report)

    def _fetch_remote(self, spec: RemoteSpecifier, target: Path) -> FetchResult:
        git_dir = self._store.git_dir(spec)
        reused = False
        try:
            self._cloner.shallow_clone(spec.clone_url, git_dir, branch=spec.branch or DEFAULT_CLONE_BRANCH)
        except CloneDestinationExistsError:
            reused = True
        except CloneError as exc:
            raise FetchError(f"Failed to clone template: {exc}") from exc

        source = git_dir / spec.subdir if spec.subdir else git_dir
        if not source.is_dir():
            raise MissingSubdirectoryError(f"Template directory {source} does not exist")
        report = sync_tree(source, target)
        return FetchResult(specifier=spec, source_dir=source, cache_dir=target, sync=report, reused_clone=reused)
