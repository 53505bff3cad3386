"""Application service wiring the start pipeline: resolve, fetch, prompt, install."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from borrow.adapters.fs_template_store import DeleteResult, FSTemplateStore
from borrow.app.fetch_service import FetchResult, FetchService
from borrow.app.install_service import InstallReport, InstallService, collect_values
from borrow.domain.placeholders import PlaceholderValue, parse_placeholders
from borrow.domain.specifier import TemplateSpecifier, resolve_specifier
from borrow.domain.template import CachedTemplate, TemplateManifest
from borrow.ports.git import GitCloner
from borrow.ports.prompt import Prompter
from borrow.settings import RuntimeSettings


@dataclass
class NewResult:
    specifier: TemplateSpecifier
    template: CachedTemplate
    manifest: TemplateManifest
    fetch: FetchResult
    values: dict[str, PlaceholderValue]
    install: InstallReport

    @property
    def output_dir(self) -> Path:
        return self.install.output_dir

    @property
    def ok(self) -> bool:
        return self.fetch.sync.ok and self.install.ok

    def to_dict(self) -> dict[str, object]:
        return {
            "template": self.specifier.name,
            "source": self.specifier.describe(),
            "cache_dir": str(self.template.root_dir),
            "output_dir": str(self.output_dir),
            "manifest": self.manifest.to_dict(),
            "values": {key: value.value for key, value in self.values.items()},
            "fetch": {**self.fetch.sync.summary(), "reused_clone": self.fetch.reused_clone},
            "install": self.install.summary(),
            "failures": [failure.to_dict() for failure in (*self.fetch.sync.failures, *self.install.failures)],
        }


@dataclass
class DeleteOutcome:
    specifier: TemplateSpecifier
    result: DeleteResult

    @property
    def deleted(self) -> bool:
        return bool(self.result.removed)


class StartService:
    def __init__(self, settings: RuntimeSettings, cloner: GitCloner) -> None:
        self._settings = settings
        self._store = FSTemplateStore(settings)
        self._fetcher = FetchService(self._store, cloner)
        self._installer = InstallService()

    @property
    def store(self) -> FSTemplateStore:
        return self._store

    def new(
        self,
        reference: str,
        target_dir: Path,
        prompter: Prompter,
        *,
        overrides: Mapping[str, str] | None = None,
    ) -> NewResult:
        spec = resolve_specifier(reference)
        self.ensure_prerequisites()
        fetch = self._fetcher.fetch(spec)
        template = self._store.cached(spec)
        template.validate()
        manifest = template.manifest()
        definitions = parse_placeholders(template.placeholders_file)
        values = collect_values(definitions, prompter, overrides)
        install = self._installer.install(template, target_dir, values)
        return NewResult(
            specifier=spec,
            template=template,
            manifest=manifest,
            fetch=fetch,
            values=values,
            install=install,
        )

    def delete(self, reference: str) -> DeleteOutcome:
        spec = resolve_specifier(reference)
        return DeleteOutcome(specifier=spec, result=self._store.delete(spec))

    def list_templates(self) -> list[tuple[CachedTemplate, TemplateManifest]]:
        return [(template, template.manifest()) for template in self._store.list_templates()]

    def ensure_prerequisites(self) -> None:
        self._settings.templates_dir.mkdir(parents=True, exist_ok=True)
        self._settings.git_dir.mkdir(parents=True, exist_ok=True)
        self._settings.log_dir.mkdir(parents=True, exist_ok=True)
