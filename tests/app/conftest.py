from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from borrow.ports.git import CloneDestinationExistsError, CloneError, GitCloner
from borrow.ports.prompt import Prompter
from borrow.settings import RuntimeSettings

TemplateFactory = Callable[..., Path]


class FakeCloner(GitCloner):
    """Materialises a fixed registry tree instead of talking to GitHub."""

    def __init__(self, files: dict[str, str] | None = None, *, error: str | None = None) -> None:
        self.files = files or {}
        self.error = error
        self.calls: list[tuple[str, Path, str]] = []

    def shallow_clone(self, url: str, destination: Path, *, branch: str) -> None:
        self.calls.append((url, destination, branch))
        if destination.exists() and any(destination.iterdir()):
            raise CloneDestinationExistsError(f"destination path '{destination}' already exists")
        if self.error:
            raise CloneError(self.error)
        for relative, content in self.files.items():
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")


class ScriptedPrompter(Prompter):
    def __init__(self, answers: dict[str, object] | None = None) -> None:
        self.answers = answers or {}
        self.asked: list[tuple[str, str, object]] = []

    def ask(self, key: str, message: str, default: str | None = None) -> str:
        self.asked.append((key, message, default))
        answer = self.answers.get(key, default)
        return "" if answer is None else str(answer)

    def confirm(self, key: str, message: str, default: bool) -> bool:
        self.asked.append((key, message, default))
        return bool(self.answers.get(key, default))


@pytest.fixture()
def settings(tmp_path: Path) -> RuntimeSettings:
    return RuntimeSettings(data_dir=tmp_path / "data", cli_version="0.3.0")


@pytest.fixture()
def make_template(tmp_path: Path) -> TemplateFactory:
    def _make(
        name: str = "starter",
        *,
        placeholders: str = "",
        files: dict[str, str | bytes] | None = None,
        manifest: str | None = None,
        base: Path | None = None,
    ) -> Path:
        root = (base or tmp_path / "sources") / name
        content = root / "content"
        content.mkdir(parents=True, exist_ok=True)
        (root / "placeholders.borrow").write_text(placeholders, encoding="utf-8")
        if manifest is not None:
            (root / "template.yaml").write_text(manifest, encoding="utf-8")
        for relative, payload in (files or {}).items():
            target = content / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(payload, bytes):
                target.write_bytes(payload)
            else:
                target.write_text(payload, encoding="utf-8")
        return root

    return _make


@pytest.fixture()
def fake_cloner_factory() -> Callable[..., FakeCloner]:
    return FakeCloner


@pytest.fixture()
def scripted_prompter_factory() -> Callable[..., ScriptedPrompter]:
    return ScriptedPrompter
