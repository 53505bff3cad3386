from __future__ import annotations

from pathlib import Path

import pytest

from borrow.cli import main as cli_main
from borrow.ports.git import CloneDestinationExistsError, GitCloner
from borrow.settings import RuntimeSettings

REGISTRY_FILES = {
    "rust-cli/template.yaml": "name: Rust CLI\ndescription: Command-line app in Rust\nversion: '1.0'\n",
    "rust-cli/placeholders.borrow": "CRATE=hello - Crate name\nWITH_CI=true - Add CI workflow\n",
    "rust-cli/content/Cargo.toml.template": '[package]\nname = "%%(CRATE)%%"\n',
    "rust-cli/content/ci.txt.template": "ci=%%(WITH_CI)%%\n",
    "rust-cli/content/LICENSE": "MIT\n",
}


class RegistryCloner(GitCloner):
    def __init__(self) -> None:
        self.calls: list[tuple[str, Path, str]] = []

    def shallow_clone(self, url: str, destination: Path, *, branch: str) -> None:
        self.calls.append((url, destination, branch))
        if destination.exists() and any(destination.iterdir()):
            raise CloneDestinationExistsError(str(destination))
        for relative, content in REGISTRY_FILES.items():
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")


@pytest.fixture()
def runtime_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RuntimeSettings:
    """Isolated data directory for CLI runs."""
    settings = RuntimeSettings(data_dir=tmp_path / "runtime")
    monkeypatch.delenv("BORROW_TELEMETRY", raising=False)
    monkeypatch.setattr(cli_main, "SETTINGS", settings, raising=False)
    return settings


@pytest.fixture()
def registry_cloner(monkeypatch: pytest.MonkeyPatch) -> RegistryCloner:
    cloner = RegistryCloner()
    monkeypatch.setattr(cli_main, "SubprocessGitCloner", lambda: cloner)
    return cloner


@pytest.fixture()
def local_template(tmp_path: Path) -> Path:
    root = tmp_path / "templates" / "hello"
    (root / "content" / "src").mkdir(parents=True)
    (root / "placeholders.borrow").write_text("NAME=World - Who to greet\n", encoding="utf-8")
    (root / "content" / "greeting.txt.template").write_text("Hello, %%(NAME)%%!", encoding="utf-8")
    (root / "content" / "src" / "data.bin").write_bytes(b"\x00\x01")
    return root
