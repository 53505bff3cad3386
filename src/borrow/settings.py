"""Runtime settings for the borrow CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

from borrow import __version__

HOME_ENV = "BORROW_HOME"


@dataclass(frozen=True)
class RuntimeSettings:
    data_dir: Path
    cli_version: str = __version__

    @property
    def start_dir(self) -> Path:
        return self.data_dir / "start"

    @property
    def templates_dir(self) -> Path:
        return self.start_dir / "templates"

    @property
    def git_dir(self) -> Path:
        return self.start_dir / "git"

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"


def _default_data_dir() -> Path:
    if env_home := os.environ.get(HOME_ENV):
        return Path(env_home).expanduser()
    return Path(user_data_dir("borrow", appauthor=False))


def load_settings(data_dir: Path | None = None) -> RuntimeSettings:
    base = data_dir.expanduser() if data_dir is not None else _default_data_dir()
    return RuntimeSettings(data_dir=base.resolve())
