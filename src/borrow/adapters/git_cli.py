"""Git cloner backed by the ``git`` executable."""

from __future__ import annotations

import subprocess
from pathlib import Path

from borrow.ports.git import CloneDestinationExistsError, CloneError, GitCloner

_EXISTS_MARKER = "already exists and is not an empty directory"


class SubprocessGitCloner(GitCloner):
    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    def shallow_clone(self, url: str, destination: Path, *, branch: str) -> None:
        if destination.exists() and any(destination.iterdir()):
            raise CloneDestinationExistsError(f"destination path '{destination}' {_EXISTS_MARKER}")
        destination.parent.mkdir(parents=True, exist_ok=True)
        clone_cmd = [
            self._executable,
            "clone",
            "--depth",
            "1",
            "--no-tags",
            "--branch",
            branch,
            url,
            str(destination),
        ]
        try:
            subprocess.run(clone_cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except FileNotFoundError as exc:
            raise CloneError(f"git executable not found: {self._executable}") from exc
        except subprocess.CalledProcessError as exc:
            message = exc.stderr.decode(errors="replace").strip() or exc.stdout.decode(errors="replace").strip()
            if _EXISTS_MARKER in message:
                raise CloneDestinationExistsError(message) from exc
            raise CloneError(f"Failed to clone {url} ({branch}): {message}") from exc
