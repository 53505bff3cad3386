"""Port definitions for fetching remote template repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

DEFAULT_CLONE_BRANCH = "main"


class CloneError(RuntimeError):
    pass


class CloneDestinationExistsError(CloneError):
    """The clone destination is already populated by an earlier fetch."""


class GitCloner(ABC):
    @abstractmethod
    def shallow_clone(self, url: str, destination: Path, *, branch: str) -> None:
        """Clone ``url`` at ``branch`` with depth 1 and no tags into ``destination``."""
