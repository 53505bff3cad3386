"""Port definitions for collecting placeholder values from the user."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Prompter(ABC):
    @abstractmethod
    def ask(self, key: str, message: str, default: str | None = None) -> str:
        """Return free-text input for ``key``, falling back to ``default``."""

    @abstractmethod
    def confirm(self, key: str, message: str, default: bool) -> bool:
        """Return a yes/no answer for ``key``."""
