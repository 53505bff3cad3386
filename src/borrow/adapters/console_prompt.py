"""Prompter implementations for interactive and unattended runs."""

from __future__ import annotations

from typing import Callable

from borrow.domain.errors import MissingValueError
from borrow.ports.prompt import Prompter

_YES = {"y", "yes", "true", "1"}
_NO = {"n", "no", "false", "0"}


class ConsolePrompter(Prompter):
    """Ask on the terminal; an empty answer keeps the default."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        self._input = input_func
        self._output = output_func

    def ask(self, key: str, message: str, default: str | None = None) -> str:
        suffix = f" [{default}]" if default is not None else ""
        while True:
            response = self._input(f"{message}{suffix}: ").strip()
            if response:
                return response
            if default is not None:
                return default
            self._output(f"A value for {key} is required.")

    def confirm(self, key: str, message: str, default: bool) -> bool:
        suffix = " [Y/n]" if default else " [y/N]"
        while True:
            response = self._input(f"{message}{suffix}: ").strip().lower()
            if not response:
                return default
            if response in _YES:
                return True
            if response in _NO:
                return False
            self._output("Please answer yes or no.")


class DefaultsPrompter(Prompter):
    """Never asks: every placeholder takes its declared default."""

    def ask(self, key: str, message: str, default: str | None = None) -> str:
        if default is None:
            raise MissingValueError(
                f"Placeholder {key} has no default; pass --set {key}=VALUE or run interactively"
            )
        return default

    def confirm(self, key: str, message: str, default: bool) -> bool:
        return default
