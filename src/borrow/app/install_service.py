"""Render a cached template into a target directory."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from borrow.app.tree_sync import FileFailure, walk_tree
from borrow.domain.placeholders import PlaceholderDefinition, PlaceholderValue, token_for
from borrow.domain.template import CachedTemplate, rendered_name
from borrow.ports.prompt import Prompter


@dataclass
class InstallReport:
    output_dir: Path
    rendered: list[Path] = field(default_factory=list)
    copied: list[Path] = field(default_factory=list)
    symlinks: list[Path] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> dict[str, int]:
        return {
            "rendered": len(self.rendered),
            "copied": len(self.copied),
            "symlinks": len(self.symlinks),
            "failures": len(self.failures),
        }


def collect_values(
    definitions: Mapping[str, PlaceholderDefinition],
    prompter: Prompter,
    overrides: Mapping[str, str] | None = None,
) -> dict[str, PlaceholderValue]:
    overrides = overrides or {}
    values: dict[str, PlaceholderValue] = {}
    for key, definition in definitions.items():
        if key in overrides:
            value = overrides[key]
        elif definition.is_boolean:
            answer = prompter.confirm(key, definition.prompt_message, definition.default_value == "true")
            value = "true" if answer else "false"
        else:
            value = prompter.ask(key, definition.prompt_message, definition.default_value)
        values[key] = PlaceholderValue.from_definition(definition, value)
    return values


def render_line(line: str, values: Mapping[str, PlaceholderValue]) -> str:
    for key, placeholder in values.items():
        line = line.replace(token_for(key), placeholder.value)
    return line


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def render_file(source: Path, destination: Path, values: Mapping[str, PlaceholderValue]) -> None:
    """Write ``source`` to ``destination`` with tokens substituted, one ``\\n`` per line.

    Lines end at ``\\n`` only; a lone ``\\r`` stays part of the line. The source is
    decoded in full before ``destination`` is opened.
    """
    with source.open("r", encoding="utf-8", newline="\n") as reader:
        lines = reader.readlines()
    with destination.open("w", encoding="utf-8", newline="") as writer:
        for line in lines:
            writer.write(render_line(_strip_line_ending(line), values))
            writer.write("\n")


class InstallService:
    def install(
        self,
        template: CachedTemplate,
        target_dir: Path,
        values: Mapping[str, PlaceholderValue],
    ) -> InstallReport:
        template.validate()
        target_dir.mkdir(parents=True, exist_ok=True)
        source_dir = template.content_dir
        output_dir = target_dir / template.name
        report = InstallReport(output_dir=output_dir)

        def _record(path: Path, exc: OSError) -> None:
            report.failures.append(FileFailure(path=path, reason=exc.strerror or str(exc)))

        for path in walk_tree(source_dir, on_error=_record):
            if path.is_symlink():
                report.symlinks.append(path)
                continue
            if not path.is_file():
                continue
            relative = path.relative_to(source_dir)
            output_name = rendered_name(path.name)
            destination = output_dir / relative.parent / (output_name or path.name)
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                if output_name is not None:
                    render_file(path, destination, values)
                    report.rendered.append(destination)
                else:
                    shutil.copyfile(path, destination)
                    report.copied.append(destination)
            except (OSError, UnicodeDecodeError) as exc:
                reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
                report.failures.append(FileFailure(path=path, reason=reason))
        return report
