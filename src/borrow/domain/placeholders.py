"""Placeholder definitions declared by a template.

A template declares its placeholders in ``placeholders.borrow``, one per line::

    PROJECT_NAME=my-app - Name of the generated project
    USE_DOCKER=false - Generate a Dockerfile
    AUTHOR - Who maintains the project
    LICENSE=MIT

Every occurrence of ``%%(KEY)%%`` inside a ``*.template`` file is replaced with
the value collected for ``KEY``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from borrow.domain.errors import InvalidTemplateError

PLACEHOLDERS_FILENAME = "placeholders.borrow"
DESCRIPTION_SEPARATOR = " - "
BOOLEAN_DEFAULTS = frozenset({"true", "false"})


@dataclass(frozen=True)
class PlaceholderDefinition:
    key: str
    default_value: str | None = None
    description: str | None = None

    @property
    def is_boolean(self) -> bool:
        return self.default_value in BOOLEAN_DEFAULTS

    @property
    def prompt_message(self) -> str:
        if self.description:
            return self.description
        return f"Enter value for placeholder '{self.key}'"


@dataclass(frozen=True)
class PlaceholderValue:
    key: str
    value: str
    default_value: str | None = None
    description: str | None = None

    @classmethod
    def from_definition(cls, definition: PlaceholderDefinition, value: str) -> "PlaceholderValue":
        return cls(
            key=definition.key,
            value=value,
            default_value=definition.default_value,
            description=definition.description,
        )


def token_for(key: str) -> str:
    return f"%%({key})%%"


def parse_placeholder_line(line: str) -> PlaceholderDefinition | None:
    """Parse ``KEY[=DEFAULT][ - DESCRIPTION]``; blank or keyless lines yield ``None``."""
    if not line.strip():
        return None

    key_part, has_default, rest = line.partition("=")
    key = key_part.split(DESCRIPTION_SEPARATOR, 1)[0].strip()
    if not key:
        return None

    # Lines with several separators are ambiguous and carry no description.
    description: str | None = None
    if line.count(DESCRIPTION_SEPARATOR) == 1:
        description = line.split(DESCRIPTION_SEPARATOR, 1)[1].strip()

    default_value: str | None = None
    if has_default:
        default_value = rest.split(DESCRIPTION_SEPARATOR, 1)[0].strip()

    return PlaceholderDefinition(key=key, default_value=default_value, description=description)


def parse_placeholder_text(text: str) -> dict[str, PlaceholderDefinition]:
    definitions: dict[str, PlaceholderDefinition] = {}
    for line in text.splitlines():
        definition = parse_placeholder_line(line)
        if definition is None:
            continue
        # Last definition of a key wins.
        definitions.pop(definition.key, None)
        definitions[definition.key] = definition
    return definitions


def parse_placeholders(path: Path) -> dict[str, PlaceholderDefinition]:
    """Read a definitions file; a template without one has no placeholders."""
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidTemplateError(f"Cannot read placeholder definitions {path}: {exc}") from exc
    return parse_placeholder_text(text)
