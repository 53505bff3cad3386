"""Domain exports for the start pipeline."""

from .errors import (
    BorrowError,
    FetchError,
    InvalidSpecifierError,
    InvalidTemplateError,
    MissingContentError,
    MissingSourceError,
    MissingSubdirectoryError,
    MissingValueError,
    NotApplicableError,
    UnsupportedSpecifierError,
)
from .placeholders import PlaceholderDefinition, PlaceholderValue, parse_placeholders
from .specifier import LocalSpecifier, RemoteSpecifier, TemplateSpecifier, resolve_specifier
from .template import CachedTemplate, TemplateManifest

__all__ = [
    "BorrowError",
    "CachedTemplate",
    "FetchError",
    "InvalidSpecifierError",
    "InvalidTemplateError",
    "LocalSpecifier",
    "MissingContentError",
    "MissingSourceError",
    "MissingSubdirectoryError",
    "MissingValueError",
    "NotApplicableError",
    "PlaceholderDefinition",
    "PlaceholderValue",
    "RemoteSpecifier",
    "TemplateManifest",
    "TemplateSpecifier",
    "UnsupportedSpecifierError",
    "parse_placeholders",
    "resolve_specifier",
]
