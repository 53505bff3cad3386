"""Exception hierarchy shared by the start pipeline."""

from __future__ import annotations


class BorrowError(RuntimeError):
    """Base class for pipeline failures reported to the user."""


class InvalidSpecifierError(BorrowError, ValueError):
    """Raised when a template reference cannot be parsed."""


class UnsupportedSpecifierError(BorrowError):
    """Raised for reference forms that are recognised but not implemented."""


class NotApplicableError(BorrowError):
    """Raised when an operation does not apply to the given specifier kind."""


class FetchError(BorrowError):
    """Raised when template content cannot be obtained."""


class MissingSourceError(FetchError):
    """Raised when a local template path does not exist."""


class MissingSubdirectoryError(FetchError):
    """Raised when the cloned registry has no directory for the template."""


class MissingContentError(BorrowError):
    """Raised when a cached template has no content tree."""


class MissingValueError(BorrowError):
    """Raised when a placeholder cannot be resolved without prompting."""


class InvalidTemplateError(BorrowError):
    """Raised when a cached template file cannot be read as UTF-8 text."""
