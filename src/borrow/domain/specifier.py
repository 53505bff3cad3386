"""Template references and their structured specifiers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath, Path
from typing import Union

from borrow.domain.errors import InvalidSpecifierError, UnsupportedSpecifierError

LOCAL_PREFIX = "local:"
GITHUB_PREFIX = "gh:"
REGISTRY_OWNER = "borrowdev"
REGISTRY_REPO = "registry"
REGISTRY_DEFAULT_BRANCH = "v1"


@dataclass(frozen=True)
class LocalSpecifier:
    name: str
    path: Path

    def describe(self) -> str:
        return f"local:{self.path}"


@dataclass(frozen=True)
class RemoteSpecifier:
    name: str
    owner: str
    repo: str
    branch: str | None = None
    subdir: str | None = None

    @classmethod
    def for_registry(cls, subdir: str, branch: str) -> "RemoteSpecifier":
        return cls(
            name=remote_name(REGISTRY_OWNER, REGISTRY_REPO, branch, subdir),
            owner=REGISTRY_OWNER,
            repo=REGISTRY_REPO,
            branch=branch,
            subdir=subdir,
        )

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}.git"

    def describe(self) -> str:
        return f"{self.owner}/{self.repo}@{self.branch or '<default>'}:{self.subdir or '/'}"


TemplateSpecifier = Union[LocalSpecifier, RemoteSpecifier]


def remote_name(owner: str, repo: str, branch: str, subdir: str) -> str:
    """Cache key for a remote template; also used for its git checkout."""
    return f"{owner}-{repo}-{branch}-{subdir}"


_UNSAFE_SEGMENTS = frozenset({".", ".."})


def _escapes_directory(value: str) -> bool:
    """True when ``value`` used as a path could leave the directory it is joined to."""
    if value.startswith(("/", "\\")) or PurePath(value).is_absolute():
        return True
    return any(segment in _UNSAFE_SEGMENTS for segment in value.replace("\\", "/").split("/"))


def resolve_specifier(reference: str) -> TemplateSpecifier:
    """Parse a template reference string.

    Accepted forms:

    - ``local:<path>``: a template directory on disk, named after its last segment.
    - ``gh:<...>``: reserved for arbitrary GitHub repositories, not supported yet.
    - ``<subdir>[@<branch>]``: an entry of the borrowdev registry, branch ``v1`` by default.

    Names that would resolve outside the cache directory are rejected.
    """
    if reference.startswith(LOCAL_PREFIX):
        raw_path = reference[len(LOCAL_PREFIX):]
        name = PurePath(raw_path).name if raw_path else ""
        if not name or name in _UNSAFE_SEGMENTS:
            raise InvalidSpecifierError(f"Local template path has no name: {reference!r}")
        return LocalSpecifier(name=name, path=Path(raw_path))
    if reference.startswith(GITHUB_PREFIX):
        raise UnsupportedSpecifierError("GitHub templates are not yet supported")

    subdir, sep, branch = reference.partition("@")
    if not sep:
        branch = REGISTRY_DEFAULT_BRANCH
    if not subdir:
        raise InvalidSpecifierError(f"Registry template reference has no template name: {reference!r}")
    if not branch:
        raise InvalidSpecifierError(f"Registry template reference has an empty branch: {reference!r}")
    spec = RemoteSpecifier.for_registry(subdir, branch)
    if _escapes_directory(subdir) or _escapes_directory(branch) or _escapes_directory(spec.name):
        raise InvalidSpecifierError(f"Registry template reference escapes the cache: {reference!r}")
    return spec
