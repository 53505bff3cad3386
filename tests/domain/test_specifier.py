from __future__ import annotations

from pathlib import Path

import pytest

from borrow.domain.errors import InvalidSpecifierError, UnsupportedSpecifierError
from borrow.domain.specifier import LocalSpecifier, RemoteSpecifier, resolve_specifier


def test_local_reference_uses_last_path_segment() -> None:
    spec = resolve_specifier("local:/home/dev/templates/rust-cli")
    assert isinstance(spec, LocalSpecifier)
    assert spec.name == "rust-cli"
    assert spec.path == Path("/home/dev/templates/rust-cli")


def test_local_reference_ignores_trailing_separator() -> None:
    spec = resolve_specifier("local:templates/web/")
    assert spec.name == "web"


@pytest.mark.parametrize("reference", ["local:", "local:/"])
def test_local_reference_without_segments_is_invalid(reference: str) -> None:
    with pytest.raises(InvalidSpecifierError):
        resolve_specifier(reference)


def test_github_reference_is_not_supported() -> None:
    with pytest.raises(UnsupportedSpecifierError):
        resolve_specifier("gh:someone/repo")


def test_registry_reference_defaults_to_v1_branch() -> None:
    spec = resolve_specifier("rust-cli")
    assert isinstance(spec, RemoteSpecifier)
    assert spec.owner == "borrowdev"
    assert spec.repo == "registry"
    assert spec.branch == "v1"
    assert spec.subdir == "rust-cli"
    assert spec.name == "borrowdev-registry-v1-rust-cli"


def test_registry_reference_with_branch() -> None:
    spec = resolve_specifier("next-app@canary")
    assert spec.name == "borrowdev-registry-canary-next-app"
    assert spec.clone_url == "https://github.com/borrowdev/registry.git"


def test_registry_branch_keeps_everything_after_first_at() -> None:
    spec = resolve_specifier("api@release@2")
    assert isinstance(spec, RemoteSpecifier)
    assert spec.subdir == "api"
    assert spec.branch == "release@2"


@pytest.mark.parametrize("reference", ["", "@main", "api@"])
def test_registry_reference_requires_name_and_branch(reference: str) -> None:
    with pytest.raises(InvalidSpecifierError):
        resolve_specifier(reference)


def test_distinct_registry_entries_have_distinct_names() -> None:
    names = {
        resolve_specifier(reference).name
        for reference in ("api", "api@v2", "web", "web@v2")
    }
    assert len(names) == 4


@pytest.mark.parametrize("reference", ["local:foo/..", "local:..", "local:/tmp/.."])
def test_local_reference_naming_a_parent_is_invalid(reference: str) -> None:
    with pytest.raises(InvalidSpecifierError):
        resolve_specifier(reference)


@pytest.mark.parametrize(
    "reference",
    ["x/../../../../victim", "../victim", "/etc", "api@../../x", "api@v1/../..", "api/./..", "api@.."],
)
def test_registry_reference_escaping_the_cache_is_invalid(reference: str) -> None:
    with pytest.raises(InvalidSpecifierError, match="escapes the cache"):
        resolve_specifier(reference)


def test_registry_reference_with_nested_subdir_is_allowed() -> None:
    spec = resolve_specifier("frontend/react@v2")
    assert isinstance(spec, RemoteSpecifier)
    assert spec.subdir == "frontend/react"
    assert spec.name == "borrowdev-registry-v2-frontend/react"
