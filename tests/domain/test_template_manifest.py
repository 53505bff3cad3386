from __future__ import annotations

from pathlib import Path

import pytest

from borrow.domain.errors import MissingContentError
from borrow.domain.template import CachedTemplate, TemplateManifest, rendered_name


def test_rendered_name_strips_template_suffix() -> None:
    assert rendered_name("greeting.txt.template") == "greeting.txt"
    assert rendered_name("Makefile.template") == "Makefile"
    assert rendered_name("notes.txt") is None
    assert rendered_name(".template") is None


def test_manifest_is_optional(tmp_path: Path) -> None:
    template = CachedTemplate(root_dir=tmp_path / "starter")
    assert template.manifest() == TemplateManifest()


def test_manifest_fields_are_read_from_yaml(tmp_path: Path) -> None:
    root = tmp_path / "starter"
    root.mkdir()
    (root / "template.yaml").write_text("name: Starter\ndescription: Minimal app\nversion: 1.2\n", encoding="utf-8")
    manifest = CachedTemplate(root_dir=root).manifest()
    assert manifest == TemplateManifest(name="Starter", description="Minimal app", version="1.2")


def test_malformed_manifest_is_ignored(tmp_path: Path) -> None:
    root = tmp_path / "starter"
    root.mkdir()
    (root / "template.yaml").write_text("name: [unterminated\n", encoding="utf-8")
    assert CachedTemplate(root_dir=root).manifest() == TemplateManifest()


def test_validate_requires_content_dir(tmp_path: Path) -> None:
    template = CachedTemplate(root_dir=tmp_path / "starter")
    with pytest.raises(MissingContentError):
        template.validate()
    template.content_dir.mkdir(parents=True)
    template.validate()


def test_undecodable_manifest_is_ignored(tmp_path: Path) -> None:
    root = tmp_path / "starter"
    root.mkdir()
    (root / "template.yaml").write_bytes(b"name: \xff\xfe\n")
    assert CachedTemplate(root_dir=root).manifest() == TemplateManifest()
