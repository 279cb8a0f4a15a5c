from __future__ import annotations

from pathlib import Path

import pytest

from adduce.config import Config
from adduce.errors import ConfigMalformed, ConfigMissing, DocumentNotFound, UnsupportedFormat, WriteFailed
from adduce.export import export_document

MANIFEST = """
title = "Field Notes"
language = "en"

[main]
[[main.block]]
content_file = "header.md"
format = "md"
"""


def _make_workspace(root: Path, manifest: str | None = MANIFEST) -> Config:
    config = Config(feed_dir=root / "feed")
    config.documents_dir.mkdir(parents=True)
    config.export_dir.mkdir(parents=True)
    if manifest is not None:
        config.manifest_path.write_text(manifest, encoding="utf-8")
    (root / "header.md").write_text("Site header\n", encoding="utf-8")
    return config


def _write_document(config: Config, name: str, text: str) -> Path:
    path = config.document_path(name)
    path.write_text(text, encoding="utf-8")
    return path


def test_export_renders_manifest_blocks_before_document(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path)
    _write_document(config, "hello", "# Hello\n\nFirst post.\n")

    destination = export_document(config, "hello")

    assert destination == config.export_path("hello")
    html = destination.read_text(encoding="utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert '<html lang="en">' in html
    assert "<title>Field Notes</title>" in html
    assert "<h1>Hello</h1>" in html
    assert html.index("Site header") < html.index("<h1>Hello</h1>")


def test_export_without_main_renders_document_only(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path, manifest='title = "Bare"\n')
    _write_document(config, "solo", "# Solo\n")

    html = export_document(config, "solo").read_text(encoding="utf-8")

    assert "<h1>Solo</h1>" in html
    assert "Site header" not in html


def test_export_escapes_manifest_title(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path, manifest='title = "Tips & <Tricks>"\n')
    _write_document(config, "doc", "Body\n")

    html = export_document(config, "doc").read_text(encoding="utf-8")

    assert "<title>Tips &amp; &lt;Tricks&gt;</title>" in html


def test_export_missing_document_writes_nothing(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path)

    with pytest.raises(DocumentNotFound) as excinfo:
        export_document(config, "missing-doc")

    assert excinfo.value.path == config.document_path("missing-doc")
    assert list(config.export_dir.iterdir()) == []


def test_export_requires_manifest(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path, manifest=None)
    _write_document(config, "doc", "# Doc\n")

    with pytest.raises(ConfigMissing):
        export_document(config, "doc")

    assert not config.export_path("doc").exists()


def test_export_rejects_malformed_manifest(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path, manifest="[main\n")
    _write_document(config, "doc", "# Doc\n")

    with pytest.raises(ConfigMalformed):
        export_document(config, "doc")

    assert not config.export_path("doc").exists()


def test_export_block_failure_leaves_no_output(tmp_path: Path) -> None:
    manifest = """
[main]
[[main.block]]
content_file = "header.md"
format = "pdf"
"""
    config = _make_workspace(tmp_path, manifest=manifest)
    _write_document(config, "doc", "# Doc\n")

    with pytest.raises(UnsupportedFormat):
        export_document(config, "doc")

    assert not config.export_path("doc").exists()


def test_export_is_idempotent(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path)
    _write_document(config, "doc", "# Doc\n\n- one\n- two\n")

    first = export_document(config, "doc").read_bytes()
    second = export_document(config, "doc").read_bytes()

    assert first == second


def test_export_reports_write_failure_with_path(tmp_path: Path) -> None:
    config = _make_workspace(tmp_path)
    _write_document(config, "doc", "# Doc\n")
    config.export_dir.rmdir()

    with pytest.raises(WriteFailed) as excinfo:
        export_document(config, "doc")

    assert excinfo.value.path == config.export_path("doc")
