from __future__ import annotations

from pathlib import Path

import pytest

from adduce.blocks import BlockFormat, render_block, resolve_format
from adduce.errors import FormatMissing, SourceUnreadable, UnsupportedFormat
from adduce.manifest import Block


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_markdown_block_renders_heading(tmp_path: Path) -> None:
    source = _write(tmp_path / "hello.md", "# Hello\n")

    html = render_block(Block(content_file=str(source), format="md"))

    assert "<h1>Hello</h1>" in html


def test_markdown_block_renders_common_syntax(tmp_path: Path) -> None:
    source = _write(
        tmp_path / "syntax.md",
        "Some *emphasis* and `code`.\n\n- first\n- second\n\n[Example](https://example.com)\n",
    )

    html = render_block(Block(content_file=str(source), format="md"))

    assert "<em>emphasis</em>" in html
    assert "<code>code</code>" in html
    assert "<li>first</li>" in html
    assert '<a href="https://example.com">Example</a>' in html


def test_unknown_format_is_rejected_without_reading(tmp_path: Path) -> None:
    block = Block(content_file=str(tmp_path / "report.pdf"), format="pdf")

    with pytest.raises(UnsupportedFormat) as excinfo:
        render_block(block)

    assert excinfo.value.tag == "pdf"


def test_unknown_format_is_rejected_even_when_file_exists(tmp_path: Path) -> None:
    source = _write(tmp_path / "notes.rst", "Title\n=====\n")

    with pytest.raises(UnsupportedFormat):
        render_block(Block(content_file=str(source), format="rst"))


def test_missing_format_fails(tmp_path: Path) -> None:
    source = _write(tmp_path / "doc.md", "# Doc\n")

    with pytest.raises(FormatMissing):
        render_block(Block(content_file=str(source)))


def test_block_without_content_file_renders_empty() -> None:
    assert render_block(Block(format="md")) == ""
    assert render_block(Block()) == ""


def test_unknown_format_without_content_file_still_fails() -> None:
    with pytest.raises(UnsupportedFormat) as excinfo:
        render_block(Block(format="pdf"))

    assert excinfo.value.tag == "pdf"


def test_unreadable_source_fails(tmp_path: Path) -> None:
    with pytest.raises(SourceUnreadable) as excinfo:
        render_block(Block(content_file=str(tmp_path / "absent.md"), format="md"))

    assert excinfo.value.path == tmp_path / "absent.md"


def test_text_block_is_escaped(tmp_path: Path) -> None:
    source = _write(tmp_path / "raw.txt", "<b>bold?</b> & more")

    html = render_block(Block(content_file=str(source), format="txt"))

    assert html == "<pre>&lt;b&gt;bold?&lt;/b&gt; &amp; more</pre>\n"


def test_html_block_is_included_verbatim(tmp_path: Path) -> None:
    source = _write(tmp_path / "nav.html", '<nav><a href="/">Home</a></nav>\n')

    assert render_block(Block(content_file=str(source), format="html")) == '<nav><a href="/">Home</a></nav>\n'


def test_relative_source_resolves_against_base_dir(tmp_path: Path) -> None:
    _write(tmp_path / "intro.md", "## Intro\n")

    html = render_block(Block(content_file="intro.md", format="md"), base_dir=tmp_path)

    assert "<h2>Intro</h2>" in html


def test_resolve_format_maps_known_tags() -> None:
    assert resolve_format(Block(content_file="a.md", format="md")) is BlockFormat.MARKDOWN
    assert resolve_format(Block(content_file="a.txt", format="txt")) is BlockFormat.TEXT
