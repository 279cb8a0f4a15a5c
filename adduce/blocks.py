"""Render manifest blocks into HTML fragments."""

from __future__ import annotations

import logging
from enum import Enum
from html import escape
from pathlib import Path
from typing import Callable

from .errors import FormatMissing, SourceUnreadable, UnsupportedFormat
from .manifest import Block
from .markdown import render_markdown

logger = logging.getLogger(__name__)


class BlockFormat(str, Enum):
    """Source formats a block may declare."""

    MARKDOWN = "md"
    HTML = "html"
    TEXT = "txt"


def _render_md(source: str) -> str:
    return render_markdown(source)


def _render_html(source: str) -> str:
    return source


def _render_txt(source: str) -> str:
    return f"<pre>{escape(source)}</pre>\n"


_RENDERERS: dict[BlockFormat, Callable[[str], str]] = {
    BlockFormat.MARKDOWN: _render_md,
    BlockFormat.HTML: _render_html,
    BlockFormat.TEXT: _render_txt,
}


def resolve_format(block: Block) -> BlockFormat:
    """Map a block's declared tag to a known format, rejecting anything else."""
    if block.format is None:
        raise FormatMissing(
            f"Block for {block.content_file} does not declare a format.",
            path=block.content_file,
        )
    try:
        return BlockFormat(block.format)
    except ValueError:
        raise UnsupportedFormat(block.format, path=block.content_file) from None


def render_block(block: Block, *, base_dir: Path | None = None) -> str:
    """Render one block to HTML.

    Blocks without a ``content_file`` render as an empty string, provided any
    declared format is known. Relative source paths are resolved against
    ``base_dir`` when it is given.
    """
    if not block.content_file:
        if block.format is not None:
            resolve_format(block)
        return ""

    block_format = resolve_format(block)
    source_path = Path(block.content_file)
    if base_dir is not None and not source_path.is_absolute():
        source_path = base_dir / source_path

    try:
        source = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnreadable(f"Unable to read {source_path}: {exc}", path=source_path) from exc

    logger.debug("Rendering %s block from %s", block_format.value, source_path)
    return _RENDERERS[block_format](source)
