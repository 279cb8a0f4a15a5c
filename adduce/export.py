"""Render source documents into standalone HTML pages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from markupsafe import Markup

from .blocks import BlockFormat, render_block
from .config import Config
from .errors import DocumentNotFound, WriteFailed
from .manifest import Block, Manifest, load_manifest, with_appended_block
from .templating import PAGE_TEMPLATE, get_environment

logger = logging.getLogger(__name__)


def export_document(config: Config, name: str) -> Path:
    """Render document ``name`` through the manifest and write its HTML page.

    The page is only written once every block has rendered, so a failing
    block leaves any previous export untouched.
    """
    document_path = config.document_path(name)
    if not document_path.is_file():
        raise DocumentNotFound(
            f"Input file '{name}' does not exist. Please create it first.",
            path=document_path,
        )

    manifest = load_manifest(config.manifest_path)
    manifest = with_appended_block(
        manifest,
        Block(content_file=str(document_path), format=BlockFormat.MARKDOWN.value),
    )

    html_text = render_page(manifest, base_dir=config.root_dir, generator=config.generator)

    destination = config.export_path(name)
    try:
        destination.write_text(html_text, encoding="utf-8")
    except OSError as exc:
        raise WriteFailed(f"Failed to export {name} to {destination}: {exc}", path=destination) from exc

    logger.info("Exported %s to %s", name, destination)
    return destination


def render_sections(manifest: Manifest, *, base_dir: Path | None = None) -> list[str]:
    """Render each section's blocks in order, one HTML string per section."""
    rendered: list[str] = []
    for section in manifest.main or []:
        fragments = [render_block(block, base_dir=base_dir) for block in section.blocks]
        rendered.append("".join(fragments))
    return rendered


def render_page(manifest: Manifest, *, base_dir: Path | None = None, generator: str = "Adduce") -> str:
    """Render a complete HTML document from the manifest's sections."""
    sections = render_sections(manifest, base_dir=base_dir)
    return _render_template(manifest, sections, generator)


def _render_template(manifest: Manifest, sections: Sequence[str], generator: str) -> str:
    template = get_environment().get_template(PAGE_TEMPLATE)
    return template.render(
        title=manifest.title,
        description=manifest.description,
        language=manifest.language,
        generator=generator,
        sections=[Markup(section) for section in sections],
    ) + "\n"
