"""Syndication feed generation for Adduce workspaces."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from typing import Sequence

from .config import Config
from .errors import DocumentNotFound, FeedFieldsMissing, SourceUnreadable, WriteFailed
from .manifest import Manifest, load_manifest

logger = logging.getLogger(__name__)

# Optional channel elements in RSS 2.0 order, mapped to manifest fields.
_OPTIONAL_CHANNEL_FIELDS = (
    ("language", "language"),
    ("copyright", "copyright"),
    ("managingEditor", "managing_editor"),
    ("webMaster", "webmaster"),
)

# Characters outside the XML 1.0 Char production, not even allowed as references.
_INVALID_XML_CHARS = re.compile(r"[^\t\n\r\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


@dataclass(frozen=True, slots=True)
class FeedEntry:
    """Feed item derived from one source document."""

    title: str
    description: str


@dataclass(slots=True)
class FeedChannel:
    """Channel metadata plus entries, ready for serialization."""

    title: str
    link: str
    description: str
    generator: str
    optional: list[tuple[str, str]] = field(default_factory=list)
    ttl: str | None = None
    entries: list[FeedEntry] = field(default_factory=list)


def synthesize_feed(config: Config) -> Path:
    """Build the RSS feed for every document and write it to the export directory."""
    entries = collect_entries(config.documents_dir)
    manifest = load_manifest(config.manifest_path)
    channel = build_channel(manifest, entries, generator=config.generator, manifest_path=config.manifest_path)
    xml_text = render_rss(channel)

    destination = config.feed_path
    try:
        destination.write_text(xml_text, encoding="utf-8")
    except OSError as exc:
        raise WriteFailed(f"Failed to write RSS feed to {destination}: {exc}", path=destination) from exc

    logger.info("Wrote feed with %d entries to %s", len(entries), destination)
    return destination


def collect_entries(documents_dir: Path) -> list[FeedEntry]:
    """Create one entry per file, in directory listing order.

    Descriptions carry the raw, unrendered document text.
    """
    try:
        paths = list(documents_dir.iterdir())
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise DocumentNotFound(
            f"Documents directory not found: {documents_dir}. Run 'adduce establish' first.",
            path=documents_dir,
        ) from exc

    entries: list[FeedEntry] = []
    for path in paths:
        if path.is_dir():
            logger.debug("Skipping directory %s", path)
            continue
        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnreadable(f"Unable to read {path}: {exc}", path=path) from exc
        invalid = _INVALID_XML_CHARS.search(content)
        if invalid is not None:
            raise SourceUnreadable(
                f"Unable to include {path} in the feed: character {invalid.group()!r} "
                f"at offset {invalid.start()} is not allowed in XML.",
                path=path,
            )
        entries.append(FeedEntry(title=path.name, description=content))
    return entries


def build_channel(
    manifest: Manifest,
    entries: Sequence[FeedEntry],
    *,
    generator: str,
    manifest_path: Path | None = None,
) -> FeedChannel:
    """Validate required manifest fields and assemble channel metadata.

    Every missing required field is reported in a single ``FeedFieldsMissing``.
    """
    missing = manifest.missing_feed_fields()
    if missing:
        raise FeedFieldsMissing(missing, path=manifest_path)

    optional: list[tuple[str, str]] = []
    for element, attribute in _OPTIONAL_CHANNEL_FIELDS:
        value = getattr(manifest, attribute)
        if value is not None:
            optional.append((element, value))

    return FeedChannel(
        title=manifest.title or "",
        link=manifest.link or "",
        description=manifest.description or "",
        generator=generator,
        optional=optional,
        ttl=manifest.ttl,
        entries=list(entries),
    )


def render_rss(channel: FeedChannel) -> str:
    parts = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<rss version="2.0">',
        "  <channel>",
        f"    <title>{_xml_text(channel.title)}</title>",
        f"    <link>{_xml_text(channel.link)}</link>",
        f"    <description>{_xml_text(channel.description)}</description>",
    ]
    for element, value in channel.optional:
        parts.append(f"    <{element}>{_xml_text(value)}</{element}>")
    parts.append(f"    <generator>{_xml_text(channel.generator)}</generator>")
    if channel.ttl is not None:
        parts.append(f"    <ttl>{_xml_text(channel.ttl)}</ttl>")

    for entry in channel.entries:
        parts.extend(
            [
                "    <item>",
                f"      <title>{_xml_text(entry.title)}</title>",
                f"      <description>{_xml_text(entry.description)}</description>",
                "    </item>",
            ]
        )

    parts.extend(["  </channel>", "</rss>"])
    return "\n".join(parts) + "\n"


def _xml_text(value: str) -> str:
    # Parsers normalize bare carriage returns; encode them to keep content exact.
    return escape(value).replace("\r", "&#13;")
