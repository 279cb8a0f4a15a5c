"""Pydantic models describing the feed manifest."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

FEED_REQUIRED_FIELDS = ("title", "link", "description")


class Block(BaseModel):
    """Typed reference to a source file, the unit of page composition."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    content_file: Optional[str] = Field(default=None, description="Path to the source file.")
    format: Optional[str] = Field(
        default=None,
        description="Tag describing how to interpret the source (e.g. 'md').",
    )


class Section(BaseModel):
    """Ordered group of blocks rendered in sequence."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    blocks: list[Block] = Field(default_factory=list, alias="block")

    @field_validator("blocks", mode="before")
    def _wrap_single_block(cls, value: Any) -> Any:
        # A lone [main.block] table decodes as a mapping rather than an array.
        if isinstance(value, dict):
            return [value]
        return value


class Manifest(BaseModel):
    """Feed metadata plus the ordered sections composing exported pages."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    language: Optional[str] = Field(default=None)
    copyright: Optional[str] = Field(default=None)
    managing_editor: Optional[str] = Field(default=None)
    webmaster: Optional[str] = Field(default=None)
    ttl: Optional[str] = Field(default=None, description="Minutes a feed may be cached.")
    main: Optional[list[Section]] = Field(default=None)

    @field_validator("ttl", mode="before")
    def _ttl_as_text(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("ttl must be a whole number of minutes")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("main", mode="before")
    def _wrap_single_section(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return [value]
        return value

    @property
    def blocks(self) -> list[Block]:
        """All blocks across sections, in render order."""
        return [block for section in self.main or [] for block in section.blocks]

    def missing_feed_fields(self) -> list[str]:
        """Names of the feed-required fields that are absent (empty strings count as present)."""
        return [name for name in FEED_REQUIRED_FIELDS if getattr(self, name) is None]


def with_appended_block(manifest: Manifest, block: Block) -> Manifest:
    """Return a copy of ``manifest`` whose last section ends with ``block``.

    A manifest without sections gains a single section holding only ``block``.
    The input manifest and its sections are left untouched.
    """
    sections = list(manifest.main or [])
    if sections:
        last = sections[-1]
        sections[-1] = last.model_copy(update={"blocks": [*last.blocks, block]})
    else:
        sections.append(Section(blocks=[block]))
    return manifest.model_copy(update={"main": sections})
