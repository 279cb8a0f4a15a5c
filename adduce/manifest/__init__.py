"""Manifest data structures and helpers."""

from .loader import load_manifest
from .models import FEED_REQUIRED_FIELDS, Block, Manifest, Section, with_appended_block

__all__ = [
    "FEED_REQUIRED_FIELDS",
    "Block",
    "Manifest",
    "Section",
    "load_manifest",
    "with_appended_block",
]
