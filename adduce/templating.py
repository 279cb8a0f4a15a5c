"""Jinja2 environment for Adduce page templates."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
PAGE_TEMPLATE = "page.html.j2"


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return the shared environment; HTML templates are autoescaped."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
    )
