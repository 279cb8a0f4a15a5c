"""Read manifests from TOML files."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from ..errors import ConfigMalformed, ConfigMissing
from .models import Manifest

logger = logging.getLogger(__name__)


def load_manifest(path: str | Path) -> Manifest:
    """Parse the manifest at ``path``.

    Raises ``ConfigMissing`` when the file is absent and ``ConfigMalformed``
    when it cannot be decoded or does not match the manifest shape.
    """
    manifest_path = Path(path)
    if not manifest_path.is_file():
        raise ConfigMissing(
            f"Manifest not found at {manifest_path}. "
            "You must manually create a conf.toml file for your feed.",
            path=manifest_path,
        )

    try:
        text = manifest_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigMalformed(f"Manifest {manifest_path} is not valid UTF-8: {exc}", path=manifest_path) from exc
    except OSError as exc:
        raise ConfigMissing(f"Unable to read manifest {manifest_path}: {exc}", path=manifest_path) from exc

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigMalformed(f"Error parsing manifest {manifest_path}: {exc}", path=manifest_path) from exc

    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as exc:
        raise ConfigMalformed(
            f"Error parsing manifest {manifest_path}: {_describe(exc)}",
            path=manifest_path,
        ) from exc

    logger.debug(
        "Loaded manifest %s with %d section(s)",
        manifest_path,
        len(manifest.main or []),
    )
    return manifest


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    extra = error.error_count() - 1
    suffix = f" (and {extra} more)" if extra else ""
    return f"{location}: {first['msg']}{suffix}"
