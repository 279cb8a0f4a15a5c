"""Exceptions raised by Adduce operations."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class AdduceError(RuntimeError):
    """Base class for recoverable failures reported at the command boundary."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ConfigMissing(AdduceError):
    """Raised when the manifest file does not exist."""


class ConfigMalformed(AdduceError):
    """Raised when the manifest exists but cannot be parsed into the expected shape."""


class FeedFieldsMissing(ConfigMalformed):
    """Raised when the manifest lacks fields required to build a feed."""

    def __init__(self, fields: Sequence[str], *, path: Path | str | None = None) -> None:
        self.fields = list(fields)
        super().__init__(
            f"Missing required fields: {', '.join(self.fields)}.",
            path=path,
        )


class DocumentNotFound(AdduceError):
    """Raised when a requested source document does not exist."""


class SourceUnreadable(AdduceError):
    """Raised when a block or document source cannot be read."""


class FormatMissing(AdduceError):
    """Raised when a block references content without declaring its format."""


class UnsupportedFormat(AdduceError):
    """Raised when a block declares a format tag with no renderer."""

    def __init__(self, tag: str, *, path: Path | str | None = None) -> None:
        self.tag = tag
        super().__init__(f"Unsupported block format: '{tag}'", path=path)


class WriteFailed(AdduceError):
    """Raised when rendered output cannot be persisted."""


class WorkspaceError(AdduceError):
    """Raised when a workspace file operation cannot continue."""
