from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "adduce.yml"


class Config(BaseModel):
    """Workspace layout and tool settings."""

    feed_dir: Path = Field(default=Path("feed"), description="Root directory of the feed workspace.")
    documents_subdir: str = Field(
        default="documents",
        description="Directory (relative to feed_dir) holding source documents.",
    )
    export_subdir: str = Field(
        default="export",
        description="Directory (relative to feed_dir) receiving rendered pages and the feed.",
    )
    manifest_filename: str = Field(
        default="conf.toml",
        description="Manifest file (relative to feed_dir) describing feed metadata and page blocks.",
    )
    document_suffix: str = Field(default=".md", description="Extension appended to document names.")
    feed_filename: str = Field(default="feed.xml")
    generator: str = Field(default="Adduce", description="Generator identity written into feeds.")
    editor: str | None = Field(
        default=None,
        description="Editor command used by 'edit'; falls back to $EDITOR when unset.",
    )

    @field_validator("feed_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("document_suffix")
    def _normalize_suffix(cls, value: str) -> str:
        text = value.strip()
        if text and not text.startswith("."):
            text = f".{text}"
        return text

    @field_validator("editor", mode="before")
    def _blank_editor(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @property
    def root_dir(self) -> Path:
        """Directory that relative block paths in the manifest are resolved against."""
        return self.feed_dir.parent

    @property
    def documents_dir(self) -> Path:
        return self.feed_dir / self.documents_subdir

    @property
    def export_dir(self) -> Path:
        return self.feed_dir / self.export_subdir

    @property
    def manifest_path(self) -> Path:
        return self.feed_dir / self.manifest_filename

    @property
    def feed_path(self) -> Path:
        return self.export_dir / self.feed_filename

    @property
    def workspace_dirs(self) -> list[Path]:
        return [self.feed_dir, self.documents_dir, self.export_dir]

    def document_path(self, name: str) -> Path:
        return self.documents_dir / f"{name}{self.document_suffix}"

    def export_path(self, name: str) -> Path:
        return self.export_dir / f"{name}.html"


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/site/adduce.yml``) or a
    directory containing that file. A directory without a config file yields
    the defaults anchored to that directory.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    if candidate.is_dir():
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)
    if not cfg.feed_dir.is_absolute():
        cfg.feed_dir = (base_dir / cfg.feed_dir).resolve()
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} should define a mapping.")
    return data
