"""File operations on the feed workspace: bootstrap, create, remove, edit, search."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .config import Config
from .errors import DocumentNotFound, WorkspaceError, WriteFailed

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RemovalOutcome:
    """Result of deleting one file belonging to a document."""

    label: str
    path: Path
    error: str | None = None

    @property
    def removed(self) -> bool:
        return self.error is None


def establish_workspace(config: Config) -> list[Path]:
    """Create the feed, documents, and export directories; return those created."""
    created: list[Path] = []
    for directory in config.workspace_dirs:
        if directory.is_dir():
            continue
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WorkspaceError(f"Failed to create {directory}: {exc}", path=directory) from exc
        logger.debug("Created %s", directory)
        created.append(directory)
    return created


def create_document(config: Config, name: str) -> Path:
    """Create a new document seeded with a heading named after it."""
    if not config.documents_dir.is_dir():
        raise WorkspaceError(
            "The documents folder does not exist. "
            "Please run 'adduce establish' to create the necessary file structure.",
            path=config.documents_dir,
        )

    path = config.document_path(name)
    if path.exists():
        raise WorkspaceError(f"Document already exists: {path}.", path=path)

    try:
        path.write_text(f"# {name}\n", encoding="utf-8")
    except OSError as exc:
        raise WriteFailed(f"Failed to create file {path}: {exc}.", path=path) from exc
    return path


def remove_document(config: Config, name: str) -> list[RemovalOutcome]:
    """Delete a document's source and exported page, reporting each independently."""
    outcomes: list[RemovalOutcome] = []
    for label, path in (
        ("source document", config.document_path(name)),
        ("exported document", config.export_path(name)),
    ):
        try:
            path.unlink()
        except OSError as exc:
            outcomes.append(RemovalOutcome(label=label, path=path, error=str(exc)))
        else:
            outcomes.append(RemovalOutcome(label=label, path=path))
    return outcomes


def resolve_editor(config: Config) -> str:
    """Pick the editor command from config, then $EDITOR, then a platform default."""
    if config.editor:
        return config.editor
    env_editor = os.environ.get("EDITOR", "").strip()
    if env_editor:
        return env_editor
    return "notepad" if os.name == "nt" else "vi"


def edit_document(config: Config, name: str, editor: str | None = None) -> int:
    """Open a document in an external editor and wait for it to exit.

    Returns the editor's exit status.
    """
    path = config.document_path(name)
    if not path.is_file():
        raise DocumentNotFound("No documents with that name.", path=path)

    command = editor or resolve_editor(config)
    argv = [*shlex.split(command, posix=os.name != "nt"), str(path)]
    logger.debug("Launching editor: %s", argv)
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as exc:
        raise WorkspaceError(f"Failed to launch editor '{command}': {exc}", path=path) from exc
    return completed.returncode


def search_documents(config: Config, query: str) -> list[str]:
    """Return document filenames containing ``query``, in directory order."""
    try:
        names = [entry.name for entry in config.documents_dir.iterdir()]
    except OSError as exc:
        raise WorkspaceError(
            f"Failed to read documents directory {config.documents_dir}: {exc}",
            path=config.documents_dir,
        ) from exc
    return [name for name in names if query in name]
