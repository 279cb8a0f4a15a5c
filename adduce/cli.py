"""CLI entrypoints for the Adduce feed tooling."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from .config import Config, load_config
from .errors import AdduceError
from .export import export_document
from .feed import synthesize_feed
from .workspace import (
    create_document,
    edit_document,
    establish_workspace,
    remove_document,
    search_documents,
)

console = Console()
app = typer.Typer(help="Adduce Feed - create blogs or other simple documents.", no_args_is_help=True)

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to adduce.yml or the directory containing it."),
]
NameArgument = Annotated[str, typer.Argument(..., help="Document name, without extension.")]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress details."),
    ] = False,
) -> None:
    """Create, export, and syndicate Markdown documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def establish(config_path: ConfigPathOption = ".") -> None:
    """Create the feed directory structure."""
    config = _load(config_path)
    try:
        created = establish_workspace(config)
    except AdduceError as exc:
        _report_failure("Cannot establish workspace", exc)
        return

    for path in created:
        console.print(f"[bold green]Creating[/] {_display_path(path)}...")
    if not created:
        console.print(f"[bold blue]Workspace ready[/]: {_display_path(config.feed_dir)} already exists.")


@app.command()
def create(name: NameArgument, config_path: ConfigPathOption = ".") -> None:
    """Create a new document."""
    config = _load(config_path)
    try:
        path = create_document(config, name)
    except AdduceError as exc:
        _report_failure("Cannot create document", exc)
        return
    console.print(f"[bold green]Created new file[/]: {_display_path(path)}")


@app.command()
def remove(name: NameArgument, config_path: ConfigPathOption = ".") -> None:
    """Delete a document and its exported page."""
    config = _load(config_path)
    for outcome in remove_document(config, name):
        if outcome.removed:
            console.print(f"[bold green]Deleted {outcome.label}[/] '{escape(name)}'.")
        else:
            console.print(
                f"[bold red]Error removing {outcome.label}[/] {escape(name)}: {escape(outcome.error or '')}"
            )


@app.command()
def edit(
    name: NameArgument,
    config_path: ConfigPathOption = ".",
    editor: Annotated[
        str | None,
        typer.Option("--editor", "-e", help="Editor command; defaults to the configured editor or $EDITOR."),
    ] = None,
) -> None:
    """Open an existing document in an external editor."""
    config = _load(config_path)
    try:
        status = edit_document(config, name, editor=editor)
    except AdduceError as exc:
        _report_failure("Cannot edit document", exc)
        return
    if status != 0:
        console.print(f"[bold yellow]Editor exited with status {status}[/]")


@app.command()
def export(name: NameArgument, config_path: ConfigPathOption = ".") -> None:
    """Generate an HTML page from a document."""
    config = _load(config_path)
    try:
        path = export_document(config, name)
    except AdduceError as exc:
        _report_failure(f"Failed to export {name}", exc)
        return
    console.print(f"[bold green]Successfully exported[/] {escape(name)} to {_display_path(path)}")


@app.command()
def search(
    query: Annotated[str, typer.Argument(..., help="Substring to look for in document filenames.")],
    config_path: ConfigPathOption = ".",
) -> None:
    """Search document filenames."""
    config = _load(config_path)
    try:
        matches = search_documents(config, query)
    except AdduceError as exc:
        _report_failure("Search failed", exc)
        return

    if not matches:
        console.print(f"No results found for '{escape(query)}'.")
        return
    for match in matches:
        console.print(escape(match))


@app.command()
def rss(config_path: ConfigPathOption = ".") -> None:
    """Generate the RSS feed for all documents."""
    config = _load(config_path)
    try:
        path = synthesize_feed(config)
    except AdduceError as exc:
        _report_failure("RSS feed not generated", exc)
        return
    console.print(f"[bold green]RSS feed generated successfully[/]: {_display_path(path)}")


def _report_failure(summary: str, exc: AdduceError) -> None:
    console.print(f"[bold red]{escape(summary)}[/]: {escape(str(exc))}")


def _display_path(path: Path) -> str:
    try:
        text = path.relative_to(Path.cwd()).as_posix()
    except ValueError:
        text = path.as_posix()
    return escape(text)


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
