"""
CLI interface for adrus.

Usage:
    adrus +work -done              notes tagged work but not done
    adrus ls '/projects/*.md'      notes under projects/ ending in .md
    adrus rm '/scratch/**' +old    delete old scratch notes, prune empty dirs
    adrus tags                     tag usage counts
    adrus /ideas/cats              open (or create) a note in $EDITOR
    adrus /ideas/cats +pets -todo  retag a note
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from adrus.cmdline import Command, CommandKind, parse_command
from adrus.config import NotebookConfig, load_config
from adrus.db import NotebookDB
from adrus.errors import AdrusError, ConfigError, UsageError
from adrus.header import MAGIC
from adrus.logging_config import configure_logging
from adrus.mutate import mutate
from adrus.query import list_notes, pass_through, query, remove_notes
from adrus.scanner import resolve_root, scan

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="adrus",
    help="Tag-indexed plain-text notebook.",
    add_completion=False,
    no_args_is_help=False,
)


def note_file(root: Path, path: str) -> Path:
    """Filesystem location of note *path*, refusing anything outside *root*."""
    target = (root / path).resolve()
    if target == root or not target.is_relative_to(root):
        raise UsageError(f"note path '/{path}' is outside the notebook")
    return target


def open_note(root: Path, path: str, editor: Optional[str]) -> int:
    """Create the note at *path* if needed and run *editor* on it.

    Returns the editor's exit status.
    """
    if not editor:
        raise ConfigError("$EDITOR unset")
    logger.debug("editor = %s", editor)

    target = note_file(root, path)
    logger.info("path: %s", target)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise AdrusError(
            f"failed to create parent directories for note '{target}': {exc.strerror or exc}"
        ) from exc

    try:
        with open(target, "xb") as fh:
            fh.write(MAGIC + b"\n")
    except FileExistsError:
        pass
    except OSError as exc:
        raise AdrusError(f"failed to open note '/{path}': {exc.strerror or exc}") from exc

    logger.info("spawning editor")
    try:
        result = subprocess.run([*shlex.split(editor), str(target)])
    except OSError as exc:
        raise AdrusError(f"failed to spawn editor '{editor}': {exc.strerror or exc}") from exc

    if result.returncode != 0:
        logger.error("editor exited with status %d", result.returncode)
    else:
        logger.info("editor exited successfully")
    return result.returncode


def run(args: list[str], config: NotebookConfig) -> Command:
    """Scan the notebook and execute the command described by *args*."""
    root = resolve_root(config.root)
    store = scan(root)
    cmd = parse_command(args, store)

    if cmd.kind is CommandKind.QUERY:
        logger.info("querying notebook")
        for note in query(store, cmd.terms, visit=pass_through):
            typer.echo(note.display_path)

    elif cmd.kind is CommandKind.LS:
        list_notes(store, cmd.path, cmd.terms, echo=typer.echo)

    elif cmd.kind is CommandKind.RM:
        remove_notes(store, root, cmd.path, cmd.terms)

    elif cmd.kind is CommandKind.TAGS:
        with NotebookDB(store) as db:
            for tag, count in db.tag_counts().iter_rows():
                typer.echo(f"{tag} {count}")

    elif cmd.kind is CommandKind.OPEN:
        open_note(root, cmd.path, config.editor)

    elif cmd.kind is CommandKind.MODIFY:
        logger.info("path: /%s", cmd.path)
        mutate(store, root, cmd.path, cmd.terms)

    return cmd


@app.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
def main(
    args: Annotated[Optional[list[str]], typer.Argument(
        help="Command, /PATH or /GLOB, and +TAG/-TAG filter terms",
        show_default=False,
    )] = None,
):
    """Query, open, retag and prune notes in the notebook."""
    try:
        config = load_config()
    except AdrusError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    configure_logging(config.log_filter)

    try:
        run(args or [], config)
    except AdrusError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
