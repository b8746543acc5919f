"""Query engine: signed-tag filters, extended globs and note visitors.

A filter is a list of ``(tag, sign)`` pairs.  A note matches when, for every
pair, carrying the tag equals ``sign``; the empty filter matches every note.
An optional shell glob (with ``?(...)``, ``*(...)``, ``+(...)``, ``@(...)``
and ``!(...)`` groups) must additionally match the note's full relative path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from wcmatch import fnmatch

from adrus.collector import collect_garbage
from adrus.note import Note, as_filter
from adrus.store import NoteStore

logger = logging.getLogger(__name__)

Visitor = Callable[[Note], None]

# `*` crosses `/`, leading dots are ordinary, always case-sensitive
GLOB_FLAGS = fnmatch.EXTMATCH | fnmatch.DOTMATCH | fnmatch.CASE


def match_glob(path: str, pattern: str) -> bool:
    """Return ``True`` if *path* matches the extended glob *pattern*.

    A leading ``/`` on the pattern anchors it at the notebook root and is
    dropped, since note paths are stored without one.
    """
    return fnmatch.fnmatch(path, pattern.lstrip("/"), flags=GLOB_FLAGS)


def matches(store: NoteStore, note: Note, terms: Iterable[tuple[str, bool]]) -> bool:
    for tag, sign in terms:
        if store.has_tag(note, tag) != sign:
            return False
    return True


def query(
    store: NoteStore,
    terms: Iterable[tuple[str, bool]] | None = None,
    glob: str | None = None,
    visit: Visitor | None = None,
) -> list[Note]:
    """Pass every note matching *terms* and *glob* to *visit*; return them all.

    Notes are visited in index order, which carries no meaning.
    """
    terms = as_filter(terms)
    result: list[Note] = []
    for note in store:
        if not matches(store, note, terms):
            continue
        if glob is not None:
            if not match_glob(note.path, glob):
                logger.debug("match failed; glob = '%s', path = '%s'", glob, note.path)
                continue
            logger.debug("match success; glob = '%s', path = '%s'", glob, note.path)
        result.append(note)
        if visit is not None:
            visit(note)
    return result


# ---------------------------------------------------------------------------
# Visitors
# ---------------------------------------------------------------------------


def pass_through(note: Note) -> None:
    """Visitor that does nothing; the caller consumes the returned matches."""


def print_visitor(echo: Callable[[str], object] = print) -> Visitor:
    """Visitor that writes each note's root-anchored path through *echo*."""

    def visit(note: Note) -> None:
        echo(note.display_path)

    return visit


class DeleteVisitor:
    """Remove each visited note's file from *root*.

    Failures are logged one by one and never interrupt the batch.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.deleted: list[str] = []
        self.failed: list[str] = []

    def __call__(self, note: Note) -> None:
        target = self.root / note.path
        try:
            target.unlink()
        except OSError as exc:
            logger.error("failed to delete note '%s': %s", note.display_path, exc.strerror or exc)
            self.failed.append(note.path)
            return
        logger.info("deleted note '%s'", note.display_path)
        self.deleted.append(note.path)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def list_notes(
    store: NoteStore,
    glob: str,
    terms: Iterable[tuple[str, bool]] | None = None,
    echo: Callable[[str], object] = print,
) -> list[Note]:
    """``ls``: print every note matching *glob* and *terms*."""
    logger.debug("pattern: %s", glob)
    return query(store, terms, glob, print_visitor(echo))


def remove_notes(
    store: NoteStore,
    root: Path,
    glob: str,
    terms: Iterable[tuple[str, bool]] | None = None,
) -> DeleteVisitor:
    """``rm``: delete every note matching *glob* and *terms*, then prune empty directories."""
    logger.debug("pattern: %s", glob)
    visitor = DeleteVisitor(root)
    query(store, terms, glob, visitor)
    collect_garbage(root)
    return visitor
