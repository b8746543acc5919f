"""Mutator: rewrite a note's tag header in place, keeping its body byte-for-byte."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

from adrus.errors import MutateError, NotANoteError, NoteNotFoundError
from adrus.header import format_header, is_header, read_header
from adrus.logging_config import TRACE
from adrus.note import as_filter
from adrus.store import NoteStore

logger = logging.getLogger(__name__)

#: Suffix of the temporary file a rewrite goes through; the scanner skips these
TEMP_SUFFIX = ".adrus-tmp"


def apply_filter(current: Iterable[str], terms: Iterable[tuple[str, bool]]) -> list[str]:
    """Compute the tag list that results from applying *terms* to *current*.

    Removals only strip tags from *current*; additions are appended afterwards
    unless already present.  ``+x -x`` therefore leaves ``x`` on the note.
    """
    terms = as_filter(terms)
    removed = {t.tag for t in terms if not t.sign}
    tags = [t for t in current if t not in removed]
    for term in terms:
        if term.sign and term.tag not in tags:
            tags.append(term.tag)
    return tags


def mutate(
    store: NoteStore,
    root: Path | str,
    path: str,
    terms: Iterable[tuple[str, bool]],
) -> list[str]:
    """Rewrite the header of the note at *path* according to *terms*.

    Every read and check happens before anything is written.  The new content
    is written to a temporary file beside the note and moved over it, so a
    failure at any point leaves the original file as it was.  A symlinked
    note is rewritten at its target and the link itself is kept.  The store is
    not updated.

    Returns the tags written to the header.
    """
    note = store.get_note(path)
    if note is None:
        raise NoteNotFoundError(path)

    target = (Path(root) / note.path).resolve()
    logger.info("mutating note at '%s'", note.display_path)

    try:
        with target.open("rb") as fh:
            header = read_header(fh)
            if not is_header(header):
                raise NotANoteError(note.path)
            body = fh.read()
    except OSError as exc:
        raise MutateError(
            f"failed to read note '{note.display_path}': {exc.strerror or exc}"
        ) from exc

    tags = apply_filter(note.tags, terms)
    logger.debug("serialising tags")
    for tag in tags:
        logger.log(TRACE, "  +%s", tag)

    _replace(target, format_header(tags) + body)
    return tags


def _replace(target: Path, content: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=TEMP_SUFFIX, dir=target.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        shutil.copymode(target, tmp)
        os.replace(tmp, target)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise MutateError(f"failed to write note '{target}': {exc.strerror or exc}") from exc
