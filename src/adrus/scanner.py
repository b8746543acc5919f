"""Scanner: walk a notebook directory and populate a :class:`NoteStore`."""

from __future__ import annotations

import logging
from pathlib import Path

from adrus.errors import NotebookError
from adrus.header import is_header, parse_tags, read_header
from adrus.logging_config import TRACE
from adrus.mutate import TEMP_SUFFIX
from adrus.store import NoteStore

logger = logging.getLogger(__name__)


def resolve_root(root: Path | str) -> Path:
    """Return *root* as an absolute, symlink-resolved directory path."""
    try:
        resolved = Path(root).expanduser().resolve(strict=True)
    except OSError as exc:
        raise NotebookError(f"failed to open adrus dir '{root}': {exc.strerror or exc}") from exc
    if not resolved.is_dir():
        raise NotebookError(f"adrus dir '{resolved}' is not a directory")
    return resolved


def scan(root: Path | str, store: NoteStore | None = None) -> NoteStore:
    """Register every note under *root* in *store* (a fresh store by default).

    Files that are not notes are skipped silently, as are temporary files
    left behind by an interrupted rewrite.  Files that cannot be read
    are logged and skipped.  The scan itself only fails when *root* is not a
    usable directory.
    """
    root = resolve_root(root)
    store = NoteStore() if store is None else store
    logger.info("scanning notebook '%s'", root)

    for path in sorted(root.rglob("*")):
        try:
            if not path.is_file():
                continue
            if path.name.startswith(".") and path.name.endswith(TEMP_SUFFIX):
                logger.debug("%s: skipping temporary file", path)
                continue
            scan_file(store, root, path)
        except OSError as exc:
            logger.error("%s: %s", path, exc.strerror or exc)

    logger.debug("indexed %d notes, %d tags", len(store.notes), len(store.tags))
    return store


def scan_file(store: NoteStore, root: Path, path: Path) -> bool:
    """Register *path* if it is a note.  Returns whether it was one.

    Raises :class:`OSError` when the file cannot be opened, read or stat'ed.
    """
    with path.open("rb") as fh:
        line = read_header(fh)
        st = path.stat()

    if not is_header(line):
        logger.debug("%s: not adrus file", path)
        return False

    logger.debug("%s: is adrus file", path)
    name = path.relative_to(root).as_posix()
    store.add_note(name, st.st_ctime, st.st_mtime)
    for tag in parse_tags(line):
        logger.log(TRACE, "  tag %s", tag)
        store.link_tag(name, tag)
    return True
