"""Collector: prune directories left empty after notes are deleted."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from adrus.logging_config import TRACE

logger = logging.getLogger(__name__)


def delete_empty(path: Path) -> bool:
    """Remove *path* and its subdirectories when they hold nothing but empty directories.

    Children are pruned before their parent, so a chain of empty directories
    disappears in one pass.  Returns whether *path* itself was removed.
    Anything that is not a directory (files, symlinks, sockets) keeps its
    parent alive; symlinked directories are never followed.
    """
    logger.debug("processing directory '%s'", path)
    empty = True
    try:
        with os.scandir(path) as entries:
            children = list(entries)
    except OSError as exc:
        logger.error("failed to read directory '%s': %s", path, exc.strerror or exc)
        return False

    for entry in children:
        if entry.is_dir(follow_symlinks=False):
            logger.log(TRACE, "  dir '%s'", entry.name)
            if not delete_empty(Path(entry.path)):
                empty = False
        else:
            logger.log(TRACE, "  file '%s'", entry.name)
            empty = False

    if not empty:
        return False

    logger.warning("deleting empty directory '%s'", path)
    try:
        path.rmdir()
    except OSError as exc:
        logger.error("failed to delete directory '%s': %s", path, exc.strerror or exc)
        return False
    return True


def collect_garbage(root: Path | str) -> bool:
    """Prune empty directories under (and including) *root*.

    Returns whether *root* itself ended up empty and was removed.
    """
    logger.info("collecting garbage")
    removed = delete_empty(Path(root))
    if removed:
        logger.info("notebook root '%s' was empty and has been removed", root)
    return removed
