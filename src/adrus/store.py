"""NoteStore: in-memory bidirectional index of notes and tags."""

from __future__ import annotations

import logging
from typing import Iterator

from adrus.note import Note, Tag

logger = logging.getLogger(__name__)


class NoteStore:
    """Maps note paths to notes and tag names to tags, keeping both sides linked.

    For every note ``n`` and tag ``t``: ``t.name in n.tags`` exactly when
    ``n.path in t.notes``.  Edges are never duplicated.
    """

    def __init__(self) -> None:
        self.notes: dict[str, Note] = {}
        self.tags: dict[str, Tag] = {}

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_note(self, path: str) -> Note | None:
        return self.notes.get(path)

    def get_tag(self, name: str) -> Tag | None:
        return self.tags.get(name)

    def __len__(self) -> int:
        return len(self.notes)

    def __contains__(self, path: object) -> bool:
        return path in self.notes

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes.values())

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def define_tag(self, name: str) -> Tag:
        """Return the tag called *name*, registering an empty one if needed."""
        tag = self.tags.get(name)
        if tag is None:
            tag = self.tags[name] = Tag(name)
        return tag

    def add_note(self, path: str, ctime: float = 0.0, mtime: float = 0.0) -> Note:
        """Register a note at *path*.

        Registering the same path twice is tolerated: a warning is logged and
        the existing note is returned untouched.
        """
        note = self.notes.get(path)
        if note is not None:
            logger.warning("note '%s' already registered", path)
            return note
        note = self.notes[path] = Note(path=path, ctime=ctime, mtime=mtime)
        return note

    def link_tag(self, path: str, name: str) -> None:
        """Attach tag *name* to the note at *path* on both sides of the index."""
        tag = self.define_tag(name)
        note = self.notes.get(path)
        if note is None:
            logger.warning("no note '%s'", path)
            return
        if name in note.tags:
            logger.debug("note '%s' already tagged '%s'", path, name)
            return
        note.tags.append(name)
        tag.notes.append(path)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    @staticmethod
    def has_tag(note: Note, name: str) -> bool:
        return name in note.tags

    def notes_with_tag(self, name: str) -> list[Note]:
        tag = self.tags.get(name)
        if tag is None:
            return []
        return [self.notes[p] for p in tag.notes if p in self.notes]
