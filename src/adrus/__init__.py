"""adrus: tag-indexed plain-text notebook."""

from adrus.collector import collect_garbage
from adrus.db import NotebookDB
from adrus.mutate import mutate
from adrus.note import FilterTerm, Note, Tag
from adrus.query import query
from adrus.scanner import scan
from adrus.store import NoteStore

__all__ = [
    "Note",
    "Tag",
    "FilterTerm",
    "NoteStore",
    "scan",
    "query",
    "mutate",
    "collect_garbage",
    "NotebookDB",
]
