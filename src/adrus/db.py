"""NotebookDB: tabular view over a scanned :class:`NoteStore`.

Uses DuckDB (in-memory) as a query engine over note paths, timestamps and
tags, and returns :mod:`polars` DataFrames.

Usage::

    db = NotebookDB(store)

    # Free-form SQL
    df = db.query("SELECT path FROM notes WHERE 'work' = ANY(tags)")

    # Tag frequencies, as printed by `adrus tags`
    counts = db.tag_counts()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import duckdb
import polars as pl

if TYPE_CHECKING:
    from adrus.store import NoteStore


class NotebookDB:
    """In-memory DuckDB database over the notes and tags of one scan."""

    def __init__(self, store: "NoteStore") -> None:
        self.conn: duckdb.DuckDBPyConnection = duckdb.connect(":memory:")
        self.refresh(store)

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def refresh(self, store: "NoteStore") -> None:
        """(Re-)populate the database from *store*."""
        self._store = store
        self._create_schema()
        self._load_notes()

    def _create_schema(self) -> None:
        self.conn.execute("""
            CREATE OR REPLACE TABLE notes (
                path   VARCHAR PRIMARY KEY,
                ctime  DOUBLE,
                mtime  DOUBLE,
                tags   VARCHAR[]
            )
        """)

    def _load_notes(self) -> None:
        rows = [(note.path, note.ctime, note.mtime, list(note.tags)) for note in self._store]
        if rows:
            self.conn.executemany("INSERT INTO notes VALUES (?,?,?,?)", rows)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(self, sql: str) -> pl.DataFrame:
        """Run a raw SQL query and return a Polars DataFrame."""
        return self.conn.execute(sql).pl()

    def tag_counts(self) -> pl.DataFrame:
        """Return a tag → note count table sorted by frequency."""
        return self.query(
            """
            SELECT tag, COUNT(*) AS note_count
            FROM (SELECT unnest(tags) AS tag FROM notes)
            GROUP BY tag
            ORDER BY note_count DESC, tag
            """
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "NotebookDB":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
