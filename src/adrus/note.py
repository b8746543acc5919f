"""Core Note, Tag and filter records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, NamedTuple


@dataclass
class Note:
    """A single tagged file in the notebook."""

    #: Path relative to the notebook root, POSIX separators, no leading slash
    path: str
    ctime: float = 0.0
    mtime: float = 0.0
    #: Names of the tags carried by this note, in header order
    tags: list[str] = field(default_factory=list)

    @property
    def display_path(self) -> str:
        """Root-anchored form used on the command line (``/sub/note``)."""
        return "/" + self.path


@dataclass
class Tag:
    """A label and the paths of every note that carries it."""

    name: str
    notes: list[str] = field(default_factory=list)


class FilterTerm(NamedTuple):
    """``(tag, sign)``: ``True`` requires/adds the tag, ``False`` forbids/removes it."""

    tag: str
    sign: bool


def as_filter(terms: Iterable[tuple[str, bool]] | None) -> list[FilterTerm]:
    """Normalise plain ``(name, bool)`` pairs into :class:`FilterTerm` values."""
    return [FilterTerm(tag, bool(sign)) for tag, sign in terms or ()]
