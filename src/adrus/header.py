"""Header-line validation, tag parsing and serialisation.

A note is any file whose first line looks like::

    adrus work todo urgent

Every byte of that line must be ASCII whitespace, alphanumeric or ``_``, and the
line must start with the ``adrus`` token followed by whitespace or the end of
the line.  The remainder is read as a run of lowercase ``[a-z]`` tags.
"""

from __future__ import annotations

import re
from typing import BinaryIO, Iterable

MAGIC = b"adrus"
#: Longest tag accepted; longer runs of letters are split at this length
TAG_MAX = 31

# Whole header line (newline already stripped)
_HEADER_RE = re.compile(rb"adrus(?:\s[\s\w]*)?")
# One tag token, preceded by optional whitespace
_TAG_RE = re.compile(rb"\s*([a-z]{1,%d})" % TAG_MAX)
# User-supplied tag name
_TAG_NAME_RE = re.compile(r"[a-z]{1,%d}" % TAG_MAX)


def read_header(fh: BinaryIO) -> bytes:
    """Read the first line of *fh*, without its trailing newline."""
    line = fh.readline()
    if line.endswith(b"\n"):
        line = line[:-1]
    return line


def is_header(line: bytes) -> bool:
    """Return ``True`` when *line* is a valid ``adrus`` header."""
    return _HEADER_RE.fullmatch(line) is not None


def parse_tags(line: bytes) -> list[str]:
    """Return the tag tokens of a validated header line, in order.

    Parsing stops at the first position where no ``[a-z]`` run begins, so
    ``adrus foo Bar baz`` yields only ``["foo"]``.
    """
    tags: list[str] = []
    pos = len(MAGIC)
    while True:
        m = _TAG_RE.match(line, pos)
        if not m:
            break
        tags.append(m.group(1).decode("ascii"))
        pos = m.end()
    return tags


def format_header(tags: Iterable[str]) -> bytes:
    """Serialise *tags* as a header line, trailing newline included."""
    return MAGIC + b" " + b"".join(t.encode("ascii") + b" " for t in tags) + b"\n"


def is_tag_name(name: str) -> bool:
    return _TAG_NAME_RE.fullmatch(name) is not None
