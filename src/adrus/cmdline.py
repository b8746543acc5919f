"""Turn raw command-line arguments into a :class:`Command`.

Grammar::

    adrus [+tag|-tag]...              query
    adrus ls /GLOB [+tag|-tag]...     list
    adrus rm /GLOB [+tag|-tag]...     remove
    adrus tags                        tag report
    adrus /PATH                       open in $EDITOR
    adrus /PATH [+tag|-tag]...        modify tags

Paths and globs are recognised by their leading ``/`` and are relative to the
notebook root.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Sequence

from adrus.errors import UsageError
from adrus.header import TAG_MAX, is_tag_name
from adrus.note import FilterTerm
from adrus.store import NoteStore

logger = logging.getLogger(__name__)


class CommandKind(enum.Enum):
    QUERY = "query"
    OPEN = "open"
    MODIFY = "modify"
    LS = "ls"
    RM = "rm"
    TAGS = "tags"


_VERBS = {"ls": CommandKind.LS, "rm": CommandKind.RM, "tags": CommandKind.TAGS}

USAGE = "usage: adrus [ls|rm /GLOB | /PATH | tags] [+TAG|-TAG]..."


@dataclass
class Command:
    kind: CommandKind
    #: Root-relative note path or glob, leading ``/`` removed
    path: str | None = None
    terms: list[FilterTerm] = field(default_factory=list)


def is_path(arg: str) -> bool:
    return arg.startswith("/")


def parse_term(arg: str) -> FilterTerm | None:
    """Parse ``+name``/``-name``.  Returns ``None`` if *arg* is not signed."""
    if not arg or arg[0] not in "+-":
        return None
    name = arg[1:]
    if not is_tag_name(name):
        raise UsageError(f"invalid tag '{arg}': tags are 1-{TAG_MAX} lowercase letters")
    return FilterTerm(name, arg[0] == "+")


def parse_command(args: Sequence[str], store: NoteStore) -> Command:
    """Parse *args* (program name excluded) into a :class:`Command`.

    Every tag the command mentions is defined in *store*; a tag that no
    note carries yet only produces a warning, so ``+newtag`` can create it.
    """
    args = list(args)
    pos = 0

    kind = CommandKind.QUERY
    if args and args[0] in _VERBS:
        kind = _VERBS[args[0]]
        pos = 1

    path: str | None = None
    if kind in (CommandKind.LS, CommandKind.RM):
        if pos >= len(args) or not is_path(args[pos]):
            raise UsageError(f"usage: adrus {args[0]} /GLOB [+TAG|-TAG]...")
        path = args[pos][1:]
        pos += 1
    elif kind is CommandKind.QUERY and pos < len(args) and is_path(args[pos]):
        kind = CommandKind.OPEN
        path = args[pos][1:]
        pos += 1
        if not path:
            raise UsageError("note path must name a file under the notebook root")

    terms: list[FilterTerm] = []
    while pos < len(args):
        term = parse_term(args[pos])
        if term is None:
            raise UsageError(f"unexpected argument '{args[pos]}'\n{USAGE}")
        if kind is CommandKind.TAGS:
            raise UsageError("'tags' takes no arguments")
        tag = store.get_tag(term.tag)
        if tag is None or not tag.notes:
            logger.warning("no notes with tag '%s'", term.tag)
        store.define_tag(term.tag)
        terms.append(term)
        pos += 1

    if kind is CommandKind.OPEN and terms:
        kind = CommandKind.MODIFY

    return Command(kind=kind, path=path, terms=terms)
