"""Unit tests for adrus.cmdline."""

import logging

import pytest

from adrus.cmdline import CommandKind, parse_command, parse_term
from adrus.errors import UsageError
from adrus.note import FilterTerm
from adrus.store import NoteStore


@pytest.fixture()
def store() -> NoteStore:
    s = NoteStore()
    s.add_note("a")
    s.link_tag("a", "work")
    return s


class TestParseTerm:
    def test_plus(self):
        assert parse_term("+work") == FilterTerm("work", True)

    def test_minus(self):
        assert parse_term("-work") == FilterTerm("work", False)

    def test_unsigned(self):
        assert parse_term("work") is None

    @pytest.mark.parametrize("arg", ["+", "-Work", "+w0rk", "+a_b", "+" + "a" * 32])
    def test_invalid_name(self, arg):
        with pytest.raises(UsageError):
            parse_term(arg)


class TestParseCommand:
    def test_bare_query(self, store: NoteStore):
        cmd = parse_command([], store)
        assert cmd.kind is CommandKind.QUERY
        assert cmd.path is None
        assert cmd.terms == []

    def test_query_with_terms(self, store: NoteStore):
        cmd = parse_command(["+work", "-done"], store)
        assert cmd.kind is CommandKind.QUERY
        assert cmd.terms == [("work", True), ("done", False)]

    def test_open(self, store: NoteStore):
        cmd = parse_command(["/ideas/cats"], store)
        assert cmd.kind is CommandKind.OPEN
        assert cmd.path == "ideas/cats"

    def test_modify(self, store: NoteStore):
        cmd = parse_command(["/a", "+pets", "-work"], store)
        assert cmd.kind is CommandKind.MODIFY
        assert cmd.path == "a"
        assert cmd.terms == [("pets", True), ("work", False)]

    def test_ls(self, store: NoteStore):
        cmd = parse_command(["ls", "/*.md", "+work"], store)
        assert cmd.kind is CommandKind.LS
        assert cmd.path == "*.md"
        assert cmd.terms == [("work", True)]

    def test_rm(self, store: NoteStore):
        cmd = parse_command(["rm", "/old/**"], store)
        assert cmd.kind is CommandKind.RM
        assert cmd.path == "old/**"

    def test_tags(self, store: NoteStore):
        assert parse_command(["tags"], store).kind is CommandKind.TAGS

    @pytest.mark.parametrize(
        "args",
        [
            ["ls"],
            ["rm", "+work"],
            ["ls", "relative/glob"],
            ["/a", "stray"],
            ["tags", "+work"],
            ["unknown"],
            ["/"],
        ],
    )
    def test_usage_errors(self, store: NoteStore, args):
        with pytest.raises(UsageError):
            parse_command(args, store)

    def test_terms_define_tags(self, store: NoteStore):
        parse_command(["+brandnew"], store)
        assert store.get_tag("brandnew") is not None
        assert store.get_tag("brandnew").notes == []

    def test_unknown_tag_only_warns(self, store: NoteStore, caplog):
        with caplog.at_level(logging.WARNING, logger="adrus"):
            parse_command(["/a", "+brandnew"], store)
        assert "no notes with tag 'brandnew'" in caplog.text

    def test_known_tag_does_not_warn(self, store: NoteStore, caplog):
        with caplog.at_level(logging.WARNING, logger="adrus"):
            parse_command(["+work"], store)
        assert caplog.text == ""
