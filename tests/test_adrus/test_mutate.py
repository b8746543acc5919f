"""Unit tests for adrus.mutate."""

import os
import stat
from pathlib import Path

import pytest

from adrus.errors import MutateError, NotANoteError, NoteNotFoundError
from adrus.header import parse_tags, read_header
from adrus.mutate import apply_filter, mutate
from adrus.scanner import scan
from adrus.store import NoteStore


def _notebook(root: Path, files: dict[str, bytes]) -> NoteStore:
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return scan(root)


# ---------------------------------------------------------------------------
# apply_filter
# ---------------------------------------------------------------------------


class TestApplyFilter:
    def test_remove_then_add(self):
        assert apply_filter(["foo", "bar"], [("bar", False), ("baz", True)]) == ["foo", "baz"]

    def test_empty_filter_keeps_tags(self):
        assert apply_filter(["foo", "bar"], []) == ["foo", "bar"]

    def test_add_existing_is_not_duplicated(self):
        assert apply_filter(["foo"], [("foo", True), ("new", True), ("new", True)]) == ["foo", "new"]

    def test_remove_absent_tag_is_noop(self):
        assert apply_filter(["foo"], [("zzz", False)]) == ["foo"]

    def test_add_and_remove_same_tag_nets_to_added(self):
        assert apply_filter([], [("x", True), ("x", False)]) == ["x"]
        assert apply_filter(["x"], [("x", False), ("x", True)]) == ["x"]


# ---------------------------------------------------------------------------
# mutate
# ---------------------------------------------------------------------------


class TestMutate:
    def test_round_trip(self, tmp_path: Path):
        store = _notebook(tmp_path, {"note": b"adrus foo bar\nBODY"})
        tags = mutate(store, tmp_path, "note", [("bar", False), ("baz", True)])
        assert tags == ["foo", "baz"]
        assert (tmp_path / "note").read_bytes() == b"adrus foo baz \nBODY"

    def test_empty_filter_keeps_tag_set(self, tmp_path: Path):
        store = _notebook(tmp_path, {"note": b"adrus  foo   bar\nline one\nline two\n"})
        mutate(store, tmp_path, "note", [])
        with (tmp_path / "note").open("rb") as fh:
            assert parse_tags(read_header(fh)) == ["foo", "bar"]
            assert fh.read() == b"line one\nline two\n"

    def test_body_bytes_preserved(self, tmp_path: Path):
        body = b"\x00\xff binary \r\n adrus fake header\n\n"
        store = _notebook(tmp_path, {"bin": b"adrus a\n" + body})
        mutate(store, tmp_path, "bin", [("b", True)])
        assert (tmp_path / "bin").read_bytes() == b"adrus a b \n" + body

    def test_header_only_note(self, tmp_path: Path):
        store = _notebook(tmp_path, {"bare": b"adrus a"})
        mutate(store, tmp_path, "bare", [("b", True)])
        assert (tmp_path / "bare").read_bytes() == b"adrus a b \n"

    def test_remove_all_tags(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\nx"})
        mutate(store, tmp_path, "n", [("a", False)])
        assert (tmp_path / "n").read_bytes() == b"adrus \nx"

    def test_nested_note(self, tmp_path: Path):
        store = _notebook(tmp_path, {"sub/dir/n.md": b"adrus a\nx"})
        mutate(store, tmp_path, "sub/dir/n.md", [("b", True)])
        assert (tmp_path / "sub/dir/n.md").read_bytes() == b"adrus a b \nx"

    def test_store_not_updated(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\n"})
        mutate(store, tmp_path, "n", [("b", True)])
        assert store.get_note("n").tags == ["a"]
        assert store.get_tag("b") is None

    def test_rescan_sees_new_tags(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\n"})
        mutate(store, tmp_path, "n", [("a", False), ("b", True)])
        fresh = scan(tmp_path)
        assert fresh.get_note("n").tags == ["b"]

    def test_permissions_preserved(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\n"})
        os.chmod(tmp_path / "n", 0o640)
        mutate(store, tmp_path, "n", [("b", True)])
        assert stat.S_IMODE((tmp_path / "n").stat().st_mode) == 0o640

    def test_symlinked_note_updates_target(self, tmp_path: Path):
        (tmp_path / "real.md").write_bytes(b"adrus a\nbody\n")
        (tmp_path / "link.md").symlink_to("real.md")
        store = scan(tmp_path)
        mutate(store, tmp_path, "link.md", [("b", True)])
        assert (tmp_path / "link.md").is_symlink()
        assert (tmp_path / "real.md").read_bytes() == b"adrus a b \nbody\n"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["link.md", "real.md"]


class TestMutateErrors:
    def test_unknown_note(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\n"})
        with pytest.raises(NoteNotFoundError):
            mutate(store, tmp_path, "missing", [("b", True)])

    def test_file_no_longer_a_note(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\nbody"})
        (tmp_path / "n").write_bytes(b"rewritten elsewhere\nbody")
        with pytest.raises(NotANoteError):
            mutate(store, tmp_path, "n", [("b", True)])
        assert (tmp_path / "n").read_bytes() == b"rewritten elsewhere\nbody"

    def test_file_deleted_since_scan(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\n"})
        (tmp_path / "n").unlink()
        with pytest.raises(MutateError):
            mutate(store, tmp_path, "n", [("b", True)])
        assert not (tmp_path / "n").exists()


class TestAtomicRewrite:
    """The rewrite goes through a temporary file and ``os.replace``.

    Unlike a truncate-and-rewrite, a failure while writing cannot destroy
    the note's existing content.
    """

    def test_failed_replace_leaves_original_intact(self, tmp_path: Path, monkeypatch):
        original = b"adrus a\nprecious body\n"
        store = _notebook(tmp_path, {"n": original})

        def broken_replace(src, dst):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(MutateError, match="No space left on device"):
            mutate(store, tmp_path, "n", [("b", True)])

        assert (tmp_path / "n").read_bytes() == original
        assert sorted(p.name for p in tmp_path.iterdir()) == ["n"]

    def test_no_temporary_files_left_on_success(self, tmp_path: Path):
        store = _notebook(tmp_path, {"n": b"adrus a\n"})
        mutate(store, tmp_path, "n", [("b", True)])
        assert sorted(p.name for p in tmp_path.iterdir()) == ["n"]
