"""Tests for locked file rewrites."""

import pytest

from recall.filestore import FileStore, split_lines


@pytest.fixture(params=[pytest.param(True, id="flock"), pytest.param(False, id="lock-file")])
def file_store(request):
    return FileStore(use_flock=request.param)


def test_append(tmp_path, file_store):
    path = tmp_path / "sub" / "hist"
    file_store.append(path, "one")
    file_store.append(path, "two\tTitle")
    assert path.read_text() == "one\ntwo\tTitle\n"
    assert file_store.read_lines(path) == ["one", "two\tTitle"]


def test_rewrite(tmp_path, file_store):
    path = tmp_path / "hist"
    path.write_text("a\nb\nc\nd\n")
    assert file_store.rewrite(path, lambda lines: lines[:2]) is True
    assert path.read_text() == "a\nb\n"


def test_rewrite_to_empty(tmp_path, file_store):
    path = tmp_path / "hist"
    path.write_text("a\n")
    assert file_store.rewrite(path, lambda lines: []) is True
    assert path.read_text() == ""


def test_rewrite_missing_file(tmp_path, file_store):
    path = tmp_path / "hist"
    assert file_store.rewrite(path, lambda lines: ["x"]) is False
    assert not path.exists()


def test_lock_released_on_error(tmp_path, file_store):
    """A failing transform leaves the file as is and does not keep the lock."""
    path = tmp_path / "hist"
    path.write_text("a\n")

    def _fail(lines):
        raise ValueError("boom")

    with pytest.raises(ValueError):
        file_store.rewrite(path, _fail)

    assert path.read_text() == "a\n"
    assert not (tmp_path / "hist.lock").exists()
    assert file_store.rewrite(path, lambda lines: lines + ["b"]) is True
    assert path.read_text() == "a\nb\n"


def test_lock_file_removed(tmp_path):
    path = tmp_path / "hist"
    path.write_text("a\n")
    file_store = FileStore(use_flock=False)
    with file_store.locked(path):
        assert (tmp_path / "hist.lock").exists()
    assert not (tmp_path / "hist.lock").exists()


@pytest.mark.parametrize(
    "text, expected",
    [
        pytest.param("", [], id="empty"),
        pytest.param("a\nb\n", ["a", "b"], id="final-newline"),
        pytest.param("a\nb", ["a", "b"], id="no-final-newline"),
        pytest.param("a\n\nb\n", ["a", "", "b"], id="blank-line"),
        pytest.param("a\u2028b\x0bc\r\n", ["a\u2028b\x0bc\r"], id="other-breaks"),
    ],
)
def test_split_lines(text, expected):
    assert split_lines(text) == expected


def test_rewrite_keeps_file_on_write_failure(tmp_path, file_store, monkeypatch):
    """A failed write leaves the original content and no temporary file."""
    path = tmp_path / "hist"
    path.write_text("a\na\nb\n")

    def _fail(src, dst):
        raise OSError("No space left on device")

    monkeypatch.setattr("recall.filestore.os.replace", _fail)

    assert file_store.rewrite(path, lambda lines: lines[:1]) is False
    assert path.read_text() == "a\na\nb\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["hist"]


def test_rewrite_keeps_mode(tmp_path, file_store):
    path = tmp_path / "hist"
    path.write_text("a\na\n")
    path.chmod(0o600)
    file_store.rewrite(path, lambda lines: lines[:1])
    assert path.stat().st_mode & 0o777 == 0o600
    assert path.read_text() == "a\n"


def test_sequential_rewrites(tmp_path):
    """Each rewrite locks the file currently at the path, not a replaced one."""
    path = tmp_path / "hist"
    path.write_text("a\n")
    file_store = FileStore(use_flock=True)
    file_store.rewrite(path, lambda lines: lines + ["b"])
    file_store.rewrite(path, lambda lines: lines + ["c"])
    assert path.read_text() == "a\nb\nc\n"
