from pathlib import Path

import pytest

from recall import HistoryContext, HistoryStore, HistoryType


@pytest.fixture(scope="function")
def history_dir(tmp_path) -> Path:
    """Directory holding the history files (files don't exist initially)."""
    path = tmp_path / "history"
    path.mkdir()
    return path


@pytest.fixture(scope="function")
def context(history_dir) -> HistoryContext:
    return HistoryContext.from_dir(history_dir, history_max=10)


@pytest.fixture(scope="function")
def store(context) -> HistoryStore:
    return HistoryStore(context)


@pytest.fixture(scope="function")
def write_history(context):
    """Write raw lines to the file of a history type."""

    def _write(history_type: HistoryType, *lines: str) -> Path:
        path = context.path_for(history_type)
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture(scope="function")
def clean_history_context(monkeypatch):
    """Reset the current history context and the environment it is built from."""
    from recall.context import _current_history_context

    monkeypatch.delenv("RECALL_HISTORY_DIR", raising=False)
    monkeypatch.delenv("RECALL_HISTORY_MAX", raising=False)
    token = _current_history_context.set(None)
    yield
    _current_history_context.reset(token)
