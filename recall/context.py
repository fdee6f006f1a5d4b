from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path

from .exceptions import InvalidConfigError
from .types import HistoryType

__all__ = (
    "DEFAULT_FILE_NAMES",
    "DEFAULT_HISTORY_MAX",
    "HistoryContext",
    "get_history_context",
    "set_history_context",
)

DEFAULT_HISTORY_MAX = 2000
DEFAULT_FILE_NAMES: dict[HistoryType, str] = {
    HistoryType.COMMAND: "command",
    HistoryType.SEARCH: "search",
    HistoryType.URL: "history",
}

ENV_HISTORY_DIR = "RECALL_HISTORY_DIR"
ENV_HISTORY_MAX = "RECALL_HISTORY_MAX"


def default_history_dir() -> Path:
    return Path.home() / ".local" / "share" / "recall"


@dataclass
class HistoryContext:
    """Everything the history store needs to know about its environment.

    Usage:
        ctx = HistoryContext.from_dir(Path("~/.config/app").expanduser(), history_max=500)
        store = HistoryStore(ctx)
    """

    files: dict[HistoryType, Path]
    """Backing file of each history type, every type must have one"""
    history_max: int = DEFAULT_HISTORY_MAX
    """Dedup and load cap. Any value <= 0 disables history"""
    title_in_completion: bool = True
    """Show the secondary field (page title) next to candidates"""

    def __post_init__(self):
        missing = [t.value for t in HistoryType if t not in self.files]
        if missing:
            given = ", ".join(t.value for t in self.files)
            raise InvalidConfigError("files", given, f"no path for {', '.join(missing)}")
        self.files = {t: Path(p) for t, p in self.files.items()}

    @property
    def enabled(self) -> bool:
        return self.history_max > 0

    def path_for(self, history_type: HistoryType) -> Path:
        return self.files[history_type]

    @classmethod
    def from_dir(
        cls,
        directory: Path | str,
        history_max: int = DEFAULT_HISTORY_MAX,
        *,
        title_in_completion: bool = True,
    ) -> HistoryContext:
        """Build a context whose files all live in `directory`."""
        directory = Path(directory).expanduser()
        return cls(
            files={t: directory / name for t, name in DEFAULT_FILE_NAMES.items()},
            history_max=history_max,
            title_in_completion=title_in_completion,
        )

    @classmethod
    def from_env(cls) -> HistoryContext:
        """Build a context from `RECALL_HISTORY_DIR` and `RECALL_HISTORY_MAX`."""
        directory = os.environ.get(ENV_HISTORY_DIR) or default_history_dir()
        raw_max = os.environ.get(ENV_HISTORY_MAX, "").strip()
        history_max = parse_history_max(raw_max) if raw_max else DEFAULT_HISTORY_MAX
        return cls.from_dir(directory, history_max)


def parse_history_max(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise InvalidConfigError(ENV_HISTORY_MAX, value, "expected an integer") from e


_current_history_context: ContextVar[HistoryContext | None] = ContextVar("recall_history_context", default=None)


def get_history_context() -> HistoryContext:
    """Get the current history context.

    Falls back to a context built from the environment when none was set.
    """
    ctx = _current_history_context.get()
    if ctx is None:
        ctx = HistoryContext.from_env()
        _current_history_context.set(ctx)
    return ctx


def set_history_context(ctx: HistoryContext) -> None:
    """Set the current history context. Used by the CLI options processor."""
    _current_history_context.set(ctx)
