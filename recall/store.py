from __future__ import annotations

import logging
from collections.abc import Iterable

from .context import HistoryContext, get_history_context
from .filestore import FileStore
from .types import Entry, HistoryType

__all__ = ("HistoryStore", "unique_entries")

logger = logging.getLogger(__name__)


def unique_entries(lines: Iterable[str], history_max: int) -> list[Entry]:
    """Parse `lines` and keep the first occurrence of each primary value.

    Lines are scanned top to bottom (oldest to newest as written) and the
    scan stops once `history_max` distinct entries have been kept.
    Empty lines are skipped.
    """
    if history_max <= 0:
        return []
    seen: set[str] = set()
    entries: list[Entry] = []
    for line in lines:
        entry = Entry.from_line(line)
        if not entry.primary or entry.primary in seen:
            continue
        seen.add(entry.primary)
        entries.append(entry)
        if len(entries) >= history_max:
            break
    return entries


class HistoryStore:
    """Per type history files: append, deduplicating load and compaction."""

    def __init__(self, context: HistoryContext | None = None, file_store: FileStore | None = None):
        self.context = context or get_history_context()
        self.file_store = file_store or FileStore()

    @property
    def history_max(self) -> int:
        return self.context.history_max

    def add(self, history_type: HistoryType, value: str, additional: str | None = None) -> bool:
        """Write a new entry to the end of the history file.

        Nothing is written when history is disabled or `value` is empty.
        Entries are not deduplicated here, `cleanup` takes care of that.
        """
        if not self.context.enabled or not value:
            return False
        path = self.context.path_for(history_type)
        try:
            self.file_store.append(path, Entry(value, additional).to_line())
        except OSError as e:
            logger.warning("Could not append to %s history (%s): %s", history_type.value, path, e)
            return False
        return True

    def load(self, history_type: HistoryType) -> list[Entry]:
        """Load the unique entries of a history type, oldest first.

        A missing or unreadable file is an empty history.
        """
        path = self.context.path_for(history_type)
        try:
            lines = self.file_store.read_lines(path)
        except OSError as e:
            logger.debug("No %s history loaded from %s: %s", history_type.value, path, e)
            return []
        return unique_entries(lines, self.history_max)

    def cleanup(self) -> None:
        """Make all history entries unique and fit them to `history_max`.

        Each file is rewritten under an exclusive lock. A file that cannot be
        opened for writing keeps its content and the other types are still
        compacted.
        """
        if not self.context.enabled:
            return

        def _compact(lines: list[str]) -> list[str]:
            return [entry.to_line() for entry in unique_entries(lines, self.history_max)]

        for history_type in HistoryType:
            path = self.context.path_for(history_type)
            if self.file_store.rewrite(path, _compact):
                logger.info("Compacted %s history (%s)", history_type.value, path)

    def get_list(self, history_type: HistoryType, query: str) -> list[str]:
        """Return the history values starting with `query`, most recent first.

        The query itself is the first item so that stepping before the first
        real match brings the original input back. Only command and search
        histories are handled, other types give an empty list.
        """
        if history_type not in (HistoryType.COMMAND, HistoryType.SEARCH):
            return []
        matching = [entry.primary for entry in reversed(self.load(history_type)) if entry.primary.startswith(query)]
        return [query, *matching]
