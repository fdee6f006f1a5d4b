from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .exceptions import UnsupportedHistoryTypeError
from .types import Entry, HistoryType

if TYPE_CHECKING:
    from .store import HistoryStore

__all__ = (
    "CandidateSink",
    "fill_candidates",
    "filter_candidates",
    "matches",
    "split_terms",
)

COMPLETION_TYPES = (HistoryType.URL, HistoryType.SEARCH)


@runtime_checkable
class CandidateSink(Protocol):
    """Anything candidates can be pushed into (a list, a widget model...)."""

    def append(self, entry: Entry, /) -> None: ...


def fill_candidates(
    store: HistoryStore,
    history_type: HistoryType,
    sink: CandidateSink | None = None,
) -> list[Entry]:
    """Return every unique entry of `history_type`, most recent first.

    When `sink` is given, each candidate is also appended to it.
    """
    if history_type not in COMPLETION_TYPES:
        raise UnsupportedHistoryTypeError(history_type, "fill_candidates")
    candidates = list(reversed(store.load(history_type)))
    if sink is not None:
        for entry in candidates:
            sink.append(entry)
    return candidates


def split_terms(text: str) -> list[str]:
    """Split the current input into search terms."""
    return text.split()


def matches(entry: Entry, terms: Iterable[str]) -> bool:
    """True if every term is found (case insensitive) in the primary or secondary value.

    No terms match every entry.
    """
    primary = entry.primary.casefold()
    secondary = entry.secondary.casefold() if entry.secondary else None
    for term in terms:
        needle = term.casefold()
        if needle not in primary and (secondary is None or needle not in secondary):
            return False
    return True


def filter_candidates(candidates: Iterable[Entry], text: str) -> list[Entry]:
    """Keep the candidates matching every term of `text`."""
    terms = split_terms(text)
    return [entry for entry in candidates if matches(entry, terms)]
