from .context import HistoryContext, get_history_context, set_history_context
from .exceptions import HistoryError, InvalidConfigError, UnsupportedHistoryTypeError
from .filestore import FileStore
from .navigator import Navigator
from .query import CandidateSink, fill_candidates, filter_candidates, matches, split_terms
from .store import HistoryStore
from .types import Direction, Entry, HistoryType

__all__ = (
    "CandidateSink",
    "Direction",
    "Entry",
    "FileStore",
    "HistoryContext",
    "HistoryError",
    "HistoryStore",
    "HistoryType",
    "InvalidConfigError",
    "Navigator",
    "UnsupportedHistoryTypeError",
    "fill_candidates",
    "filter_candidates",
    "get_history_context",
    "matches",
    "set_history_context",
    "split_terms",
)
