from .app import CssClass, HistoryApp
from .picker import CandidatePicker

__all__ = (
    "CandidatePicker",
    "CssClass",
    "HistoryApp",
)
