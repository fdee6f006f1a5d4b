from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import HistoryType


class HistoryError(Exception):
    """Base class for errors raised by recall."""


class UnsupportedHistoryTypeError(HistoryError):
    """
    Raised when an operation is called with a history type
    it does not handle
    """

    def __init__(self, history_type: HistoryType, operation: str):
        super().__init__(f"{operation} does not support {history_type.value!r} history")
        self.history_type = history_type
        self.operation = operation


class InvalidConfigError(HistoryError):
    """Raised when a configuration value cannot be converted to the expected type."""

    def __init__(self, name: str, value: str, reason: str | None = None):
        self.name = name
        self.value = value
        self.reason = reason
        msg = f"Invalid value {value!r} for {name}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
