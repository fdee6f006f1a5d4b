from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ("Direction", "Entry", "HistoryType")

FIELD_SEP = "\t"


class HistoryType(Enum):
    COMMAND = "command"
    SEARCH = "search"
    URL = "url"


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def step(self) -> int:
        return 1 if self is Direction.FORWARD else -1


@dataclass(frozen=True)
class Entry:
    """A single history record.

    `primary` is the command, search term or URI. `secondary` is an optional
    label such as a page title.
    """

    primary: str
    secondary: str | None = None

    @classmethod
    def from_line(cls, line: str) -> Entry:
        """Parse a history file line. A line without a tab has no secondary."""
        primary, sep, secondary = line.partition(FIELD_SEP)
        return cls(primary, secondary if sep else None)

    def to_line(self) -> str:
        if self.secondary is not None:
            return f"{self.primary}{FIELD_SEP}{self.secondary}"
        return self.primary
