from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from .types import Direction, Entry

__all__ = ("SENTINEL", "Navigator", "SelectCallback", "candidate_text")

T = TypeVar("T")

SelectCallback = Callable[[str, "T | None"], None]
"""Called with the text to display and the selected candidate (None at the sentinel)"""

SENTINEL = -1


def candidate_text(item: object) -> str:
    """Text to put in the input box for a candidate."""
    if isinstance(item, Entry):
        return item.primary
    return str(item)


class Navigator(Generic[T]):
    """Cyclic forward/backward selection over a list of candidates.

    The cursor walks sentinel -> first -> ... -> last -> sentinel -> first...
    The sentinel stands for the original, unmodified input.

    The select callback must not call `start` or `next` itself.
    """

    def __init__(self) -> None:
        self._candidates: list[T] = []
        self._on_select: SelectCallback | None = None
        self._original = ""
        self._direction = Direction.FORWARD
        self._cursor = SENTINEL
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def candidates(self) -> list[T]:
        return self._candidates

    @property
    def selected(self) -> T | None:
        """The candidate under the cursor, None at the sentinel."""
        if self._cursor == SENTINEL:
            return None
        return self._candidates[self._cursor]

    def start(
        self,
        candidates: Sequence[T],
        on_select: SelectCallback,
        direction: Direction = Direction.FORWARD,
        original: str = "",
    ) -> bool:
        """Begin a completion session, replacing any running one.

        `direction` is used by `next()` calls that don't give one. Returns
        True if there is anything to cycle through.
        """
        self._candidates = list(candidates)
        self._on_select = on_select
        self._direction = direction
        self._original = original
        self._cursor = SENTINEL
        self._active = True
        return bool(self._candidates)

    def next(self, direction: Direction | None = None) -> bool:
        """Move the cursor one step and notify the select callback.

        Returns False without changing anything if the navigator is not active
        or has no candidates.
        """
        if not self._active or not self._candidates:
            return False
        step = (direction or self._direction).step
        # positions 0..n where 0 is the sentinel
        positions = len(self._candidates) + 1
        self._cursor = (self._cursor + 1 + step) % positions - 1

        if self._on_select is not None:
            item = self.selected
            text = self._original if item is None else candidate_text(item)
            self._on_select(text, item)
        return True

    def stop(self) -> None:
        """End the session and release the candidates."""
        self._candidates = []
        self._on_select = None
        self._original = ""
        self._cursor = SENTINEL
        self._active = False
