from __future__ import annotations

from rich.text import Text
from textual.containers import Vertical
from textual.widgets import Static

from ..navigator import SENTINEL
from ..types import Entry

__all__ = ("CandidatePicker",)


class CandidatePicker(Vertical):
    """Shows the completion candidates matching the current input.

    Rows are recomputed on every input change; the highlighted row follows
    the completion navigator cursor.
    """

    DEFAULT_CSS = """
    CandidatePicker {
        background: transparent;
        height: auto;
        display: none;
    }

    CandidatePicker .cp-item {
        background: transparent;
        padding: 0;
        margin: 0;
        height: 1;
        color: #cc8800;
    }

    CandidatePicker .cp-item.cp-selected {
        color: #ffaa00;
        text-style: bold;
    }
    """

    def __init__(self, max_rows: int = 10, show_secondary: bool = True, **kwargs) -> None:
        super().__init__(**kwargs)
        self.max_rows = max_rows
        self.show_secondary = show_secondary
        self.entries: list[Entry] = []
        self.selected_index: int = SENTINEL

    def set_entries(self, entries: list[Entry]) -> None:
        """Populate the picker, nothing is highlighted."""
        self.remove_children()
        self.entries = list(entries)
        self.selected_index = SENTINEL
        if not entries:
            self.display = False
            return

        visible = entries[: self.max_rows]
        width = max(len(e.primary) for e in visible) + 2
        for entry in visible:
            text = Text(f"{entry.primary:<{width}}")
            if self.show_secondary and entry.secondary:
                text.append(entry.secondary, style="dim")
            self.mount(Static(text, classes="cp-item"))
        self.display = True

    def highlight(self, index: int) -> None:
        """Highlight the row at `index`, SENTINEL clears the highlight."""
        self.selected_index = index
        for i, child in enumerate(self.query(".cp-item")):
            child.set_class(i == index, "cp-selected")

    def clear(self) -> None:
        self.remove_children()
        self.entries = []
        self.selected_index = SENTINEL
        self.display = False
