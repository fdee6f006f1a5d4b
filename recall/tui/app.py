from __future__ import annotations

import logging

from rich.text import Text

try:
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.events import Key
    from textual.widgets import Input, Rule, Static
except ImportError as e:
    raise ImportError("The completion app requires textual. Install recall-history[tui] or the 'textual' package.") from e

from ..navigator import Navigator
from ..query import COMPLETION_TYPES, fill_candidates, filter_candidates
from ..store import HistoryStore
from ..types import Direction, Entry, HistoryType
from .picker import CandidatePicker

__all__ = ("CssClass", "HistoryApp")

logger = logging.getLogger(__name__)


class CssClass:
    MESSAGE = "message"
    HINT = "hint"


class HistoryApp(App):
    """Interactive prompt backed by a history store.

    - Tab / Shift+Tab cycle through the history entries matching every word
      of the input (case insensitive, title included).
    - Up / Down step through the command or search history starting with the
      input, the typed text comes back after the last match.
    - Enter records the input, Escape compacts the history files and quits.
    """

    BINDINGS = [("escape", "quit", "Quit")]
    DEFAULT_CSS = """
    #messages {
        height: 1fr;
    }
    #input-row {
        height: auto;
    }
    #prompt {
        width: auto;
        padding: 1 1 0 0;
    }
    #hint {
        color: $text-muted;
        display: none;
    }
    """

    def __init__(
        self,
        store: HistoryStore,
        history_type: HistoryType = HistoryType.COMMAND,
        *,
        ansi_color: bool = True,
        prompt: str | None = None,
    ):
        super().__init__(ansi_color=ansi_color)
        self.store = store
        self.history_type = history_type
        self.prompt = prompt or self._default_prompt(history_type)
        self.completion: Navigator[Entry] = Navigator()
        self.stepper: Navigator[str] = Navigator()
        self.suppress_input_change = False

    @staticmethod
    def _default_prompt(history_type: HistoryType) -> str:
        return {HistoryType.COMMAND: ":", HistoryType.SEARCH: "/", HistoryType.URL: "open "}[history_type]

    async def action_quit(self) -> None:
        """Compact the history files and quit."""
        self.store.cleanup()
        await super().action_quit()

    def compose(self) -> ComposeResult:
        yield Vertical(id="messages")
        yield Rule(id="rule-above")
        with Horizontal(id="input-row"):
            yield Static(self.prompt, id="prompt")
            yield Input()
        yield Rule(id="rule-below")
        yield Static(id="hint", classes=CssClass.HINT)
        yield CandidatePicker(show_secondary=self.store.context.title_in_completion, id="candidates")

    def on_mount(self) -> None:
        self._picker = self.query_one(CandidatePicker)
        self.query_one(Input).focus()
        if not self.store.context.enabled:
            self._set_hint("History is disabled")

    # Input events

    def on_input_changed(self, event: Input.Changed) -> None:
        """Typing ends any running completion and refreshes the candidates."""
        if self.suppress_input_change:
            self.suppress_input_change = False
            return
        self.completion.stop()
        self.stepper.stop()
        if self.store.context.enabled:
            self._set_hint(None)
        self._refresh_candidates(event.value)

    def on_key(self, event: Key) -> None:
        if event.key in ("tab", "shift+tab"):
            event.prevent_default()
            event.stop()
            self._on_complete(Direction.BACKWARD if event.key == "shift+tab" else Direction.FORWARD)
        elif event.key in ("up", "down"):
            event.prevent_default()
            event.stop()
            self._on_step(Direction.FORWARD if event.key == "up" else Direction.BACKWARD)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Record the input in the history."""
        value = event.value.strip()
        if not value:
            return
        selected = self._selected_entry(value)
        title = selected.secondary if selected is not None else None
        self.completion.stop()
        self.stepper.stop()
        if not self.store.add(self.history_type, value, title):
            logger.debug("Input %r was not recorded", value)
        self._add_message(f"{self.prompt}{value}")
        event.input.value = ""

    # Completion

    def completion_candidates(self, text: str) -> list[Entry]:
        """History entries matching every term of `text`, most recent first."""
        if self.history_type in COMPLETION_TYPES:
            candidates = fill_candidates(self.store, self.history_type)
        else:
            candidates = list(reversed(self.store.load(self.history_type)))
        return filter_candidates(candidates, text)

    def _refresh_candidates(self, text: str) -> None:
        if text.strip():
            self._picker.set_entries(self.completion_candidates(text))
        else:
            self._picker.clear()

    def _on_complete(self, direction: Direction) -> None:
        inp = self.query_one(Input)
        if not self.completion.is_active:
            self.stepper.stop()
            candidates = self.completion_candidates(inp.value)
            if candidates != self._picker.entries:
                self._picker.set_entries(candidates)
            self.completion.start(candidates, self._on_completion_select, direction, original=inp.value)
        if not self.completion.next(direction):
            self._set_hint("No match")

    def _on_completion_select(self, text: str, item: Entry | None) -> None:
        self._set_input(text)
        self._picker.highlight(self.completion.cursor)

    # Inline history stepping

    def _on_step(self, direction: Direction) -> None:
        inp = self.query_one(Input)
        if not self.stepper.is_active:
            self.completion.stop()
            query, *matching = self.store.get_list(self.history_type, inp.value) or [inp.value]
            self.stepper.start(matching, self._on_step_select, Direction.FORWARD, original=query)
        self.stepper.next(direction)

    def _on_step_select(self, text: str, item: str | None) -> None:
        self._set_input(text)

    # UI helpers

    def _selected_entry(self, value: str) -> Entry | None:
        selected = self.completion.selected
        if selected is not None and selected.primary == value:
            return selected
        return None

    def _set_input(self, text: str) -> None:
        inp = self.query_one(Input)
        if inp.value != text:
            self.suppress_input_change = True
            inp.value = text
        inp.cursor_position = len(text)

    def _set_hint(self, text: str | None) -> None:
        hint = self.query_one("#hint", Static)
        hint.update(text or "")
        hint.display = bool(text)

    def _add_message(self, content: str) -> None:
        messages = self.query_one("#messages", Vertical)
        messages.mount(Static(Text(content), classes=CssClass.MESSAGE))
        self.call_after_refresh(messages.scroll_end, animate=False)
