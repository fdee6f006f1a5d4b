from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console, RenderableType
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from .types import Entry

__all__ = ("HistoryFormatter", "entries_table")


def pad(s: RenderableType, padding_left: int = 1):
    return Padding(s, (0, padding_left))


def entries_table(
    entries: list[Entry],
    *,
    show_secondary: bool = True,
    primary_color: str = "cyan",
    secondary_color: str = "white",
    show_index: bool = False,
) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    if show_index:
        table.add_column(justify="right", style="dim")
    table.add_column(style=primary_color, overflow="fold")
    if show_secondary:
        table.add_column(style=secondary_color, overflow="fold")
    for i, entry in enumerate(entries, start=1):
        # Text() so that history values are never parsed as markup
        row: list[RenderableType] = [Text(entry.primary)]
        if show_secondary:
            row.append(Text(entry.secondary or ""))
        if show_index:
            row.insert(0, str(i))
        table.add_row(*row)
    return table


@dataclass
class HistoryFormatter:
    _console: Console = field(init=False, default_factory=lambda: Console(markup=True, highlight=False))
    primary_color: str = "cyan"
    secondary_color: str = "white"
    show_index: bool = False

    def __post_init__(self):
        self.print_fn = self._console.print

    def print_entries(self, entries: list[Entry], show_secondary: bool = True, title: Optional[str] = None):
        if title:
            self.print_fn(f"[bold]{title}[/bold]")
        if not entries:
            self.print_fn(pad("[dim]No history[/dim]"))
            return
        self.print_fn(
            pad(
                entries_table(
                    entries,
                    show_secondary=show_secondary,
                    primary_color=self.primary_color,
                    secondary_color=self.secondary_color,
                    show_index=self.show_index,
                )
            )
        )

    def print_values(self, values: list[str]):
        for value in values:
            self.print_fn(Text(value))

    def print_error(self, message: str):
        self.print_fn(f"[red]{message}[/red]")
