import pytest
from rich.console import Console

from recall import Entry
from recall.formatter import HistoryFormatter, entries_table


def _render(renderable) -> str:
    console = Console(width=120, force_terminal=False, color_system=None)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


@pytest.mark.parametrize(
    "show_secondary, expected_columns",
    [pytest.param(True, 2, id="with-title"), pytest.param(False, 1, id="without-title")],
)
def test_entries_table_columns(show_secondary, expected_columns):
    table = entries_table([Entry("https://example.org", "Example")], show_secondary=show_secondary)
    assert len(table.columns) == expected_columns
    assert table.row_count == 1


def test_entries_table_index():
    table = entries_table([Entry("a"), Entry("b")], show_index=True, show_secondary=False)
    out = _render(table)
    assert "1" in out and "2" in out
    assert len(table.columns) == 2


def test_values_not_parsed_as_markup():
    """History values are printed as is."""
    out = _render(entries_table([Entry("[bold]x[/bold]", "[red]title")]))
    assert "[bold]x[/bold]" in out
    assert "[red]title" in out


def test_print_entries_empty(capsys):
    HistoryFormatter().print_entries([], title="Commands")
    out = capsys.readouterr().out
    assert "Commands" in out
    assert "No history" in out
