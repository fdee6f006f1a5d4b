from typing import Literal, Optional

from piou import Cli, CommandError, Option

from .context import HistoryContext, get_history_context, parse_history_max, set_history_context
from .exceptions import HistoryError
from .formatter import HistoryFormatter
from .log import configure_logging
from .query import COMPLETION_TYPES, fill_candidates, filter_candidates
from .store import HistoryStore
from .types import HistoryType

__all__ = ("cli", "run")

HistoryTypeName = Literal["command", "search", "url"]

cli = Cli(description="Command, search and URL history with completion")

cli.add_option("-v", "--verbose", help="Enable verbose output")
cli.add_option("-vv", "--debug", help="Enable debug output")
cli.add_option("--history-dir", help="Directory holding the history files", data_type=str, default="")
cli.add_option("--history-max", help="Maximum number of entries kept per history (0 disables)", data_type=str, default="")


def on_process(verbose: bool = False, debug: bool = False, history_dir: str = "", history_max: str = ""):
    """Build the history context from the environment and the global options."""
    configure_logging(verbose=verbose, debug=debug)
    try:
        ctx = HistoryContext.from_env()
        if history_dir:
            ctx = HistoryContext.from_dir(history_dir, ctx.history_max)
        if history_max:
            ctx.history_max = parse_history_max(history_max)
    except HistoryError as e:
        raise CommandError(str(e)) from e
    set_history_context(ctx)


cli.set_options_processor(on_process)

_formatter = HistoryFormatter()


def _get_store() -> HistoryStore:
    return HistoryStore(get_history_context())


@cli.command(cmd="add", help="Append an entry to a history")
def add_cmd(
    history_type: HistoryTypeName = Option(..., help="History to append to"),
    value: str = Option(..., help="Command, search term or URL"),
    title: Optional[str] = Option(None, "-t", "--title", help="Optional label (page title)"),
):
    """
    Entries are appended as is, duplicates are removed by `cleanup`.
    Nothing is written when the history max size is 0 or less.
    """
    if not _get_store().add(HistoryType(history_type), value, title):
        _formatter.print_error("Nothing was recorded")


@cli.command(cmd="list", help="Show a history, most recent first")
def list_cmd(
    history_type: HistoryTypeName = Option(..., help="History to show"),
    query: str = Option("", "-q", "--query", help="Only show entries containing every word"),
    numbered: bool = Option(False, "-n", "--numbered", help="Number the entries"),
    title: bool = Option(False, "--title", help="Print the history name above the entries"),
):
    """
    Matching is case insensitive and also looks at the title of URL entries.
    """
    store = _get_store()
    _type = HistoryType(history_type)
    if _type in COMPLETION_TYPES:
        entries = fill_candidates(store, _type)
    else:
        entries = list(reversed(store.load(_type)))
    HistoryFormatter(show_index=numbered).print_entries(
        filter_candidates(entries, query),
        show_secondary=store.context.title_in_completion,
        title=f"{history_type.capitalize()} history" if title else None,
    )


@cli.command(cmd="prefix", help="Show the command or search entries starting with a query")
def prefix_cmd(
    history_type: Literal["command", "search"] = Option(..., help="History to search"),
    query: str = Option(..., help="Prefix to look for"),
):
    """
    The query itself is printed first, followed by the matches, most recent first.
    """
    _formatter.print_values(_get_store().get_list(HistoryType(history_type), query))


@cli.command(cmd="cleanup", help="Remove duplicates and truncate the history files")
def cleanup_cmd():
    _get_store().cleanup()


@cli.command(cmd="tui", help="Interactive prompt with history completion")
def tui_cmd(
    history_type: HistoryTypeName = Option("command", "-t", "--type", help="History used by the prompt"),
):
    """
    Tab / Shift+Tab cycle through matching entries, Up / Down step through
    entries starting with the input. Escape compacts the history and quits.
    """
    from .tui import HistoryApp

    HistoryApp(_get_store(), HistoryType(history_type)).run()


def run():
    cli.run()


if __name__ == "__main__":
    run()
