"""Import regression tests.

The core package is used by non interactive callers and must not pull in
the textual stack.
"""

import subprocess
import sys

import pytest


def imported_modules(import_statement: str) -> set[str]:
    """Top level modules loaded after running `import_statement` in a fresh interpreter."""
    result = subprocess.run(
        [
            sys.executable,
            "-c",
            f"{import_statement}\nimport sys\nprint('\\n'.join(sys.modules))",
        ],
        capture_output=True,
        text=True,
        check=True,
    )
    return {line.split(".")[0] for line in result.stdout.splitlines()}


@pytest.mark.parametrize(
    "import_stmt,forbidden",
    [
        pytest.param("import recall", {"textual", "rich", "piou"}, id="core-import"),
        pytest.param("from recall.formatter import HistoryFormatter", {"textual", "piou"}, id="formatter-import"),
    ],
)
def test_no_heavy_imports(import_stmt: str, forbidden: set[str]):
    loaded = imported_modules(import_stmt) & forbidden
    assert not loaded, f"{import_stmt!r} imported {sorted(loaded)}. Check for heavy imports added at module level."


def test_tui_import():
    assert "textual" in imported_modules("from recall.tui import HistoryApp")
