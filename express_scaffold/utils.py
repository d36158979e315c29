"""Shared console and file helpers for express-scaffold.

All user-facing output goes through a single Rich console so that the CLI,
the generator and the pipeline print consistently, and so tests can swap in
a quiet console.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str, out: Console | None = None) -> None:
    """Print a dim progress line for a pipeline step."""
    (out or console).print(f"  [green]+[/green] {message}")


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{message}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[bold red]{message}[/bold red]")


def print_warning(message: str, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    (out or console).print(f"[bold yellow]{message}[/bold yellow]")


def print_summary_table(
    data: dict[str, str], title: str = "Summary", out: Console | None = None
) -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    target = out or console
    target.print(table)
    target.print()


def print_next_steps(steps: list[str], out: Console | None = None) -> None:
    """Print the shell commands a user runs after generation."""
    body = "\n".join(f"  {step}" for step in steps)
    (out or console).print(
        Panel(body, title="[bold]Next steps[/bold]", border_style="bright_cyan")
    )
