# dealscope/cli_theme.py
"""Terminal theme for the DEALSCOPE CLI.

Teal and sand palette, readable on light and dark terminals:
  - Numbered section headers ("01 · SECTION NAME")
  - Rounded key/value tables with sand borders
  - Reverse-styled badges for grades and pathway stages
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from rich import box
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.style import Style
from rich.table import Table
from rich.text import Text

BRAND = "D E A L S C O P E"
TAGLINE = "Deal extraction and strategy grading for investment pipelines"

TEAL = "#2A9D8F"
SAND = "#C9B79C"
MUTED = "dim"

GRADE_COLORS = {
    "A": "green",
    "A-": "green",
    "B": TEAL,
    "B-": TEAL,
    "C": "yellow",
    "D": "red",
    "F": "red",
}


def print_version(version: str, console: Console) -> None:
    t = Text()
    t.append(BRAND, style=f"bold {TEAL}")
    t.append(f"  v{version}", style=MUTED)
    console.print(t)


def section(title: str, console: Console, number: str | None = None) -> None:
    """Print a numbered section header with a sand rule."""
    console.print()
    t = Text()
    if number:
        t.append(f"  {number}", style=f"bold {TEAL}")
        t.append(" · ", style=MUTED)
    else:
        t.append("  ")
    t.append(title.upper(), style="bold")
    console.print(t)
    console.print(f"  {'─' * len(TAGLINE)}", style=SAND)


def make_kv_table() -> Table:
    """Headerless two-column key/value table."""
    t = Table(
        show_header=False,
        box=box.ROUNDED,
        border_style=SAND,
        padding=(0, 1),
    )
    t.add_column("Key", style=f"bold {TEAL}", no_wrap=True)
    t.add_column("Value", overflow="fold")
    return t


def make_clean_table(**kwargs: object) -> Table:
    return Table(
        box=None,
        show_edge=False,
        pad_edge=False,
        header_style=MUTED,
        padding=(0, 2),
        **kwargs,
    )


def badge(label: str, color: str = TEAL) -> str:
    return f"[reverse {color}] {label} [/reverse {color}]"


def grade_badge(letter: str) -> str:
    return badge(letter, GRADE_COLORS.get(letter, TEAL))


def info(msg: str) -> str:
    return f"  [{TEAL}]›[/{TEAL}] [{MUTED}]{msg}[/{MUTED}]"


def ok(msg: str) -> str:
    return f"  [bold green]✓[/bold green] {msg}"


def warn(msg: str) -> str:
    return f"  [bold yellow]![/bold yellow] [yellow]{msg}[/yellow]"


@contextmanager
def spinner(label: str, console: Console) -> Generator[None, None, None]:
    """Transient spinner shown while waiting on the model."""
    p = Progress(
        TextColumn(" "),
        SpinnerColumn("dots", style=Style(color=TEAL)),
        TextColumn(f"[{MUTED}]{label}[/{MUTED}]"),
        console=console,
        transient=True,
    )
    with p:
        p.add_task(label, total=None)
        yield
