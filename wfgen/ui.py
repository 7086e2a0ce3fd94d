"""Console output for wfgen runs.

Status lines and panels go through one shared :mod:`rich` console, so
colour is dropped automatically when stdout is piped (CI, make).
Messages carry paths, service names and ARNs, so they are printed
literally; only the decorations use Rich markup.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console(stderr=False, force_terminal=None)

# (symbol, message style) per status kind
_STATUS = {
    "ok": ("[bold green]✓[/]", ""),
    "fail": ("[bold red]✗[/]", "red"),
    "warn": ("[bold yellow]⚠[/]", "yellow"),
    "step": ("[bold cyan]›[/]", ""),
    "info": ("[dim]·[/]", "dim"),
}


def _status(kind: str, msg: str) -> None:
    symbol, style = _STATUS[kind]
    text = escape(msg)
    if style:
        text = f"[{style}]{text}[/]"
    console.print(f"  {symbol} {text}", highlight=False)


def phase(title: str) -> None:
    """Header for one stage of a run (``CONFIG``, ``RENDER``, ...)."""
    console.print()
    console.print(f"[bold blue]── {escape(title)} ──[/]")


def ok(msg: str) -> None:
    _status("ok", msg)


def fail(msg: str) -> None:
    _status("fail", msg)


def warn(msg: str) -> None:
    _status("warn", msg)


def step(msg: str) -> None:
    _status("step", msg)


def info(msg: str) -> None:
    _status("info", msg)


def detail(key: str, value: str) -> None:
    """Indented ``key: value`` line."""
    console.print(f"    [bold]{escape(key)}[/]: {escape(value)}", highlight=False)


def _panel(title: str, body: str, colour: str) -> None:
    console.print()
    console.print(
        Panel(
            escape(body),
            title=f"[bold {colour}]{escape(title)}[/]",
            border_style=colour,
            padding=(1, 2),
        )
    )


def success_panel(title: str, body: str) -> None:
    _panel(title, body, "green")


def error_panel(title: str, body: str) -> None:
    _panel(title, body, "red")
