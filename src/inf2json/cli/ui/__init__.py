from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from inf2json.cli.ui.formatters import (
    render_error,
    render_result_summary,
    render_warnings,
)

THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "error": "bold red",
        "muted": "dim",
        "path": "cyan",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    verbose: bool = False


def get_ui(*, verbose: bool = False, stderr: bool = False) -> UI:
    return UI(console=Console(theme=THEME, stderr=stderr), verbose=verbose)


__all__ = [
    "THEME",
    "UI",
    "get_ui",
    "render_error",
    "render_result_summary",
    "render_warnings",
]
