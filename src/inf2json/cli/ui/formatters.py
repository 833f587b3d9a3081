from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from inf2json.core.models import Advisory, ConversionError, ConversionResult


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


# ----------------------------
# Warnings / errors
# ----------------------------

def render_warnings(
    console: Console,
    warnings: Sequence[Advisory],
    *,
    max_items: int = 25,
    verbose: bool = False,
) -> None:
    if not warnings:
        return

    console.print(f"[warn]⚠️  {len(warnings)} warning(s) during conversion.[/warn]")

    if not verbose:
        console.print("[muted]Run with --verbose to see details, or --strict to fail on them.[/muted]")
        return

    shown = list(warnings)[:max_items]
    for w in shown:
        where = f"line {w.line}: " if w.line else ""
        console.print(f"- {where}{escape(_short(w.message, 160))}")

    if len(warnings) > len(shown):
        console.print(f"[muted]… and {len(warnings) - len(shown)} more[/muted]")


def render_error(console: Console, error: ConversionError, *, source: Optional[Path] = None) -> None:
    prefix = f"[path]{escape(str(source))}[/path]: " if source else ""
    console.print(f"[error]✖ {error.type}[/error] {prefix}{escape(error.message)}")


# ----------------------------
# Summary
# ----------------------------

def render_result_summary(
    console: Console,
    result: ConversionResult,
    *,
    header: str = "Summary",
    extra_lines: Optional[List[str]] = None,
) -> None:
    extra_lines = extra_lines or []
    s = result.stats

    cols: List[str] = [
        "status",
        "sections",
        "entries",
        "commented",
        "comments",
        "bytes",
        "warnings",
        "duration_ms",
    ]
    vals: List[str] = [
        ("ok" if result.success else "failed") + (" (dry run)" if result.dry_run else ""),
        str(s.sections),
        str(s.entries),
        str(s.inactive_entries),
        str(s.comments),
        str(s.byte_size),
        str(len(result.warnings)),
        str(s.duration_ms),
    ]

    # optional extras like "output: out.json" become additional columns
    for line in extra_lines:
        if ":" in line:
            k, v = line.split(":", 1)
            cols.append(k.strip())
            vals.append(v.strip())
        else:
            cols.append("note")
            vals.append(line)

    table = Table(title=header, show_header=True, show_lines=False)
    for c in cols:
        table.add_column(c, style="bold", no_wrap=True)
    table.add_row(*vals)

    console.print()
    console.print(table)
