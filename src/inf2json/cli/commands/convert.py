from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.markup import escape

from inf2json.cli.ui import get_ui, render_error, render_result_summary, render_warnings
from inf2json.cli.utils.files import derive_output_path, read_input, write_output
from inf2json.core.config import CONFIG_TABLE, load_options
from inf2json.core.errors import ExitCode
from inf2json.core.engine import run_conversion
from inf2json.core.models import Encoding


def _overrides(**values: Any) -> Dict[str, Any]:
    # only flags the user actually passed override config files
    return {CONFIG_TABLE: {k: v for k, v in values.items() if v is not None}}


def convert_cmd(
    source: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="INF/INI file to convert."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (defaults to SOURCE with .json/.jsonc)."
    ),
    no_type_conversion: Optional[bool] = typer.Option(
        None,
        "--no-type-conversion/--type-conversion",
        help="Keep every value as a JSON string.",
    ),
    strip_quotes: Optional[bool] = typer.Option(
        None, "--strip-quotes/--keep-quotes", help="Strip one pair of surrounding quotes."
    ),
    empty_as_null: Optional[bool] = typer.Option(
        None, "--empty-as-null/--empty-as-string", help="Render empty values as null."
    ),
    yes_no_as_boolean: Optional[bool] = typer.Option(
        None, "--yes-no-as-boolean/--yes-no-as-string", help="Render Yes/No as true/false."
    ),
    preserve_comments: Optional[bool] = typer.Option(
        None,
        "--preserve-comments/--drop-comments",
        help="Write JSONC keeping comments and commented-out entries.",
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Fail on warnings (duplicate keys, empty sections, ...)."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Run the whole conversion but do not write the output."
    ),
    max_sections: Optional[int] = typer.Option(
        None, "--max-sections", min=1, help="Maximum number of sections (default 10000)."
    ),
    max_file_size_mb: Optional[int] = typer.Option(
        None, "--max-file-size-mb", min=1, help="Maximum input size in MB (default 100)."
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", min=1, help="Maximum JSON nesting depth (default 10)."
    ),
    default_section: Optional[str] = typer.Option(
        None, "--default-section", help="Section for keys before the first header (default _global_)."
    ),
    encoding: Optional[Encoding] = typer.Option(
        None, "--encoding", case_sensitive=False, help="Output encoding."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite without asking."),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    ui = get_ui(verbose=verbose)
    console = ui.console

    loaded = load_options(
        start_dir=source.resolve().parent,
        cli_overrides=_overrides(
            no_type_conversion=no_type_conversion,
            strip_quotes=strip_quotes,
            empty_as_null=empty_as_null,
            yes_no_as_boolean=yes_no_as_boolean,
            preserve_comments=preserve_comments,
            strict_mode=strict,
            dry_run=dry_run or None,
            max_sections=max_sections,
            max_file_size_mb=max_file_size_mb,
            depth=depth,
            default_section=default_section,
            encoding=encoding,
        ),
    )
    options = loaded.options

    if ui.verbose:
        console.print("[bold]Config sources:[/bold]")
        console.print(f"  global: {loaded.global_path or '-'}")
        console.print(f"  repo:   {loaded.repo_path or '-'}")
        console.print(f"[muted]Reading[/muted] [path]{escape(str(source))}[/path]")

    text = read_input(source)
    result = run_conversion(text, options)
    target = derive_output_path(
        source, preserve_comments=options.preserve_comments, output=output
    )

    if not result.success or result.output is None:
        if result.error is not None:
            render_error(console, result.error, source=source)
        raise typer.Exit(code=int(ExitCode.ERROR))

    render_warnings(console, result.warnings, verbose=ui.verbose)

    if options.dry_run:
        console.print(f"[muted]Dry run: would write[/muted] [path]{escape(str(target))}[/path]")
    else:
        if target.exists() and not force:
            if not typer.confirm(f"{target} exists. Overwrite?", default=False):
                console.print(f"[warn]Not overwriting[/warn] [path]{escape(str(target))}[/path]")
                raise typer.Exit(code=int(ExitCode.OK))
        write_output(target, result.output, encoding=options.encoding)
        console.print(f"[ok]✅ Wrote[/ok] [path]{escape(str(target))}[/path]")

    if ui.verbose:
        render_result_summary(console, result, extra_lines=[f"output: {target}"])

    raise typer.Exit(code=int(ExitCode.OK))
