from __future__ import annotations

import typer
from rich.console import Console

from inf2json import __version__
from inf2json.cli.commands.convert import convert_cmd
from inf2json.cli.commands.init import init_cmd

app = typer.Typer(
    name="inf2json",
    help="Convert INF/INI configuration files to JSON, or JSONC that keeps their comments.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"inf2json {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback
    ),
) -> None:
    pass


app.command("convert")(convert_cmd)
app.command("init")(init_cmd)
