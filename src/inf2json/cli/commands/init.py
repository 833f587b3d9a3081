from __future__ import annotations

from pathlib import Path

import typer

from inf2json.cli.utils.files import ensure_dir, write_file

DEFAULT_CONFIG_TOML = """\
[convert]
# type conversion
no_type_conversion = false
strip_quotes = false
empty_as_null = false
yes_no_as_boolean = false

# output
preserve_comments = false
strict_mode = false
encoding = "UTF8"  # UTF8, ASCII, Unicode, UTF7, UTF32, Default

# limits
max_sections = 10000
max_file_size_mb = 100
depth = 10

default_section = "_global_"
"""


def init_cmd(
    path: Path = typer.Argument(Path("."), help="Directory to initialize."),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files."),
) -> None:
    root = path.resolve()
    cfg_dir = root / ".inf2json"
    ensure_dir(cfg_dir)

    cfg_file = cfg_dir / "config.toml"
    if write_file(cfg_file, DEFAULT_CONFIG_TOML, force=force):
        typer.echo(f"Initialized {cfg_file}")
    else:
        typer.echo(f"{cfg_file} already exists (use --force to overwrite)")
