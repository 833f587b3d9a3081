from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from inf2json.core.models import ConversionOptions

# Python 3.11+ has tomllib; for 3.9/3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


# Project-local config (next to the INF files being converted)
DEFAULT_REPO_CONFIG_FILES = (
    ".inf2json/config.toml",
    ".inf2json/config.yaml",
)

# Global config (applies on this machine for all conversions)
DEFAULT_GLOBAL_CONFIG_FILES = (
    "~/.config/inf2json/config.toml",
    "~/.inf2json/config.toml",
)

CONFIG_TABLE = "convert"


def _read_toml(path: Path) -> Dict[str, Any]:
    data = tomllib.loads(path.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(data, dict):
        return {}
    return data


def _read_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(data, dict):
        return {}
    return data


def read_config_file(path: Path) -> Dict[str, Any]:
    if path.suffix.lower() in (".yaml", ".yml"):
        return _read_yaml(path)
    return _read_toml(path)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge override into base (dict-only). Lists/scalars are replaced.
    """
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)  # type: ignore[arg-type]
        else:
            out[k] = v
    return out


def _expand_paths(paths: tuple[str, ...]) -> list[Path]:
    return [Path(p).expanduser().resolve() for p in paths]


def find_repo_config(start_dir: Path) -> Optional[Path]:
    """
    Walk upward to find a project-local config.
    Finds the closest config in parent chain; TOML wins over YAML in one directory.
    """
    cur = start_dir.resolve()
    for parent in [cur, *cur.parents]:
        for rel in DEFAULT_REPO_CONFIG_FILES:
            p = (parent / rel).resolve()
            if p.exists() and p.is_file():
                return p
    return None


def find_global_config() -> Optional[Path]:
    for p in _expand_paths(DEFAULT_GLOBAL_CONFIG_FILES):
        if p.exists() and p.is_file():
            return p
    return None


@dataclass(frozen=True)
class LoadedConfig:
    options: ConversionOptions
    global_path: Optional[Path]
    repo_path: Optional[Path]


def load_options(
    start_dir: Path,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> LoadedConfig:
    """
    Precedence (lowest -> highest):
      defaults (ConversionOptions) ->
      global config ->
      repo config (closest) ->
      cli_overrides
    """
    cli_overrides = cli_overrides or {}

    global_path = find_global_config()
    repo_path = find_repo_config(start_dir)

    merged: Dict[str, Any] = {}

    if global_path:
        merged = _deep_merge(merged, read_config_file(global_path))

    if repo_path:
        merged = _deep_merge(merged, read_config_file(repo_path))

    # CLI overrides are expected in the same shape as the file (namespaced)
    merged = _deep_merge(merged, cli_overrides)

    table = merged.get(CONFIG_TABLE) or {}
    if not isinstance(table, dict):
        table = {}
    options = ConversionOptions.model_validate(table)

    return LoadedConfig(options=options, global_path=global_path, repo_path=repo_path)
