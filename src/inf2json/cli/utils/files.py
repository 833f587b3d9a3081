from __future__ import annotations

from pathlib import Path
from typing import Optional

from inf2json.core.engine import encode_output
from inf2json.core.models import Encoding

_UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def read_input(path: Path) -> str:
    """INF files are commonly UTF-16 with a BOM; everything else is read as UTF-8."""
    data = path.read_bytes()
    if data.startswith(_UTF16_BOMS):
        return data.decode("utf-16", errors="replace")
    return data.decode("utf-8-sig", errors="replace")


def derive_output_path(source: Path, *, preserve_comments: bool, output: Optional[Path] = None) -> Path:
    if output is not None:
        return output
    return source.with_suffix(".jsonc" if preserve_comments else ".json")


def write_output(path: Path, content: str, *, encoding: Encoding) -> int:
    data = encode_output(content, encoding)
    if path.parent != Path(""):
        ensure_dir(path.parent)
    path.write_bytes(data)
    return len(data)


def write_file(path: Path, content: str, *, force: bool) -> bool:
    if path.exists() and not force:
        return False
    path.write_text(content, encoding="utf-8")
    return True
