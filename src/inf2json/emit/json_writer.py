from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from inf2json.convert.converter import convert
from inf2json.convert.escape import quote
from inf2json.core.document import Comment, Document, Entry, Section, TypedValue, ValueKind
from inf2json.core.models import ConversionOptions
from inf2json.core.validator import check_depth

INDENT = "    "


# ----------------------------
# Value rendering
# ----------------------------

def render_value(tv: TypedValue, *, strict: bool = False, ascii_only: bool = False) -> str:
    if tv.kind == ValueKind.STRING:
        return quote(tv.value, strict=strict, ascii_only=ascii_only)
    if tv.kind == ValueKind.INTEGER:
        return str(int(tv.value))
    if tv.kind == ValueKind.FLOAT:
        return repr(float(tv.value))
    if tv.kind == ValueKind.BOOLEAN:
        return "true" if tv.value else "false"
    if tv.kind == ValueKind.NULL:
        return "null"
    raise ValueError(f"Unknown value kind: {tv.kind!r}")


# ----------------------------
# Section grouping
# ----------------------------

@dataclass
class MergedSection:
    """All active sections sharing one name, in encounter order."""
    name: str
    parts: List[Section] = field(default_factory=list)


RootItem = Union[MergedSection, Section]

# ("entry" | "inactive", Entry) or ("comments", List[Comment])
_Item = Tuple[str, object]


def group_sections(document: Document) -> List[RootItem]:
    """
    Root members in first-appearance order. Commented sections stay
    standalone and are never merged into active ones.
    """
    out: List[RootItem] = []
    by_name: Dict[str, MergedSection] = {}
    for s in document.sections:
        if not s.is_active:
            out.append(s)
            continue
        m = by_name.get(s.name)
        if m is None:
            m = MergedSection(name=s.name)
            by_name[s.name] = m
            out.append(m)
        m.parts.append(s)
    return out


def section_items(parts: Sequence[Section], *, activate: bool = False) -> List[_Item]:
    """
    Flatten section parts into body items in source order.

    A repeated active key is emitted once, at its first position, with the
    value of its last occurrence. `activate` treats commented entries as
    live (used when rendering a commented section as a block).
    """
    def live(e: Entry) -> bool:
        return e.is_active or activate

    final: Dict[str, Entry] = {}
    for p in parts:
        for e in p.entries:
            if live(e):
                final[e.key] = e

    items: List[_Item] = []
    emitted = set()
    for idx, p in enumerate(parts):
        if idx > 0:
            extra: List[Comment] = list(p.leading_comments)
            if p.inline_comment:
                extra.append(p.inline_comment)
            items.append(("comments", extra))

        for e in p.entries:
            items.append(("comments", e.leading_comments))
            if not live(e):
                items.append(("inactive", e))
            elif e.key not in emitted:
                emitted.add(e.key)
                items.append(("entry", final[e.key]))
            if e.inline_comment:
                items.append(("comments", [e.inline_comment]))

        items.append(("comments", p.trailing_comments))

    return [it for it in items if it[0] != "comments" or it[1]]


# ----------------------------
# Writer
# ----------------------------

class JsonWriter:
    """
    Line-oriented JSON writer.

    Comment hooks are no-ops here; JsoncWriter fills them in without touching
    any JSON line, so stripping its `//` lines gives this writer's output.
    """

    def __init__(self, options: ConversionOptions) -> None:
        self.options = options
        self.lines: List[str] = []

    # ---- hooks ----

    def write_comments(self, comments: Sequence[Comment], level: int) -> None:
        pass

    def write_inactive_entry(self, entry: Entry, level: int) -> None:
        pass

    def write_inactive_section(self, section: Section, level: int) -> None:
        pass

    # ---- shared rendering ----

    @staticmethod
    def indent(level: int) -> str:
        return INDENT * level

    def quoted(self, text: str) -> str:
        return quote(text, strict=self.options.strict_mode, ascii_only=self.options.encoding.ascii_only)

    def member(self, key: str, raw_value: str) -> str:
        tv = convert(raw_value, self.options)
        value = render_value(
            tv, strict=self.options.strict_mode, ascii_only=self.options.encoding.ascii_only
        )
        return f"{self.quoted(key)}: {value}"

    def write_document(self, document: Document) -> None:
        self.write_comments(document.leading_comments, 0)
        check_depth(1, self.options)

        items = group_sections(document)
        merged = [it for it in items if isinstance(it, MergedSection)]

        if not merged:
            self.lines.append("{}")
            for it in items:
                self.write_inactive_section(it, 1)  # type: ignore[arg-type]
        else:
            self.lines.append("{")
            last = merged[-1]
            for it in items:
                if isinstance(it, MergedSection):
                    self.write_section(it.name, it.parts, level=1, last=it is last)
                else:
                    self.write_inactive_section(it, 1)
            self.lines.append("}")

        self.write_comments(document.trailing_comments, 0)

    def write_section(
        self,
        name: str,
        parts: Sequence[Section],
        *,
        level: int,
        last: bool,
        activate: bool = False,
        with_leading: bool = True,
    ) -> None:
        check_depth(level + 1, self.options)

        ind = self.indent(level)
        head = parts[0]
        comma = "" if last else ","
        key = self.quoted(name)

        if with_leading:
            self.write_comments(head.leading_comments, level)

        items = section_items(parts, activate=activate)
        entry_idx = [i for i, (kind, _) in enumerate(items) if kind == "entry"]
        last_entry: Optional[int] = entry_idx[-1] if entry_idx else None

        if last_entry is None:
            self.lines.append(f"{ind}{key}: {{}}{comma}")
            if head.inline_comment:
                self.write_comments([head.inline_comment], level)
            self._write_items(items, level + 1, None)
            return

        self.lines.append(f"{ind}{key}: {{")
        if head.inline_comment:
            self.write_comments([head.inline_comment], level)
        self._write_items(items, level + 1, last_entry)
        self.lines.append(f"{ind}}}{comma}")

    def _write_items(self, items: List[_Item], level: int, last_entry: Optional[int]) -> None:
        for i, (kind, payload) in enumerate(items):
            if kind == "entry":
                e: Entry = payload  # type: ignore[assignment]
                comma = "" if i == last_entry else ","
                self.lines.append(f"{self.indent(level)}{self.member(e.key, e.raw_value)}{comma}")
            elif kind == "inactive":
                self.write_inactive_entry(payload, level)  # type: ignore[arg-type]
            else:
                self.write_comments(payload, level)  # type: ignore[arg-type]

    def render(self, document: Document) -> str:
        self.lines = []
        self.write_document(document)
        return "\n".join(self.lines) + "\n"


def serialize(document: Document, flags: Optional[ConversionOptions] = None) -> str:
    """Render a Document as plain JSON; commented entries and sections are dropped."""
    return JsonWriter(flags or ConversionOptions()).render(document)
