from __future__ import annotations

from typing import Optional, Sequence

from inf2json.convert.escape import ascii_text
from inf2json.core.document import Comment, Document, Entry, Section
from inf2json.core.models import ConversionOptions
from inf2json.core.validator import check_depth
from inf2json.emit.json_writer import JsonWriter

COMMENT_PREFIX = "//"


class JsoncWriter(JsonWriter):
    """
    JSON with `//` line comments.

    Commented-out source lines come back as commented JSON: removing the
    `// ` prefix from an inactive entry or a commented section block gives
    the member it would have produced. Commented lines always end with `,`.
    Uncommenting one after the last live member of an object needs a comma
    added to that member and its own trailing comma dropped by hand.
    """

    def write_comments(self, comments: Sequence[Comment], level: int) -> None:
        ind = self.indent(level)
        for c in comments:
            text = ascii_text(c.text) if self.options.encoding.ascii_only else c.text
            self.lines.append(f"{ind}{COMMENT_PREFIX} {text}" if text else f"{ind}{COMMENT_PREFIX}")

    def write_inactive_entry(self, entry: Entry, level: int) -> None:
        self.lines.append(
            f"{self.indent(level)}{COMMENT_PREFIX} {self.member(entry.key, entry.raw_value)},"
        )

    def write_inactive_section(self, section: Section, level: int) -> None:
        check_depth(level + 1, self.options)
        self.write_comments(section.leading_comments, level)

        block = JsoncWriter(self.options)
        block.write_section(
            section.name,
            [section],
            level=0,
            last=False,
            activate=True,
            with_leading=False,
        )

        ind = self.indent(level)
        for line in block.lines:
            self.lines.append(f"{ind}{COMMENT_PREFIX} {line}")


def serialize_with_comments(
    document: Document, flags: Optional[ConversionOptions] = None
) -> str:
    """Render a Document as JSONC, keeping comments and commented-out entries."""
    return JsoncWriter(flags or ConversionOptions()).render(document)
