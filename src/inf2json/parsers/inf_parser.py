from __future__ import annotations

from typing import Iterable, List, Optional

from inf2json.core.document import Comment, CommentKind, Document, Entry, Section
from inf2json.core.models import ConversionOptions
from inf2json.core.validator import check_file_size, check_options, count_sections
from inf2json.parsers.tokenizer import tokenize
from inf2json.parsers.types import Token, TokenType


def _retag(comments: List[Comment], kind: CommentKind) -> List[Comment]:
    return [Comment(text=c.text, kind=kind, line=c.line) for c in comments]


def _inline(tok: Token) -> Optional[Comment]:
    if tok.inline_comment is None:
        return None
    return Comment(text=tok.inline_comment, kind=CommentKind.TRAILING, line=tok.line)


class _Folder:
    """
    Second parser pass: fold a flat token stream into a Document.

    Association rules:
      - comments directly above a header or entry lead it
      - comments cut off from the next header by a blank line trail the
        section they sit in (or open the document if no section exists yet)
      - comments above an entry lead it even across blank lines
      - a commented `[Name]` opens a commented section that takes the
        commented entries and comments after it, up to a blank or active line
    """

    def __init__(self, default_section: str) -> None:
        self.default_section = default_section
        self.doc = Document()
        self.current: Optional[Section] = None
        self.block: Optional[Section] = None
        self.pending: List[Comment] = []    # directly above the next line
        self.detached: List[Comment] = []   # separated from it by a blank line

    # ---- helpers ----

    def _take_leading(self) -> List[Comment]:
        out = self.pending
        self.pending = []
        return out

    def _container(self) -> Optional[Section]:
        return self.block or self.current

    def _trail(self, comments: List[Comment], container: Optional[Section]) -> None:
        if not comments:
            return
        if container is not None:
            container.trailing_comments.extend(_retag(comments, CommentKind.TRAILING))
        else:
            self.doc.leading_comments.extend(_retag(comments, CommentKind.STANDALONE_BLOCK))

    def _section(self, active: bool) -> Section:
        # the implicit default section stays commented until it gets a live entry
        if self.current is None:
            self.current = Section(name=self.default_section, is_active=active)
            self.doc.sections.append(self.current)
        elif active and not self.current.is_active:
            self.current.is_active = True
        return self.current

    # ---- token handlers ----

    def feed(self, tok: Token) -> None:
        if tok.type == TokenType.COMMENT:
            self.pending.append(Comment(text=tok.comment or "", line=tok.line))
        elif tok.type == TokenType.BLANK:
            self._blank()
        elif tok.type == TokenType.HEADER:
            self._header(tok)
        else:
            self._key_value(tok)

    def _blank(self) -> None:
        if self.block is not None:
            self._trail(self.pending, self.block)
            self.pending = []
            self.block = None
            return
        self.detached.extend(self.pending)
        self.pending = []

    def _header(self, tok: Token) -> None:
        self._trail(self.detached, self._container())
        self.detached = []

        section = Section(
            name=tok.name or self.default_section,
            leading_comments=self._take_leading(),
            inline_comment=_inline(tok),
            is_active=tok.active,
            line=tok.line,
        )
        self.doc.sections.append(section)
        if tok.active:
            self.current = section
            self.block = None
        else:
            self.block = section

    def _key_value(self, tok: Token) -> None:
        if tok.active:
            self.block = None

        if self._container() is None:
            self._trail(self.detached, None)
            self.detached = []
        leading = self.detached + self._take_leading()
        self.detached = []

        entry = Entry(
            key=tok.key or "",
            raw_value=tok.value or "",
            is_active=tok.active,
            leading_comments=leading,
            inline_comment=_inline(tok),
            line=tok.line,
        )
        if self.block is not None and not tok.active:
            target = self.block
        else:
            target = self._section(tok.active)
        target.entries.append(entry)

    def finish(self) -> Document:
        container = self._container()
        if container is None:
            self._trail(self.detached, None)
            self.doc.trailing_comments.extend(
                _retag(self.pending, CommentKind.STANDALONE_BLOCK)
            )
        else:
            self._trail(self.detached + self.pending, container)
        self.detached = []
        self.pending = []
        return self.doc


def fold(tokens: Iterable[Token], default_section: str) -> Document:
    folder = _Folder(default_section)
    for tok in tokens:
        folder.feed(tok)
    return folder.finish()


def parse_inf(text: str, options: Optional[ConversionOptions] = None) -> Document:
    """
    Parse INF/INI text into an ordered Document.

    Raises ValidationError for out-of-range options, LimitExceededError for
    oversize input or too many sections, ParseError for malformed lines.
    """
    options = options or ConversionOptions()
    check_options(options)
    check_file_size(text, options)

    tokens = count_sections(tokenize(text), options.max_sections)
    return fold(tokens, options.default_section.strip())
