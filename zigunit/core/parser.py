"""Lexical scanner for named Zig test blocks.

Recognises ``test "<title>" { ... }`` without parsing the rest of the
language. The scan tracks just enough lexical state for brace counting to
be reliable: braces inside string literals, character literals, line
strings (``\\\\``) and comments never count.

Container declarations (``const Name = struct {``) are tracked as well so
each test gets a qualified name reflecting where it was declared.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .errors import ParseError
from .models import TestDescriptor
from .naming import fallback_id

logger = logging.getLogger(__name__)

CONTAINER_KEYWORDS = frozenset({"struct", "union", "enum", "opaque"})
CONTAINER_MODIFIERS = frozenset({"extern", "packed"})

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}


class _State(Enum):
    CODE = "code"
    STRING = "string"
    CHAR = "char"
    COMMENT = "comment"
    LINE_STRING = "line_string"


@dataclass
class _OpenTest:
    title: str
    qualified_name: str
    header_start: int
    brace: int
    depth: int


class TestParser:
    """Finds named test blocks in source text, in source order."""

    __test__ = False

    def __init__(
        self,
        keyword: str = "test",
        leaf_name: Callable[[str], str] = fallback_id,
    ):
        if not keyword.isidentifier():
            raise ValueError(f"keyword must be an identifier, got {keyword!r}")
        self.keyword = keyword
        self.leaf_name = leaf_name

    def parse(
        self, text: str, origin: str, namespace: str | None = None
    ) -> list[TestDescriptor]:
        """Scan ``text`` and return one descriptor per named test block.

        Args:
            text: Source text to scan.
            origin: Where the text came from, for diagnostics.
            namespace: Optional leading segment for qualified names.

        Raises:
            ParseError: If a test block is malformed or not closed before
                the end of the text.
        """
        descriptors: list[TestDescriptor] = []
        state = _State.CODE
        depth = 0
        tokens: list[str] = []
        containers: list[tuple[str, int]] = []
        current: _OpenTest | None = None
        n = len(text)
        i = 0

        while i < n:
            ch = text[i]

            if state is _State.STRING or state is _State.CHAR:
                quote = '"' if state is _State.STRING else "'"
                if ch == "\\":
                    i += 2
                    continue
                if ch == quote or ch == "\n":
                    state = _State.CODE
                i += 1
                continue

            if state is _State.COMMENT or state is _State.LINE_STRING:
                if ch == "\n":
                    state = _State.CODE
                i += 1
                continue

            if text.startswith("//", i):
                state = _State.COMMENT
                i += 2
                continue
            if text.startswith("\\\\", i):
                state = _State.LINE_STRING
                i += 2
                continue
            if ch == '"':
                state = _State.STRING
                tokens.append('"')
                i += 1
                continue
            if ch == "'":
                state = _State.CHAR
                tokens.append("'")
                i += 1
                continue

            if ch.isalnum() or ch == "_":
                j = i
                while j < n and (text[j].isalnum() or text[j] == "_"):
                    j += 1
                word = text[i:j]
                if word == self.keyword and current is None:
                    header = self._match_header(text, j, origin)
                    if header is not None:
                        title, brace = header
                        path = [namespace] if namespace else []
                        path.extend(name for name, _ in containers)
                        path.append(self.leaf_name(title))
                        current = _OpenTest(
                            title=title,
                            qualified_name=".".join(path),
                            header_start=i,
                            brace=brace,
                            depth=depth,
                        )
                        depth += 1
                        tokens.clear()
                        i = brace + 1
                        continue
                tokens.append(word)
                i = j
                continue

            if ch == "{":
                name = _container_name(tokens)
                depth += 1
                if name is not None:
                    containers.append((name, depth))
                tokens.clear()
            elif ch == "}":
                if depth > 0:
                    if containers and containers[-1][1] == depth:
                        containers.pop()
                    depth -= 1
                    if current is not None and depth == current.depth:
                        descriptors.append(self._close(current, text, origin, i + 1))
                        current = None
                tokens.clear()
            elif ch == ";":
                tokens.clear()
            elif not ch.isspace():
                tokens.append(ch)
            i += 1

        if current is not None:
            raise _error("unterminated test block", text, origin, current.brace)

        logger.debug(f"Found {len(descriptors)} test(s) in {origin}")
        return descriptors

    def _match_header(self, text: str, start: int, origin: str) -> tuple[str, int] | None:
        """Match ``"<title>" {`` after the keyword.

        Returns (title, brace index), or None when the keyword does not
        introduce a named test (``test {``, ``test decl {``).
        """
        i = _skip_trivia(text, start)
        if i >= len(text) or text[i] != '"':
            return None

        raw = []
        j = i + 1
        while True:
            if j >= len(text) or text[j] == "\n":
                raise _error("unterminated test title", text, origin, i)
            ch = text[j]
            if ch == '"':
                break
            if ch == "\\" and j + 1 < len(text):
                nxt = text[j + 1]
                raw.append(_ESCAPES.get(nxt, "\\" + nxt))
                j += 2
                continue
            raw.append(ch)
            j += 1

        title = "".join(raw).strip()
        if not title:
            raise _error("empty test title", text, origin, i)

        brace = _skip_trivia(text, j + 1)
        if brace >= len(text) or text[brace] != "{":
            raise _error("expected '{' after test title", text, origin, min(brace, len(text)))
        return title, brace

    @staticmethod
    def _close(current: _OpenTest, text: str, origin: str, end: int) -> TestDescriptor:
        line, _ = _position(text, current.brace)
        return TestDescriptor(
            title=current.title,
            qualified_name=current.qualified_name,
            origin=origin,
            offset=_byte_offset(text, current.brace),
            line=line,
            header_start=current.header_start,
            body_start=current.brace,
            end=end,
        )


def _skip_trivia(text: str, i: int) -> int:
    """Skip whitespace and line comments."""
    n = len(text)
    while i < n:
        if text[i].isspace():
            i += 1
        elif text.startswith("//", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline + 1
        else:
            break
    return i


def _container_name(tokens: list[str]) -> str | None:
    """Name bound by ``[pub] const Name = [extern|packed] struct ...``, if any."""
    if "=" not in tokens:
        return None
    eq = tokens.index("=")
    if eq == 0 or not tokens[eq - 1].isidentifier():
        return None
    rest = [t for t in tokens[eq + 1 :] if t not in CONTAINER_MODIFIERS]
    if not rest or rest[0] not in CONTAINER_KEYWORDS:
        return None
    return tokens[eq - 1]


def _byte_offset(text: str, index: int) -> int:
    return len(text[:index].encode("utf-8"))


def _position(text: str, index: int) -> tuple[int, int]:
    line = text.count("\n", 0, index) + 1
    column = index - (text.rfind("\n", 0, index) + 1) + 1
    return line, column


def _error(message: str, text: str, origin: str, index: int) -> ParseError:
    line, column = _position(text, index)
    return ParseError(message, origin, _byte_offset(text, index), line, column)
