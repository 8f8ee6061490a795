# topmark:header:start
#
#   project      : Agent Layer
#   file         : bounds.py
#   file_relpath : src/agentlayer/jsonc/bounds.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Root object location for JSONC documents.

A ``settings.json`` file must hold exactly one top-level object surrounded by
nothing but trivia (whitespace and comments). This module finds that object's
character span with the comment- and string-aware scanner and rejects
documents where anything else is present.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from agentlayer.config.logging import get_logger
from agentlayer.jsonc.errors import StructuralError
from agentlayer.jsonc.scanner import TokenKind, iter_code, scan

if TYPE_CHECKING:
    from agentlayer.config.logging import AgentLayerLogger

logger: AgentLayerLogger = get_logger(__name__)

_WHITESPACE: frozenset[str] = frozenset(" \t\n\r")


@dataclass(frozen=True)
class RootSpan:
    """Inclusive character span of the root object.

    Attributes:
        start (int): Offset of the opening ``{``.
        end (int): Offset of the matching closing ``}``.
    """

    start: int
    end: int


def find_root_bounds(text: str) -> RootSpan:
    """Locate the first brace-matched top-level object in ``text``.

    Braces inside strings and comments are ignored. A ``}`` seen before any
    ``{`` is skipped rather than reported.

    Args:
        text (str): Normalized JSONC text.

    Returns:
        RootSpan: Span of the root object.

    Raises:
        StructuralError: When no ``{`` exists (``missing root object``) or the first
            object is never closed (``unterminated root object``).
    """
    start: int = -1
    depth: int = 0
    for i, ch in iter_code(text):
        if ch == "{":
            if start == -1:
                start = i
            depth += 1
        elif ch == "}":
            if start == -1:
                # TODO: reject stray closing braces once existing user files are known to be clean.
                continue
            depth -= 1
            if depth == 0:
                return RootSpan(start=start, end=i)

    if start == -1:
        raise StructuralError("missing root object")
    raise StructuralError("unterminated root object")


def has_non_trivia(text: str, start: int, end: int) -> bool:
    """Report whether ``text[start:end]`` holds anything besides whitespace and comments.

    Bounds are clamped to the text; an empty or inverted range holds no content.
    String literals count as content.
    """
    start = max(start, 0)
    end = min(end, len(text))
    if end <= start:
        return False
    for i, kind, _ in scan(text, start, end):
        if kind is TokenKind.STRING:
            return True
        if kind is TokenKind.CODE and text[i] not in _WHITESPACE:
            return True
    return False


def index_to_line_col(text: str, index: int) -> tuple[int, int]:
    r"""Convert a character offset to zero-based ``(line, column)`` over ``\n`` lines."""
    if index <= 0:
        return 0, index
    prefix: str = text[:index]
    line: int = prefix.count("\n")
    last_newline: int = prefix.rfind("\n")
    if last_newline == -1:
        return line, index
    return line, index - last_newline - 1


def locate_root(text: str) -> RootSpan:
    """Find the root object and require that only trivia surrounds it.

    Raises:
        StructuralError: On any failure of
            [`find_root_bounds`][agentlayer.jsonc.bounds.find_root_bounds], or when content
            exists before or after the root object.
    """
    span: RootSpan = find_root_bounds(text)
    if has_non_trivia(text, 0, span.start):
        raise StructuralError("unexpected content before root object")
    if has_non_trivia(text, span.end + 1, len(text)):
        raise StructuralError("unexpected content after root object")
    logger.trace("root object span: %d..%d", span.start, span.end)
    return span
