# topmark:header:start
#
#   project      : Agent Layer
#   file         : scanner.py
#   file_relpath : src/agentlayer/jsonc/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

r"""Lexical scanner for JSON-with-comments (JSONC).

The scanner is a tiny state machine that classifies every character of a JSONC
text as plain code, part of a string literal, part of a line comment, or part of
a block comment. It knows nothing about JSON values beyond that; callers track
brace depth or look for specific code characters themselves.

The state is an explicit immutable value threaded through the scan loop rather
than instance fields, so the same transition function serves the root-bounds
pass, the trivia check, and the content-gap analysis.

Transition rules, in priority order:
  1. Inside a string: an escaped character is consumed unconditionally, ``\``
     escapes the next character, an unescaped ``"`` closes the string.
  2. Inside a line comment: ``\n`` closes the comment.
  3. Inside a block comment: ``*/`` closes the comment (both characters consumed).
  4. Plain code: ``"`` opens a string, ``//`` a line comment, ``/*`` a block comment.

An unterminated string or comment is never an error at this level.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class TokenKind(Enum):
    """Classification of a scanned character.

    Members:
        CODE: Plain JSON structure or value characters (including whitespace).
        STRING: Characters of a string literal, quotes included.
        LINE_COMMENT: Characters of a ``//`` comment, the opener and the closing newline included.
        BLOCK_COMMENT: Characters of a ``/* */`` comment, opener and closer included.
    """

    CODE = "code"
    STRING = "string"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


@dataclass(frozen=True)
class ScanState:
    """Scanner state at a given offset.

    At most one of the ``in_*`` flags is true; ``escaped_next`` only matters
    while ``in_string``.

    Attributes:
        in_string (bool): Inside a double-quoted string literal.
        in_line_comment (bool): Inside a ``//`` comment.
        in_block_comment (bool): Inside a ``/* */`` comment.
        escaped_next (bool): The next string character is escaped.
    """

    in_string: bool = False
    in_line_comment: bool = False
    in_block_comment: bool = False
    escaped_next: bool = False


INITIAL_STATE: ScanState = ScanState()


def step(
    text: str,
    pos: int,
    state: ScanState,
    end: int | None = None,
) -> tuple[ScanState, TokenKind, int]:
    """Advance the scanner over the character at ``pos``.

    Args:
        text (str): The text being scanned.
        pos (int): Offset of the character to classify; must be ``< end``.
        state (ScanState): State before ``pos``.
        end (int | None): Exclusive limit for two-character lookahead (defaults to ``len(text)``).

    Returns:
        tuple[ScanState, TokenKind, int]: The state after the consumed characters, the
            classification of those characters, and how many were consumed (1 or 2).
    """
    limit: int = len(text) if end is None else end
    ch: str = text[pos]
    nxt: str = text[pos + 1] if pos + 1 < limit else ""

    if state.in_string:
        if state.escaped_next:
            return replace(state, escaped_next=False), TokenKind.STRING, 1
        if ch == "\\":
            return replace(state, escaped_next=True), TokenKind.STRING, 1
        if ch == '"':
            return INITIAL_STATE, TokenKind.STRING, 1
        return state, TokenKind.STRING, 1

    if state.in_line_comment:
        if ch == "\n":
            return INITIAL_STATE, TokenKind.LINE_COMMENT, 1
        return state, TokenKind.LINE_COMMENT, 1

    if state.in_block_comment:
        if ch == "*" and nxt == "/":
            return INITIAL_STATE, TokenKind.BLOCK_COMMENT, 2
        return state, TokenKind.BLOCK_COMMENT, 1

    if ch == '"':
        return ScanState(in_string=True), TokenKind.STRING, 1
    if ch == "/" and nxt == "/":
        return ScanState(in_line_comment=True), TokenKind.LINE_COMMENT, 2
    if ch == "/" and nxt == "*":
        return ScanState(in_block_comment=True), TokenKind.BLOCK_COMMENT, 2
    return state, TokenKind.CODE, 1


def scan(
    text: str,
    start: int = 0,
    end: int | None = None,
    state: ScanState = INITIAL_STATE,
) -> Iterator[tuple[int, TokenKind, ScanState]]:
    """Yield ``(offset, kind, state_after)`` for each scanned token in ``text[start:end]``.

    Two-character tokens (comment openers, ``*/``) are reported once at the
    offset of their first character.
    """
    limit: int = len(text) if end is None else min(end, len(text))
    i: int = max(start, 0)
    while i < limit:
        kind: TokenKind
        consumed: int
        state, kind, consumed = step(text, i, state, limit)
        yield i, kind, state
        i += consumed


def iter_code(
    text: str,
    start: int = 0,
    end: int | None = None,
    state: ScanState = INITIAL_STATE,
) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, char)`` for every plain-code character in ``text[start:end]``."""
    for i, kind, _ in scan(text, start, end, state):
        if kind is TokenKind.CODE:
            yield i, text[i]
