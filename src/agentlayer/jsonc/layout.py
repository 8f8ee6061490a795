# topmark:header:start
#
#   project      : Agent Layer
#   file         : layout.py
#   file_relpath : src/agentlayer/jsonc/layout.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Indentation detection and trailing-comma gap analysis.

Two layout questions decide how a rendered managed block fits into a user's
document:

* **Indentation**: reuse the indent of an existing block, else the indent of
  the first root-level member, else two spaces. The same string serves as the
  base indent (marker lines) and the unit indent (one nesting level of JSON).
* **Trailing comma**: a comma after the block is required only when another
  member follows it before the closing ``}``. A comma directly before ``}`` is
  not valid JSON, so the decision is made with the comment/string-aware scanner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentlayer.constants import DEFAULT_INDENT
from agentlayer.jsonc.scanner import TokenKind, scan

if TYPE_CHECKING:
    from collections.abc import Sequence

_COMMENT_PREFIXES: tuple[str, ...] = ("//", "/*", "*")
_SKIPPABLE: frozenset[str] = frozenset(" \t\r\n,")


def leading_whitespace(line: str) -> str:
    """Return the run of spaces and tabs at the start of ``line``."""
    return line[: len(line) - len(line.lstrip(" \t"))]


def detect_indent(lines: Sequence[str], start_line: int, end_line: int) -> str:
    """Find the indentation used for root-level members.

    Scans the lines after ``start_line`` up to ``end_line`` (inclusive, both
    clamped to the document) and returns the leading whitespace of the first
    line that is neither blank nor a comment line (``//``, ``/*`` or a ``*``
    continuation).

    Args:
        lines (Sequence[str]): Normalized document lines.
        start_line (int): Line holding the root object's ``{``.
        end_line (int): Line holding the root object's ``}``.

    Returns:
        str: The detected indentation, or ``""`` when no member line exists.
    """
    start_line = max(start_line, 0)
    end_line = min(end_line, len(lines) - 1)
    for line in lines[start_line + 1 : end_line + 1]:
        trimmed: str = line.strip()
        if not trimmed or trimmed.startswith(_COMMENT_PREFIXES):
            continue
        return leading_whitespace(line)
    return ""


def resolve_indent(
    preferred: str,
    lines: Sequence[str],
    start_line: int,
    end_line: int,
) -> str:
    """Pick the indentation for rendered content.

    Args:
        preferred (str): Indentation to use when non-empty (e.g. an existing block's indent).
        lines (Sequence[str]): Normalized document lines.
        start_line (int): First line of the region to detect from.
        end_line (int): Last line of the region to detect from.

    Returns:
        str: ``preferred``, else the detected member indentation, else ``DEFAULT_INDENT``.
    """
    return preferred or detect_indent(lines, start_line, end_line) or DEFAULT_INDENT


def _line_col_to_offset(lines: Sequence[str], line: int, col: int) -> int:
    offset: int = sum(len(ln) + 1 for ln in lines[:line])
    return offset + min(max(col, 0), len(lines[line]))


def has_content_between(
    lines: Sequence[str],
    start_line: int,
    start_col: int,
    end_line: int,
    end_col: int,
) -> bool:
    """Report whether a JSON member appears in the region before the next ``}``.

    The region starts at ``(start_line, start_col)`` and ends at ``(end_line,
    end_col)`` inclusive; a negative or out-of-range ``end_col`` extends to the
    end of the line. Whitespace, commas, line comments and block comments
    (including multi-line ones) are skipped. The first remaining character
    decides: ``}`` means nothing follows, anything else is a member.

    Args:
        lines (Sequence[str]): Normalized document lines.
        start_line (int): First line of the region.
        start_col (int): First column on ``start_line``.
        end_line (int): Last line of the region.
        end_col (int): Last column (inclusive) on ``end_line``.

    Returns:
        bool: True when a trailing comma is required before the region.
    """
    if not lines:
        return False
    start_line = max(start_line, 0)
    end_line = min(end_line, len(lines) - 1)
    if end_line < start_line:
        return False

    text: str = "\n".join(lines)
    begin: int = _line_col_to_offset(lines, start_line, start_col)
    last_len: int = len(lines[end_line])
    stop_col: int = end_col + 1 if 0 <= end_col < last_len else last_len
    stop: int = _line_col_to_offset(lines, end_line, stop_col)

    for i, kind, _ in scan(text, begin, stop):
        if kind is TokenKind.STRING:
            return True
        if kind is not TokenKind.CODE:
            continue
        ch: str = text[i]
        if ch in _SKIPPABLE:
            continue
        return ch != "}"
    return False
