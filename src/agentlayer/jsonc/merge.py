# topmark:header:start
#
#   project      : Agent Layer
#   file         : merge.py
#   file_relpath : src/agentlayer/jsonc/merge.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

r"""Merge the managed settings block into an existing JSONC document.

This is textual surgery, not a JSON round trip: the user's document is never
parsed into objects and re-serialized, so comments, key order, whitespace,
line endings and the BOM outside the managed block survive byte for byte.

One of three paths is chosen per call:

* **Empty**: the document is blank; a root object wrapping the block is
  synthesized with a two-space indent.
* **Replace**: an existing block is found; its lines are swapped for the new
  rendering, keeping the block's own indent. A trailing comma is added when a
  member follows the end marker.
* **Insert**: no block exists; the root ``{`` line is split after the brace
  and the block is inserted as the first member. A trailing comma is added when
  the root object already has members.

The merge is a pure function of ``(existing, payload, serializer)`` and is
idempotent: merging its own output with the same payload returns it unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from agentlayer.config.logging import get_logger
from agentlayer.constants import DEFAULT_INDENT
from agentlayer.jsonc.block import find_managed_block
from agentlayer.jsonc.bounds import index_to_line_col, locate_root
from agentlayer.jsonc.layout import has_content_between, resolve_indent
from agentlayer.jsonc.newlines import Document
from agentlayer.jsonc.render import build_managed_block, json_serializer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agentlayer.config.logging import AgentLayerLogger
    from agentlayer.jsonc.block import ManagedBlockSpan
    from agentlayer.jsonc.bounds import RootSpan
    from agentlayer.jsonc.render import Serializer

logger: AgentLayerLogger = get_logger(__name__)


def replace_block_lines(
    lines: Sequence[str],
    start: int,
    end: int,
    block: Sequence[str],
) -> list[str]:
    """Return ``lines`` with the inclusive range ``start..end`` replaced by ``block``."""
    return [*lines[:start], *block, *lines[end + 1 :]]


def insert_block_lines(
    lines: Sequence[str],
    line: int,
    col: int,
    block: Sequence[str],
) -> list[str]:
    """Insert ``block`` right after the character at ``(line, col)``.

    The target line is split into the part up to and including ``col`` and the
    remainder; the remainder is kept on its own line after the block when it is
    non-empty. An out-of-range ``col`` is clamped to the last character.

    Args:
        lines (Sequence[str]): Normalized document lines.
        line (int): Index of the line holding the root ``{``.
        col (int): Column of the root ``{``.
        block (Sequence[str]): Rendered managed block lines.

    Returns:
        list[str]: Updated lines; a copy of ``lines`` when ``line`` is out of
            range or the target line is empty.
    """
    if line < 0 or line >= len(lines) or not lines[line]:
        return list(lines)
    target: str = lines[line]
    if col < 0 or col >= len(target):
        col = len(target) - 1
    before: str = target[: col + 1]
    after: str = target[col + 1 :]
    return [
        *lines[:line],
        before,
        *block,
        *([after] if after else []),
        *lines[line + 1 :],
    ]


def _merge_empty(payload: Any, serializer: Serializer) -> list[str]:
    block: list[str] = build_managed_block(
        payload,
        indent_base=DEFAULT_INDENT,
        indent_unit=DEFAULT_INDENT,
        trailing_comma=False,
        serializer=serializer,
    )
    return ["{", *block, "}"]


def _merge_replace(
    lines: list[str],
    span: ManagedBlockSpan,
    payload: Any,
    serializer: Serializer,
) -> list[str]:
    last: int = len(lines) - 1
    indent: str = resolve_indent(span.indent, lines, 0, last)
    trailing_comma: bool = has_content_between(
        lines, span.end_line + 1, 0, last, len(lines[last]) - 1
    )
    logger.debug(
        "replacing managed block at lines %d..%d (indent=%r, trailing_comma=%s)",
        span.start_line + 1,
        span.end_line + 1,
        indent,
        trailing_comma,
    )
    block: list[str] = build_managed_block(
        payload,
        indent_base=indent,
        indent_unit=indent,
        trailing_comma=trailing_comma,
        serializer=serializer,
    )
    return replace_block_lines(lines, span.start_line, span.end_line, block)


def _merge_insert(
    doc: Document,
    lines: list[str],
    payload: Any,
    serializer: Serializer,
) -> list[str]:
    root: RootSpan = locate_root(doc.text)
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    start_line, start_col = index_to_line_col(doc.text, root.start)
    end_line, end_col = index_to_line_col(doc.text, root.end)

    indent: str = resolve_indent("", lines, start_line, end_line)
    trailing_comma: bool = has_content_between(
        lines, start_line, start_col + 1, end_line, end_col
    )
    logger.debug(
        "inserting managed block after root '{' at line %d (indent=%r, trailing_comma=%s)",
        start_line + 1,
        indent,
        trailing_comma,
    )
    block: list[str] = build_managed_block(
        payload,
        indent_base=indent,
        indent_unit=indent,
        trailing_comma=trailing_comma,
        serializer=serializer,
    )
    return insert_block_lines(lines, start_line, start_col, block)


def merge_managed_block(
    existing: str,
    payload: Any,
    serializer: Serializer = json_serializer,
) -> str:
    """Merge ``payload`` into the managed block of the JSONC document ``existing``.

    Args:
        existing (str): Current file content (may be empty, BOM-prefixed, any newline style).
        payload (Any): Managed settings payload, passed through to ``serializer``.
        serializer (Serializer): Turns the payload into an indented JSON object.

    Returns:
        str: The updated document with a final newline and the input's BOM and newline style.

    Raises:
        StructuralError: The root object is missing, unterminated or surrounded by content.
        MarkerError: The managed block markers are malformed.
        RenderShapeError: The serializer returned something other than a multi-line object.
        SerializationError: The serializer raised.
    """
    doc: Document = Document.from_text(existing)

    if doc.is_blank:
        logger.debug("document is blank; synthesizing root object")
        return doc.restore(_merge_empty(payload, serializer))

    lines: list[str] = doc.lines
    span: ManagedBlockSpan | None = find_managed_block(lines, 0, len(lines) - 1)
    if span is not None:
        updated: list[str] = _merge_replace(lines, span, payload, serializer)
    else:
        updated = _merge_insert(doc, lines, payload, serializer)
    return doc.restore(updated)
