# topmark:header:start
#
#   project      : Agent Layer
#   file         : render.py
#   file_relpath : src/agentlayer/jsonc/render.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Render the managed settings payload into marker-delimited block lines.

The payload is opaque to this module: it is handed to an injected serializer
that must return an indented JSON object. The object's interior lines are
re-indented to the document's base indent and wrapped in the marker lines and
the fixed header comment. The outer braces are dropped, since the members
become members of the user's root object.

Block layout (``<indent>`` is the resolved base indent):

    <indent>// >>> agent-layer
    <indent>// Managed by Agent Layer. ...
    <indent>// and .agent-layer/commands.allow, then re-run `al sync`.
    <indent>//
    <indent><serialized object interior, or nothing for {}>
    <indent>// <<< agent-layer
"""

from __future__ import annotations

import json
from typing import Any, Protocol

from agentlayer.config.logging import get_logger
from agentlayer.constants import (
    DEFAULT_INDENT,
    MANAGED_END_MARKER,
    MANAGED_HEADER,
    MANAGED_START_MARKER,
)
from agentlayer.jsonc.errors import RenderShapeError, SerializationError

logger = get_logger(__name__)


class Serializer(Protocol):
    """Callable turning a settings payload into indented JSON text."""

    def __call__(self, payload: Any, indent: str) -> str:
        """Serialize ``payload`` as a JSON object indented with ``indent`` per level."""
        ...


def json_serializer(payload: Any, indent: str) -> str:
    """Default serializer backed by :func:`json.dumps`.

    Payload objects exposing ``to_json_dict()`` are converted first so that
    typed settings models can control key order and omit unset members.
    """
    to_json_dict = getattr(payload, "to_json_dict", None)
    data: Any = to_json_dict() if callable(to_json_dict) else payload
    return json.dumps(data, indent=indent, ensure_ascii=False)


def _serialize(payload: Any, indent: str, serializer: Serializer) -> str:
    try:
        return serializer(payload, indent)
    except Exception as exc:
        raise SerializationError(f"failed to marshal VS Code settings: {exc}") from exc


def _interior_lines(raw: str) -> list[str]:
    """Return the lines between the outer braces of a serialized object."""
    raw = raw.rstrip("\n")
    if raw.strip() == "{}":
        return []
    lines: list[str] = raw.split("\n")
    if len(lines) < 2 or lines[0].strip() != "{" or lines[-1].strip() != "}":
        raise RenderShapeError("unexpected settings JSON shape")
    return lines[1:-1]


def build_managed_block(
    payload: Any,
    *,
    indent_base: str,
    indent_unit: str,
    trailing_comma: bool,
    serializer: Serializer = json_serializer,
) -> list[str]:
    """Build the managed block lines for ``payload``.

    Args:
        payload (Any): Settings payload; only the serializer inspects it.
        indent_base (str): Indentation of root-level members in the target document.
        indent_unit (str): One JSON nesting level; ``""`` falls back to two spaces.
        trailing_comma (bool): Whether a member follows the block and the last
            rendered line needs a comma.
        serializer (Serializer): Serializer producing an indented JSON object.

    Returns:
        list[str]: Block lines from the start marker to the end marker, inclusive.

    Raises:
        SerializationError: If the serializer raises.
        RenderShapeError: If the serialized text is not a multi-line ``{ ... }`` object.
    """
    indent_unit = indent_unit or DEFAULT_INDENT
    raw: str = _serialize(payload, indent_unit, serializer)
    interior: list[str] = _interior_lines(raw)

    block: list[str] = [indent_base + MANAGED_START_MARKER]
    block.extend(indent_base + line for line in MANAGED_HEADER)

    managed: list[str] = [indent_base + line.removeprefix(indent_unit) for line in interior]
    if managed and trailing_comma:
        last: str = managed[-1].rstrip(" \t")
        if last and not last.endswith(","):
            managed[-1] += ","
    block.extend(managed)

    block.append(indent_base + MANAGED_END_MARKER)
    logger.trace("managed block rendered with %d settings line(s)", len(managed))
    return block
