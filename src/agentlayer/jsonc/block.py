# topmark:header:start
#
#   project      : Agent Layer
#   file         : block.py
#   file_relpath : src/agentlayer/jsonc/block.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Managed block detection.

The managed block is delimited by two marker lines whose trimmed text equals
``// >>> agent-layer`` and ``// <<< agent-layer`` exactly. Detection is
line-oriented: a marker must occupy a line of its own, and markers embedded in
longer lines (strings, trailing comments) are not markers.

Ambiguity is always an error. A lone marker, a repeated marker or an end
marker above its start marker means the user edited the block by hand, and
guessing which lines are ours could destroy their content.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from agentlayer.config.logging import get_logger
from agentlayer.constants import MANAGED_END_MARKER, MANAGED_START_MARKER
from agentlayer.jsonc.errors import MarkerError
from agentlayer.jsonc.layout import leading_whitespace

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agentlayer.config.logging import AgentLayerLogger

logger: AgentLayerLogger = get_logger(__name__)


@dataclass(frozen=True)
class ManagedBlockSpan:
    """Location of an existing managed block.

    Attributes:
        start_line (int): Index of the start marker line (inclusive).
        end_line (int): Index of the end marker line (inclusive).
        indent (str): Leading whitespace of the start marker line.
    """

    start_line: int
    end_line: int
    indent: str = ""


def find_managed_block(
    lines: Sequence[str],
    start_line: int,
    end_line: int,
) -> ManagedBlockSpan | None:
    """Find the managed block markers in ``lines``.

    Every line is inspected so that duplicates anywhere in the document are
    caught; ``start_line``/``end_line`` only constrain where a valid pair may lie.

    Args:
        lines (Sequence[str]): Normalized document lines.
        start_line (int): First line index the block may start on.
        end_line (int): Last line index the block may end on.

    Returns:
        ManagedBlockSpan | None: The block span, or ``None`` when neither marker is present.

    Raises:
        MarkerError: On duplicate, incomplete, misordered or out-of-range markers.
    """
    start: int = -1
    end: int = -1
    indent: str = ""

    for i, line in enumerate(lines):
        trimmed: str = line.strip()
        if trimmed == MANAGED_START_MARKER:
            if start != -1:
                raise MarkerError("duplicate managed block start")
            start = i
            indent = leading_whitespace(line)
        elif trimmed == MANAGED_END_MARKER:
            if end != -1:
                raise MarkerError("duplicate managed block end")
            end = i

    if start == -1 and end == -1:
        return None
    if start == -1 or end == -1:
        raise MarkerError("managed block markers are incomplete")
    if end < start:
        raise MarkerError("managed block end appears before start")
    if start < start_line or end > end_line:
        raise MarkerError("managed block is outside scan range")

    logger.trace("managed block lines %d..%d, indent=%r", start, end, indent)
    return ManagedBlockSpan(start_line=start, end_line=end, indent=indent)


def count_markers(text: str) -> tuple[int, int]:
    """Count raw occurrences of the start and end markers anywhere in ``text``."""
    return text.count(MANAGED_START_MARKER), text.count(MANAGED_END_MARKER)


def check_marker_conflict(text: str) -> str | None:
    """Cheap preflight used before launching an editor on a settings file.

    Unlike [`find_managed_block`][agentlayer.jsonc.block.find_managed_block] this
    counts substrings, so it also flags markers that were pasted into other
    lines or strings.

    Returns:
        str | None: A human-readable reason when the markers conflict, else ``None``.
    """
    starts: int
    ends: int
    starts, ends = count_markers(text)
    if starts == 0 and ends == 0:
        return None
    if starts != 1 or ends != 1:
        return f"start markers={starts}, end markers={ends}"
    if text.index(MANAGED_START_MARKER) > text.index(MANAGED_END_MARKER):
        return "start marker appears after end marker"
    return None
