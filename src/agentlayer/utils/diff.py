# topmark:header:start
#
#   project      : Agent Layer
#   file         : diff.py
#   file_relpath : src/agentlayer/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Unified diff helpers for previewing generated file changes.

`unified_patch` compares the current and updated text of a generated file and
`render_patch` formats the result as a colorized preview for the CLI.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

from agentlayer.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agentlayer.config.logging import AgentLayerLogger

logger: AgentLayerLogger = get_logger(__name__)


def unified_patch(current: str, updated: str, label: str) -> str:
    """Return a unified diff between ``current`` and ``updated``.

    Lines keep their original endings, so a newline-style change shows up in
    the diff. Bytes that were read as invalid UTF-8 appear as U+FFFD so the
    patch can always be printed. An empty string means there is no difference.

    Args:
        current (str): Text currently on disk (``""`` for a missing file).
        updated (str): Text that would be written.
        label (str): File label used in the ``---``/``+++`` headers.

    Returns:
        str: The patch text as produced by `difflib`.
    """
    patch_lines: list[str] = list(
        difflib.unified_diff(
            current.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{label} (current)",
            tofile=f"{label} (updated)",
            n=3,
        )
    )
    logger.trace("patch for %s: %d line(s)", label, len(patch_lines))
    patch: str = "".join(patch_lines)
    return patch.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as **either** a sequence of lines
            **or** a single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=True)
    else:
        lines = list(patch)

    # Show line endings explicitly so CRLF changes stay visible.
    def process_line(line: str) -> str:
        content: str = line.replace("\r", "\\r").replace("\n", "")
        if not line:
            return content
        match line[0]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers:
        return chalk.gray(
            "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
        )
    return chalk.gray("".join(f"{process_line(line)}\n" for line in lines))
