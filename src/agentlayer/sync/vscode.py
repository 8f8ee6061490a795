# topmark:header:start
#
#   project      : Agent Layer
#   file         : vscode.py
#   file_relpath : src/agentlayer/sync/vscode.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Generate the managed section of ``.vscode/settings.json``.

The settings file belongs to the user; Agent Layer only owns the members
between its two marker comments. This module builds the managed payload from
the project configuration and hands it to the JSONC merge engine, which
splices it into the existing file without touching anything else.

Managed members, in output order (each omitted when unset):

* ``chat.tools.global.autoApprove``: ``true`` in ``yolo`` mode.
* ``chat.tools.terminal.autoApprove``: one ``/^<command>(\\b.*)?$/`` pattern per
  allowlisted command, mapped to ``true``.
* ``claudeCode.allowDangerouslySkipPermissions``: ``true`` when the Claude
  VS Code extension is enabled in ``yolo`` mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from agentlayer.config.logging import get_logger
from agentlayer.constants import VSCODE_DIR, VSCODE_SETTINGS_FILE_NAME
from agentlayer.jsonc.block import check_marker_conflict
from agentlayer.jsonc.errors import MarkerError
from agentlayer.jsonc.merge import merge_managed_block
from agentlayer.jsonc.render import json_serializer
from agentlayer.sync.writer import read_text, write_text_atomic
from agentlayer.utils.diff import unified_patch

if TYPE_CHECKING:
    from agentlayer.config.logging import AgentLayerLogger
    from agentlayer.config.model import ProjectConfig
    from agentlayer.jsonc.render import Serializer

logger: AgentLayerLogger = get_logger(__name__)

KEY_GLOBAL_AUTO_APPROVE: str = "chat.tools.global.autoApprove"
KEY_TERMINAL_AUTO_APPROVE: str = "chat.tools.terminal.autoApprove"
KEY_CLAUDE_SKIP_PERMISSIONS: str = "claudeCode.allowDangerouslySkipPermissions"

# Characters with special meaning in a regular expression (RE2 / ECMAScript).
_REGEX_META: frozenset[str] = frozenset("\\.+*?()|[]{}^$")


def quote_meta(text: str) -> str:
    r"""Escape regular expression metacharacters in ``text``.

    Only metacharacters are escaped; spaces and ``-`` stay literal, which keeps
    the generated patterns readable (``git status`` rather than ``git\ status``).
    """
    return "".join(f"\\{ch}" if ch in _REGEX_META else ch for ch in text)


def command_pattern(command: str) -> str:
    """Return the VS Code terminal auto-approve pattern for ``command``.

    The pattern matches the command itself and the command followed by
    arguments, and is wrapped in ``/.../`` so VS Code treats it as a regular
    expression; ``/`` inside the command is escaped for that reason.

    Example:
        ``scripts/dev.sh`` becomes ``/^scripts\\/dev\\.sh(\\b.*)?$/``.
    """
    escaped: str = quote_meta(command).replace("/", "\\/")
    return f"/^{escaped}(\\b.*)?$/"


@dataclass(frozen=True)
class VSCodeSettings:
    """Managed VS Code settings payload.

    Attributes:
        global_auto_approve (bool | None): Value of ``chat.tools.global.autoApprove``.
        terminal_auto_approve (dict[str, bool]): Pattern map for
            ``chat.tools.terminal.autoApprove``, in allowlist order.
        claude_skip_permissions (bool | None): Value of
            ``claudeCode.allowDangerouslySkipPermissions``.
    """

    global_auto_approve: bool | None = None
    terminal_auto_approve: dict[str, bool] = field(default_factory=dict)
    claude_skip_permissions: bool | None = None

    def to_json_dict(self) -> dict[str, Any]:
        """Return the settings as an ordered JSON mapping, omitting unset members."""
        out: dict[str, Any] = {}
        if self.global_auto_approve is not None:
            out[KEY_GLOBAL_AUTO_APPROVE] = self.global_auto_approve
        if self.terminal_auto_approve:
            out[KEY_TERMINAL_AUTO_APPROVE] = dict(self.terminal_auto_approve)
        if self.claude_skip_permissions is not None:
            out[KEY_CLAUDE_SKIP_PERMISSIONS] = self.claude_skip_permissions
        return out


@dataclass(frozen=True)
class SyncResult:
    """Outcome of syncing one generated file.

    Attributes:
        path (Path): The target file.
        changed (bool): Whether the file content differs from what is on disk.
        diff (str): Unified diff between the current and updated content (``""`` if unchanged).
    """

    path: Path
    changed: bool
    diff: str = ""


def build_vscode_settings(project: ProjectConfig) -> VSCodeSettings:
    """Build the managed VS Code settings for ``project``.

    Args:
        project (ProjectConfig): Resolved project configuration.

    Returns:
        VSCodeSettings: The payload to merge into ``settings.json``.
    """
    global_auto_approve: bool | None = None
    terminal: dict[str, bool] = {}
    if project.vscode_enabled:
        if project.is_yolo:
            global_auto_approve = True
        if project.approvals.allow_commands:
            for command in project.commands_allow:
                terminal[command_pattern(command)] = True

    claude_skip: bool | None = None
    if project.claude_vscode_enabled and project.is_yolo:
        claude_skip = True

    return VSCodeSettings(
        global_auto_approve=global_auto_approve,
        terminal_auto_approve=terminal,
        claude_skip_permissions=claude_skip,
    )


def vscode_settings_path(root: Path) -> Path:
    """Return the path of ``.vscode/settings.json`` under ``root``."""
    return root / VSCODE_DIR / VSCODE_SETTINGS_FILE_NAME


def render_vscode_settings(
    existing: str,
    settings: VSCodeSettings,
    serializer: Serializer = json_serializer,
) -> str:
    """Return ``existing`` with its managed block replaced by ``settings``."""
    return merge_managed_block(existing, settings, serializer)


def write_vscode_settings(
    root: Path,
    project: ProjectConfig,
    *,
    serializer: Serializer = json_serializer,
    dry_run: bool = False,
) -> SyncResult:
    """Merge the managed settings into ``.vscode/settings.json``.

    Args:
        root (Path): Repository root.
        project (ProjectConfig): Resolved project configuration.
        serializer (Serializer): Serializer for the managed payload.
        dry_run (bool): Compute the result and diff without writing.

    Returns:
        SyncResult: Whether the file changed, with a unified diff of the change.

    Raises:
        MergeError: If the existing file cannot be edited safely or rendering fails.
        OSError: If the file cannot be read or written.
    """
    path: Path = vscode_settings_path(root)
    current: str = read_text(path)
    updated: str = render_vscode_settings(current, build_vscode_settings(project), serializer)

    if updated == current:
        logger.info("%s is up to date", path)
        return SyncResult(path=path, changed=False)

    diff: str = unified_patch(current, updated, str(path))
    if dry_run:
        logger.info("%s would change (dry run)", path)
    else:
        write_text_atomic(path, updated)
        logger.info("updated %s", path)
    return SyncResult(path=path, changed=True, diff=diff)


def check_managed_settings_conflict(root: Path) -> None:
    """Verify that ``.vscode/settings.json`` holds at most one well-ordered marker pair.

    This runs before launching VS Code so that a hand-edited managed block is
    reported up front instead of on the next sync.

    Raises:
        MarkerError: When the markers are duplicated, incomplete or misordered.
        OSError: If the file exists but cannot be read.
    """
    path: Path = vscode_settings_path(root)
    reason: str | None = check_marker_conflict(read_text(path))
    if reason is not None:
        raise MarkerError(f"{path}: conflicting agent-layer markers ({reason})")
    logger.debug("no marker conflict in %s", path)
