# topmark:header:start
#
#   project      : Agent Layer
#   file         : model.py
#   file_relpath : src/agentlayer/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Project configuration model.

This module defines:
    - `ApprovalMode`: the approval policy selected in ``[approvals] mode``.
    - `Approvals`: what a mode allows without prompting.
    - `ProjectConfig`: an immutable snapshot of the project settings that the
      sync step needs.

Scope:
    - *In scope*: data shapes and approval resolution.
    - *Out of scope*: filesystem discovery and TOML I/O, which live in
      ``agentlayer.config.loaders``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigError(Exception):
    """The project configuration is missing, malformed or holds unsupported values."""


class ApprovalMode(str, Enum):
    """Approval policy for agent tool calls.

    Attributes:
        ALL: Auto-approve allowlisted commands and MCP tools.
        COMMANDS: Auto-approve allowlisted commands only.
        MCP: Auto-approve MCP tools only.
        YOLO: Auto-approve everything, including tools outside the allowlist.
        NONE: Prompt for everything.
    """

    ALL = "all"
    COMMANDS = "commands"
    MCP = "mcp"
    YOLO = "yolo"
    NONE = "none"


@dataclass(frozen=True)
class Approvals:
    """Resolved approval switches for a mode."""

    allow_commands: bool

    @classmethod
    def for_mode(cls, mode: ApprovalMode) -> Approvals:
        """Resolve the approvals implied by ``mode``."""
        return cls(
            allow_commands=mode in (ApprovalMode.ALL, ApprovalMode.COMMANDS, ApprovalMode.YOLO),
        )


@dataclass(frozen=True)
class ProjectConfig:
    """Immutable project configuration used by ``al sync``.

    Attributes:
        root (Path): Repository root containing ``.agent-layer/``.
        approvals_mode (ApprovalMode): Selected approval policy.
        vscode_enabled (bool): Whether the VS Code agent is enabled.
        claude_vscode_enabled (bool): Whether the Claude VS Code extension is enabled.
        commands_allow (tuple[str, ...]): Allowlisted shell commands, in file order.
    """

    root: Path
    approvals_mode: ApprovalMode = ApprovalMode.NONE
    vscode_enabled: bool = False
    claude_vscode_enabled: bool = False
    commands_allow: tuple[str, ...] = field(default_factory=tuple)

    @property
    def approvals(self) -> Approvals:
        """Approval switches for the configured mode."""
        return Approvals.for_mode(self.approvals_mode)

    @property
    def is_yolo(self) -> bool:
        """Whether the project runs with every approval prompt disabled."""
        return self.approvals_mode is ApprovalMode.YOLO

    @property
    def manages_vscode_settings(self) -> bool:
        """Whether ``.vscode/settings.json`` is generated for this project."""
        return self.vscode_enabled or self.claude_vscode_enabled
