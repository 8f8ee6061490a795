# topmark:header:start
#
#   project      : Agent Layer
#   file         : __init__.py
#   file_relpath : src/agentlayer/sync/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Generators for agent configuration files."""

from __future__ import annotations

from agentlayer.sync.vscode import (
    SyncResult,
    VSCodeSettings,
    build_vscode_settings,
    check_managed_settings_conflict,
    render_vscode_settings,
    write_vscode_settings,
)

__all__ = [
    "SyncResult",
    "VSCodeSettings",
    "build_vscode_settings",
    "check_managed_settings_conflict",
    "render_vscode_settings",
    "write_vscode_settings",
]
