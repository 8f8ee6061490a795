# topmark:header:start
#
#   project      : Agent Layer
#   file         : constants.py
#   file_relpath : src/agentlayer/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Agent Layer Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    AGENT_LAYER_VERSION: str = get_version("agent-layer")
except PackageNotFoundError:  # running from a source checkout without an install
    AGENT_LAYER_VERSION = "0.0.0"

# Managed block markers, matched by exact trimmed-line equality:
MANAGED_START_MARKER: str = "// >>> agent-layer"
MANAGED_END_MARKER: str = "// <<< agent-layer"

# Fixed comment lines emitted right after the start marker:
MANAGED_HEADER: tuple[str, ...] = (
    "// Managed by Agent Layer. To customize, edit .agent-layer/config.toml",
    "// and .agent-layer/commands.allow, then re-run `al sync`.",
    "//",
)

DEFAULT_INDENT: str = "  "

UTF8_BOM: str = "\ufeff"

# Project layout (relative to the repository root):
AGENT_LAYER_DIR: str = ".agent-layer"
CONFIG_FILE_NAME: str = "config.toml"
COMMANDS_ALLOW_FILE_NAME: str = "commands.allow"
VSCODE_DIR: str = ".vscode"
VSCODE_SETTINGS_FILE_NAME: str = "settings.json"

INVALID_SETTINGS_PREFIX: str = "invalid VS Code settings.json"
