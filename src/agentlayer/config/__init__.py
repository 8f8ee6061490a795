# topmark:header:start
#
#   project      : Agent Layer
#   file         : __init__.py
#   file_relpath : src/agentlayer/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Agent Layer project configuration (model, loaders and logging)."""

from __future__ import annotations

from agentlayer.config.loaders import load_project_config, parse_commands_allow
from agentlayer.config.model import ApprovalMode, Approvals, ConfigError, ProjectConfig

__all__ = [
    "ApprovalMode",
    "Approvals",
    "ConfigError",
    "ProjectConfig",
    "load_project_config",
    "parse_commands_allow",
]
