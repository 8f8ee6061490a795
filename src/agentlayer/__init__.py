# topmark:header:start
#
#   project      : Agent Layer
#   file         : __init__.py
#   file_relpath : src/agentlayer/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Agent Layer package.

Agent Layer generates per-agent configuration files from a single project
configuration under ``.agent-layer/``. Files that users also edit, such as
``.vscode/settings.json``, are only touched inside a marker-delimited managed
block; everything outside it is preserved byte for byte.
"""

from __future__ import annotations

from agentlayer.constants import AGENT_LAYER_VERSION

__version__: str = AGENT_LAYER_VERSION

__all__ = ["__version__"]
