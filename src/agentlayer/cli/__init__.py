# topmark:header:start
#
#   project      : Agent Layer
#   file         : __init__.py
#   file_relpath : src/agentlayer/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Agent Layer CLI package.

The console script entry point is defined in ``pyproject.toml`` as::

    [project.scripts]
    al = "agentlayer.cli.main:cli"

All subcommands live in [`agentlayer.cli.commands`][].
"""

from __future__ import annotations

__all__: list[str] = []
