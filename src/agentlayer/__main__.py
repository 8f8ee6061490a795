# topmark:header:start
#
#   project      : Agent Layer
#   file         : __main__.py
#   file_relpath : src/agentlayer/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Module entry point for running Agent Layer via ``python -m agentlayer``.

Equivalent to running the ``al`` console script; it delegates to
:func:`agentlayer.cli.main.cli`.
"""

from __future__ import annotations

from agentlayer.cli.main import cli

if __name__ == "__main__":
    cli()
