# topmark:header:start
#
#   project      : Agent Layer
#   file         : __init__.py
#   file_relpath : src/agentlayer/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Click subcommands of the ``al`` CLI."""
