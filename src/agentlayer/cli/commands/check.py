# topmark:header:start
#
#   project      : Agent Layer
#   file         : check.py
#   file_relpath : src/agentlayer/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Agent Layer `check` command.

Runs the managed-block marker preflight on ``.vscode/settings.json``: the file
may hold no markers or exactly one start marker followed by one end marker.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from agentlayer.cli.errors import to_cli_error
from agentlayer.cli.options import root_option
from agentlayer.jsonc.errors import MarkerError
from agentlayer.sync.vscode import check_managed_settings_conflict, vscode_settings_path

if TYPE_CHECKING:
    from agentlayer.cli.console import ClickConsole


@click.command(
    name="check",
    help="Check .vscode/settings.json for conflicting agent-layer markers.",
)
@root_option
@click.pass_context
def check_command(ctx: click.Context, root: Path | None) -> None:
    """Fail with a data error when the managed block markers conflict."""
    console: ClickConsole = ctx.obj["console"]
    project_root: Path = (root or Path.cwd()).resolve()

    try:
        check_managed_settings_conflict(project_root)
    except (MarkerError, OSError) as exc:
        raise to_cli_error(exc) from exc

    console.info(f"{vscode_settings_path(project_root)}: ok")
