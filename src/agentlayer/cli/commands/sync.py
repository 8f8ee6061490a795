# topmark:header:start
#
#   project      : Agent Layer
#   file         : sync.py
#   file_relpath : src/agentlayer/cli/commands/sync.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Agent Layer `sync` command.

Regenerates the managed section of ``.vscode/settings.json`` from
``.agent-layer/``. With ``--dry-run`` nothing is written; the command prints
the diff and exits with ``WOULD_CHANGE`` (2) when the file is out of date.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from agentlayer.cli.errors import to_cli_error
from agentlayer.cli.exit_codes import ExitCode
from agentlayer.cli.options import root_option
from agentlayer.config.loaders import load_project_config
from agentlayer.config.logging import get_logger
from agentlayer.config.model import ConfigError
from agentlayer.jsonc.errors import MergeError
from agentlayer.sync.vscode import write_vscode_settings
from agentlayer.utils.diff import render_patch

if TYPE_CHECKING:
    from agentlayer.cli.console import ClickConsole
    from agentlayer.config.model import ProjectConfig
    from agentlayer.sync.vscode import SyncResult

logger = get_logger(__name__)


@click.command(
    name="sync",
    help="Regenerate agent configuration files from .agent-layer/.",
)
@root_option
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would change without writing; exit 2 if anything would change.",
)
@click.pass_context
def sync_command(ctx: click.Context, root: Path | None, dry_run: bool) -> None:
    """Sync generated files for the project at ``--root``.

    Args:
        ctx (click.Context): Click context holding the console.
        root (Path | None): Repository root; defaults to the current directory.
        dry_run (bool): Preview changes instead of writing them.
    """
    console: ClickConsole = ctx.obj["console"]
    project_root: Path = (root or Path.cwd()).resolve()

    try:
        project: ProjectConfig = load_project_config(project_root)
        if not project.manages_vscode_settings:
            console.info("VS Code agents are disabled; nothing to sync.")
            return
        result: SyncResult = write_vscode_settings(project_root, project, dry_run=dry_run)
    except (ConfigError, MergeError, OSError) as exc:
        logger.debug("sync failed: %r", exc)
        raise to_cli_error(exc) from exc

    if not result.changed:
        console.info(f"{result.path}: up to date")
        return

    if dry_run:
        console.print(render_patch(result.diff) if console.enable_color else result.diff, nl=False)
        console.info(f"{result.path}: would change")
        ctx.exit(ExitCode.WOULD_CHANGE)

    console.info(f"{result.path}: updated")
