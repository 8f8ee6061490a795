# topmark:header:start
#
#   project      : Agent Layer
#   file         : main.py
#   file_relpath : src/agentlayer/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Click entry point for the ``al`` command.

Group-level options are initialized once and placed into ``ctx.obj``:
program-output verbosity, color, and the console used by subcommands. Internal
logging is configured from ``AL_LOG_LEVEL`` and never mixes with program output.
"""

from __future__ import annotations

import click

from agentlayer.cli.commands.check import check_command
from agentlayer.cli.commands.sync import sync_command
from agentlayer.cli.console import ClickConsole
from agentlayer.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from agentlayer.config.logging import get_logger, resolve_env_log_level, setup_logging
from agentlayer.constants import AGENT_LAYER_VERSION

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    verbosity: int = resolve_verbosity(verbose, quiet)

    level_env: int | None = resolve_env_log_level()
    setup_logging(level=level_env)

    effective: ColorMode = ColorMode.NEVER if no_color else ColorMode(color_mode or "auto")
    enable_color: bool = resolve_color_mode(cli_mode=effective)
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color, verbosity=verbosity)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Agent Layer: generate agent configuration from .agent-layer/.",
)
@click.version_option(AGENT_LAYER_VERSION, "--version", prog_name="al")
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Agent Layer CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    logger.debug("invoking subcommand %s", ctx.invoked_subcommand)


cli.add_command(sync_command)

cli.add_command(check_command)

if __name__ == "__main__":
    cli()
