# topmark:header:start
#
#   project      : Agent Layer
#   file         : errors.py
#   file_relpath : src/agentlayer/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Exceptions for the Agent Layer CLI.

Usage:
    Commands call library code and translate its exceptions with
    [`to_cli_error`][agentlayer.cli.errors.to_cli_error], so every failure
    reaches the user with a standardized message and exit code.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from agentlayer.cli.exit_codes import ExitCode
from agentlayer.config.model import ConfigError
from agentlayer.jsonc.errors import InvalidSettingsError, MergeError


class AgentLayerError(click.ClickException):
    """Base class for all Agent Layer CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized in `show()` when possible)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class AgentLayerUsageError(AgentLayerError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class AgentLayerConfigError(AgentLayerError):
    """Error for missing or invalid ``.agent-layer`` configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class AgentLayerSettingsError(AgentLayerError):
    """Error for user-owned settings files that cannot be edited safely."""

    exit_code = ExitCode.DATA_ERROR


class AgentLayerRenderError(AgentLayerError):
    """Error for failures while rendering generated content."""

    exit_code = ExitCode.SOFTWARE_ERROR


class AgentLayerIOError(AgentLayerError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


def to_cli_error(exc: Exception) -> AgentLayerError:
    """Map a library exception to the matching CLI error.

    Args:
        exc (Exception): Exception raised by configuration, merge or I/O code.

    Returns:
        AgentLayerError: The CLI error carrying the message and exit code.
    """
    if isinstance(exc, AgentLayerError):
        return exc
    if isinstance(exc, ConfigError):
        return AgentLayerConfigError(str(exc))
    if isinstance(exc, InvalidSettingsError):
        return AgentLayerSettingsError(str(exc))
    if isinstance(exc, MergeError):
        return AgentLayerRenderError(str(exc))
    if isinstance(exc, OSError):
        return AgentLayerIOError(str(exc))
    return AgentLayerError(str(exc))
