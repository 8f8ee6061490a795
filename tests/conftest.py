# topmark:header:start
#
#   project      : Agent Layer
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Pytest configuration for the Agent Layer test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs, and provides small helpers to build project trees under ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from agentlayer.config import logging
from agentlayer.config.model import ApprovalMode, ProjectConfig
from agentlayer.constants import (
    AGENT_LAYER_DIR,
    COMMANDS_ALLOW_FILE_NAME,
    CONFIG_FILE_NAME,
    VSCODE_DIR,
    VSCODE_SETTINGS_FILE_NAME,
)

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@fixture(autouse=True)
def silence_agentlayer_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    AL_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so merge decisions are captured on failure.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def write_project(
    root: Path,
    *,
    mode: str = "commands",
    vscode: bool | None = True,
    claude_vscode: bool | None = None,
    commands: str | None = None,
    settings: str | None = None,
) -> Path:
    """Create an ``.agent-layer`` project under ``root``.

    Args:
        root (Path): Directory to populate.
        mode (str): Value written to ``[approvals] mode``.
        vscode (bool | None): ``[agents.vscode] enabled``; ``None`` omits the key.
        claude_vscode (bool | None): ``[agents.claude-vscode] enabled``; ``None`` omits it.
        commands (str | None): Raw ``commands.allow`` content; ``None`` skips the file.
        settings (str | None): Raw ``.vscode/settings.json`` content (written without
            newline translation); ``None`` skips the file.

    Returns:
        Path: The ``root`` directory.
    """
    config_dir: Path = root / AGENT_LAYER_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    toml: list[str] = ["[approvals]", f'mode = "{mode}"', ""]
    if vscode is not None:
        toml += ["[agents.vscode]", f"enabled = {str(vscode).lower()}", ""]
    if claude_vscode is not None:
        toml += ["[agents.claude-vscode]", f"enabled = {str(claude_vscode).lower()}", ""]
    (config_dir / CONFIG_FILE_NAME).write_text("\n".join(toml), encoding="utf-8")
    if commands is not None:
        (config_dir / COMMANDS_ALLOW_FILE_NAME).write_text(commands, encoding="utf-8")
    if settings is not None:
        write_settings(root, settings)
    return root


def settings_path(root: Path) -> Path:
    """Return ``root/.vscode/settings.json``."""
    return root / VSCODE_DIR / VSCODE_SETTINGS_FILE_NAME


def write_settings(root: Path, text: str) -> Path:
    """Write ``text`` to the settings file without newline translation."""
    path: Path = settings_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    return path


def read_settings(root: Path) -> str:
    """Read the settings file without newline translation."""
    with settings_path(root).open(encoding="utf-8", newline="") as fh:
        return fh.read()


def make_project_config(root: Path, **overrides: Any) -> ProjectConfig:
    """Return a `ProjectConfig` for ``root`` with VS Code enabled in ``commands`` mode.

    Args:
        root (Path): Repository root.
        **overrides (Any): Field overrides applied on top of the defaults.

    Returns:
        ProjectConfig: An immutable configuration for use in tests.
    """
    values: dict[str, Any] = {
        "approvals_mode": ApprovalMode.COMMANDS,
        "vscode_enabled": True,
        "claude_vscode_enabled": False,
        "commands_allow": (),
    }
    values.update(overrides)
    return ProjectConfig(root=root, **values)
