# topmark:header:start
#
#   project      : Agent Layer
#   file         : loaders.py
#   file_relpath : src/agentlayer/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Load the project configuration from ``.agent-layer/``.

This module provides I/O helpers for reading:
- ``config.toml`` (approval mode and enabled agents), and
- ``commands.allow`` (one allowlisted shell command per line).

Parsing is done with `tomlkit` and returned as plain `dict` structures before
being validated into a [`ProjectConfig`][agentlayer.config.model.ProjectConfig].
Every problem is raised as [`ConfigError`][agentlayer.config.model.ConfigError];
nothing is defaulted past a malformed value.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from agentlayer.config.logging import get_logger
from agentlayer.config.model import ApprovalMode, ConfigError, ProjectConfig
from agentlayer.constants import AGENT_LAYER_DIR, COMMANDS_ALLOW_FILE_NAME, CONFIG_FILE_NAME

if TYPE_CHECKING:
    from pathlib import Path

    from agentlayer.config.logging import AgentLayerLogger

logger: AgentLayerLogger = get_logger(__name__)

TomlTable = dict[str, Any]


# --- TOML file I/O ---


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to the TOML document.

    Returns:
        TomlTable: The parsed TOML content as plain Python values.

    Raises:
        ConfigError: If the file cannot be read, is not UTF-8 or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"missing config file {path}") from e
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"config file {path} is not valid UTF-8: {e}") from e

    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ConfigError(f"invalid TOML in {path}: {e}") from e

    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def _get_table(table: TomlTable, key: str, path: Path) -> TomlTable:
    value: Any = table.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"{path}: [{key}] must be a table")
    return cast("TomlTable", value)


def _get_enabled(agents: TomlTable, agent: str, path: Path) -> bool:
    section: TomlTable = _get_table(agents, agent, path)
    value: Any = section.get("enabled", False)
    if not isinstance(value, bool):
        raise ConfigError(f"{path}: agents.{agent}.enabled must be true or false, got {value!r}")
    return value


def _get_approval_mode(table: TomlTable, path: Path) -> ApprovalMode:
    approvals: TomlTable = _get_table(table, "approvals", path)
    raw: Any = approvals.get("mode")
    if raw is None:
        raise ConfigError(f"{path}: approvals.mode is required")
    try:
        return ApprovalMode(raw)
    except ValueError as e:
        choices: str = ", ".join(m.value for m in ApprovalMode)
        raise ConfigError(
            f"{path}: unsupported approvals.mode {raw!r} (expected one of: {choices})"
        ) from e


# --- commands.allow ---


def parse_commands_allow(text: str) -> tuple[str, ...]:
    """Parse the content of a ``commands.allow`` file.

    Blank lines and ``#`` comment lines are ignored, surrounding whitespace is
    trimmed, and duplicates are dropped while preserving first-seen order.
    """
    seen: set[str] = set()
    out: list[str] = []
    for raw in text.splitlines():
        line: str = raw.strip()
        if not line or line.startswith("#") or line in seen:
            continue
        seen.add(line)
        out.append(line)
    return tuple(out)


def load_commands_allow(path: Path) -> tuple[str, ...]:
    """Read ``commands.allow``; a missing file yields an empty allowlist.

    Raises:
        ConfigError: If the file exists but cannot be read or is not UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No %s found at %s", COMMANDS_ALLOW_FILE_NAME, path)
        return ()
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8: {e}") from e
    return parse_commands_allow(text)


# --- Project config ---


def config_from_dict(root: Path, data: TomlTable, *, source: Path) -> ProjectConfig:
    """Validate a parsed ``config.toml`` into a `ProjectConfig` (without the allowlist).

    Args:
        root (Path): Repository root.
        data (TomlTable): Parsed TOML content.
        source (Path): Path used in error messages.

    Returns:
        ProjectConfig: The validated configuration with an empty allowlist.

    Raises:
        ConfigError: On unsupported approval modes or non-boolean ``enabled`` flags.
    """
    agents: TomlTable = _get_table(data, "agents", source)
    return ProjectConfig(
        root=root,
        approvals_mode=_get_approval_mode(data, source),
        vscode_enabled=_get_enabled(agents, "vscode", source),
        claude_vscode_enabled=_get_enabled(agents, "claude-vscode", source),
    )


def load_project_config(root: Path) -> ProjectConfig:
    """Load the project configuration rooted at ``root``.

    Args:
        root (Path): Repository root containing ``.agent-layer/``.

    Returns:
        ProjectConfig: The resolved configuration.

    Raises:
        ConfigError: If ``config.toml`` is missing or invalid, or ``commands.allow``
            cannot be read.
    """
    config_dir: Path = root / AGENT_LAYER_DIR
    config_path: Path = config_dir / CONFIG_FILE_NAME
    data: TomlTable = load_toml_dict(config_path)
    base: ProjectConfig = config_from_dict(root, data, source=config_path)

    commands: tuple[str, ...] = load_commands_allow(config_dir / COMMANDS_ALLOW_FILE_NAME)
    logger.debug(
        "Loaded project config from %s: mode=%s, vscode=%s, claude-vscode=%s, %d command(s)",
        config_path,
        base.approvals_mode.value,
        base.vscode_enabled,
        base.claude_vscode_enabled,
        len(commands),
    )
    return replace(base, commands_allow=commands)
