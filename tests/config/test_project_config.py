# topmark:header:start
#
#   project      : Agent Layer
#   file         : test_project_config.py
#   file_relpath : tests/config/test_project_config.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Tests for loading ``.agent-layer/config.toml`` and ``commands.allow``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from tomlkit.exceptions import ParseError as TomlkitParseError

from agentlayer.config.loaders import (
    load_commands_allow,
    load_project_config,
    parse_commands_allow,
)
from agentlayer.config.model import ApprovalMode, Approvals, ConfigError, ProjectConfig
from agentlayer.constants import AGENT_LAYER_DIR, CONFIG_FILE_NAME
from tests.conftest import parametrize, write_project

if TYPE_CHECKING:
    from pathlib import Path


def test_load_project_config(tmp_path: Path) -> None:
    """A complete project loads into a frozen ProjectConfig."""
    write_project(
        tmp_path,
        mode="yolo",
        vscode=True,
        claude_vscode=True,
        commands="git status\n# comment\n\n  make test  \ngit status\n",
    )
    cfg: ProjectConfig = load_project_config(tmp_path)

    assert cfg.root == tmp_path
    assert cfg.approvals_mode is ApprovalMode.YOLO
    assert cfg.vscode_enabled is True
    assert cfg.claude_vscode_enabled is True
    assert cfg.commands_allow == ("git status", "make test")
    assert cfg.is_yolo
    assert cfg.manages_vscode_settings


def test_absent_agent_flags_mean_disabled(tmp_path: Path) -> None:
    """Missing ``[agents.*]`` tables leave agents disabled; no allowlist file is fine."""
    write_project(tmp_path, mode="none", vscode=None)
    cfg: ProjectConfig = load_project_config(tmp_path)

    assert cfg.vscode_enabled is False
    assert cfg.claude_vscode_enabled is False
    assert cfg.commands_allow == ()
    assert not cfg.manages_vscode_settings


def test_missing_config_file(tmp_path: Path) -> None:
    """A project without ``config.toml`` is a configuration error."""
    with pytest.raises(ConfigError, match="missing config file"):
        load_project_config(tmp_path)


def test_invalid_toml_is_chained(tmp_path: Path) -> None:
    """TOML syntax errors are reported with the path and the parser error attached."""
    config_dir: Path = tmp_path / AGENT_LAYER_DIR
    config_dir.mkdir()
    (config_dir / CONFIG_FILE_NAME).write_text("[approvals\nmode = ", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid TOML") as excinfo:
        load_project_config(tmp_path)
    assert isinstance(excinfo.value.__cause__, TomlkitParseError)
    assert CONFIG_FILE_NAME in str(excinfo.value)


def test_unknown_approval_mode(tmp_path: Path) -> None:
    """Unsupported approval modes list the accepted values."""
    write_project(tmp_path, mode="sometimes")
    with pytest.raises(ConfigError, match="unsupported approvals.mode 'sometimes'"):
        load_project_config(tmp_path)


def test_missing_approval_mode(tmp_path: Path) -> None:
    """The approval mode is required."""
    config_dir: Path = tmp_path / AGENT_LAYER_DIR
    config_dir.mkdir()
    (config_dir / CONFIG_FILE_NAME).write_text(
        "[agents.vscode]\nenabled = true\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError, match="approvals.mode is required"):
        load_project_config(tmp_path)


def test_non_boolean_enabled_flag(tmp_path: Path) -> None:
    """``enabled`` must be a TOML boolean."""
    config_dir: Path = tmp_path / AGENT_LAYER_DIR
    config_dir.mkdir()
    (config_dir / CONFIG_FILE_NAME).write_text(
        '[approvals]\nmode = "all"\n\n[agents.vscode]\nenabled = "yes"\n', encoding="utf-8"
    )
    with pytest.raises(ConfigError, match="agents.vscode.enabled must be true or false"):
        load_project_config(tmp_path)


def test_parse_commands_allow() -> None:
    """Blank lines and comments are dropped; order is kept and duplicates removed."""
    text = "# header\n\nnpm test\n  git diff\t\nnpm test\n#git push\n"
    assert parse_commands_allow(text) == ("npm test", "git diff")


def test_load_commands_allow_missing_file(tmp_path: Path) -> None:
    """A missing allowlist is an empty allowlist."""
    assert load_commands_allow(tmp_path / "commands.allow") == ()


@parametrize(
    "mode, allow_commands",
    [
        (ApprovalMode.ALL, True),
        (ApprovalMode.COMMANDS, True),
        (ApprovalMode.MCP, False),
        (ApprovalMode.YOLO, True),
        (ApprovalMode.NONE, False),
    ],
)
def test_approvals_for_mode(mode: ApprovalMode, allow_commands: bool) -> None:
    """Each approval mode decides whether allowlisted commands are auto-approved."""
    assert Approvals.for_mode(mode) == Approvals(allow_commands=allow_commands)


def test_commands_allow_that_is_not_utf8(tmp_path: Path) -> None:
    """An allowlist with undecodable bytes is a configuration error, not a crash."""
    path: Path = tmp_path / "commands.allow"
    path.write_bytes(b"git status\n\xff\n")
    with pytest.raises(ConfigError, match="is not valid UTF-8"):
        load_commands_allow(path)
