# topmark:header:start
#
#   project      : Agent Layer
#   file         : test_vscode_settings.py
#   file_relpath : tests/sync/test_vscode_settings.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Tests for building and writing the managed VS Code settings."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from agentlayer.config.model import ApprovalMode
from agentlayer.constants import MANAGED_END_MARKER, MANAGED_START_MARKER
from agentlayer.jsonc.errors import MarkerError, StructuralError
from agentlayer.sync.vscode import (
    KEY_CLAUDE_SKIP_PERMISSIONS,
    KEY_GLOBAL_AUTO_APPROVE,
    KEY_TERMINAL_AUTO_APPROVE,
    VSCodeSettings,
    build_vscode_settings,
    check_managed_settings_conflict,
    command_pattern,
    quote_meta,
    render_vscode_settings,
    write_vscode_settings,
)
from tests.conftest import (
    make_project_config,
    mark_integration,
    parametrize,
    read_settings,
    write_settings,
)

if TYPE_CHECKING:
    from pathlib import Path

    from agentlayer.sync.vscode import SyncResult


def _data(text: str) -> dict[str, Any]:
    code: str = "\n".join(
        line for line in text.splitlines() if not line.strip().startswith("//")
    )
    return json.loads(code)


# --- patterns ---


@parametrize(
    "command, pattern",
    [
        ("git status", r"/^git status(\b.*)?$/"),
        ("scripts/dev.sh", r"/^scripts\/dev\.sh(\b.*)?$/"),
        ("npm run test:unit", r"/^npm run test:unit(\b.*)?$/"),
        ("echo $(ls) | wc", r"/^echo \$\(ls\) \| wc(\b.*)?$/"),
    ],
)
def test_command_pattern(command: str, pattern: str) -> None:
    """Commands are anchored, escaped and wrapped as VS Code regex literals."""
    assert command_pattern(command) == pattern


def test_quote_meta_leaves_spaces_and_dashes() -> None:
    """Only regex metacharacters are escaped."""
    assert quote_meta("a b-c_d") == "a b-c_d"
    assert quote_meta(r"x.y*z+?[]{}^$\|") == r"x\.y\*z\+\?\[\]\{\}\^\$\\\|"


# --- payload ---


def test_commands_mode_builds_terminal_patterns(tmp_path: Path) -> None:
    """Allowlisted commands become terminal auto-approve patterns, in order."""
    project = make_project_config(tmp_path, commands_allow=("npm test", "git status"))
    settings: VSCodeSettings = build_vscode_settings(project)

    assert settings.global_auto_approve is None
    assert settings.claude_skip_permissions is None
    assert list(settings.terminal_auto_approve) == [
        r"/^npm test(\b.*)?$/",
        r"/^git status(\b.*)?$/",
    ]
    assert list(settings.to_json_dict()) == [KEY_TERMINAL_AUTO_APPROVE]


def test_yolo_mode_sets_every_key_in_order(tmp_path: Path) -> None:
    """YOLO approves everything, including the Claude extension when enabled."""
    project = make_project_config(
        tmp_path,
        approvals_mode=ApprovalMode.YOLO,
        claude_vscode_enabled=True,
        commands_allow=("make",),
    )
    payload: dict[str, Any] = build_vscode_settings(project).to_json_dict()

    assert list(payload) == [
        KEY_GLOBAL_AUTO_APPROVE,
        KEY_TERMINAL_AUTO_APPROVE,
        KEY_CLAUDE_SKIP_PERMISSIONS,
    ]
    assert payload[KEY_GLOBAL_AUTO_APPROVE] is True
    assert payload[KEY_CLAUDE_SKIP_PERMISSIONS] is True


@parametrize("mode", [ApprovalMode.MCP, ApprovalMode.NONE])
def test_modes_without_command_approval_emit_nothing(tmp_path: Path, mode: ApprovalMode) -> None:
    """Allowlisted commands are ignored when commands are not auto-approved."""
    project = make_project_config(tmp_path, approvals_mode=mode, commands_allow=("git status",))
    assert build_vscode_settings(project).to_json_dict() == {}


def test_claude_key_does_not_depend_on_vscode_agent(tmp_path: Path) -> None:
    """The Claude extension key is emitted even when the Copilot chat agent is disabled."""
    project = make_project_config(
        tmp_path,
        approvals_mode=ApprovalMode.YOLO,
        vscode_enabled=False,
        claude_vscode_enabled=True,
        commands_allow=("git status",),
    )
    assert build_vscode_settings(project).to_json_dict() == {KEY_CLAUDE_SKIP_PERMISSIONS: True}


# --- writing ---


def test_write_creates_settings_file(tmp_path: Path) -> None:
    """A missing settings file is created with just the managed block."""
    project = make_project_config(tmp_path, commands_allow=("git status",))
    result: SyncResult = write_vscode_settings(tmp_path, project)

    assert result.changed
    assert result.path == tmp_path / ".vscode" / "settings.json"
    assert "+{" in result.diff.splitlines()
    text: str = read_settings(tmp_path)
    assert r'"/^git status(\\b.*)?$/": true' in text
    assert _data(text) == {KEY_TERMINAL_AUTO_APPROVE: {r"/^git status(\b.*)?$/": True}}


def test_second_write_is_unchanged(tmp_path: Path) -> None:
    """Syncing twice with the same configuration is a no-op."""
    project = make_project_config(tmp_path, commands_allow=("git status",))
    write_vscode_settings(tmp_path, project)
    before: str = read_settings(tmp_path)

    result: SyncResult = write_vscode_settings(tmp_path, project)

    assert not result.changed
    assert result.diff == ""
    assert read_settings(tmp_path) == before


@mark_integration
def test_write_preserves_user_settings_and_crlf(tmp_path: Path) -> None:
    """User members and comments stay; the file keeps its CRLF newlines."""
    original = '{\r\n    // my font\r\n    "editor.fontSize": 13\r\n}\r\n'
    write_settings(tmp_path, original)
    project = make_project_config(tmp_path, approvals_mode=ApprovalMode.YOLO)

    write_vscode_settings(tmp_path, project)
    text: str = read_settings(tmp_path)

    assert "\n" not in text.replace("\r\n", "")
    assert text.endswith('    // my font\r\n    "editor.fontSize": 13\r\n}\r\n')
    assert f"    {MANAGED_START_MARKER}\r\n" in text
    assert f'    "{KEY_GLOBAL_AUTO_APPROVE}": true,\r\n    {MANAGED_END_MARKER}\r\n' in text


def test_dry_run_does_not_write(tmp_path: Path) -> None:
    """A dry run reports the change and its diff without touching disk."""
    project = make_project_config(tmp_path, commands_allow=("git status",))
    result: SyncResult = write_vscode_settings(tmp_path, project, dry_run=True)

    assert result.changed
    assert result.diff.startswith("--- ")
    assert not result.path.exists()


def test_invalid_settings_are_not_overwritten(tmp_path: Path) -> None:
    """A settings file that is not a root object aborts the sync."""
    write_settings(tmp_path, "[]\n")
    project = make_project_config(tmp_path, commands_allow=("git status",))

    with pytest.raises(StructuralError, match="invalid VS Code settings.json"):
        write_vscode_settings(tmp_path, project)
    assert read_settings(tmp_path) == "[]\n"


def test_custom_serializer_is_used(tmp_path: Path) -> None:
    """The serializer can be swapped, for example to sort keys."""

    def sorted_serializer(payload: Any, indent: str) -> str:
        return json.dumps(payload.to_json_dict(), indent=indent, sort_keys=True)

    project = make_project_config(tmp_path, commands_allow=("zz", "aa"))
    write_vscode_settings(tmp_path, project, serializer=sorted_serializer)
    text: str = read_settings(tmp_path)

    assert text.index("/^aa") < text.index("/^zz")


# --- marker preflight ---


def test_conflict_check_passes_without_file_or_block(tmp_path: Path) -> None:
    """No file, or a file without markers, is fine."""
    check_managed_settings_conflict(tmp_path)
    write_settings(tmp_path, '{\n  "x": 1\n}\n')
    check_managed_settings_conflict(tmp_path)


@mark_integration
def test_conflict_check_passes_after_sync(tmp_path: Path) -> None:
    """A file produced by sync has exactly one well-ordered block."""
    write_vscode_settings(tmp_path, make_project_config(tmp_path, commands_allow=("ls",)))
    check_managed_settings_conflict(tmp_path)


@parametrize(
    "text, reason",
    [
        (
            f"{{\n  {MANAGED_START_MARKER}\n  {MANAGED_START_MARKER}\n  {MANAGED_END_MARKER}\n}}\n",
            "start markers=2, end markers=1",
        ),
        (f"{{\n  {MANAGED_END_MARKER}\n}}\n", "start markers=0, end markers=1"),
        (
            f"{{\n  {MANAGED_END_MARKER}\n  {MANAGED_START_MARKER}\n}}\n",
            "start marker appears after end marker",
        ),
    ],
)
def test_conflict_check_reports_bad_markers(tmp_path: Path, text: str, reason: str) -> None:
    """Duplicated, incomplete or misordered markers are reported with the file path."""
    path: Path = write_settings(tmp_path, text)
    with pytest.raises(MarkerError) as excinfo:
        check_managed_settings_conflict(tmp_path)
    assert str(path) in str(excinfo.value)
    assert f"conflicting agent-layer markers ({reason})" in str(excinfo.value)


# --- rendering into existing documents ---


def test_render_into_empty_document() -> None:
    """An empty file becomes a root object holding the terminal patterns."""
    settings = VSCodeSettings(terminal_auto_approve={r"/^git(\b.*)?$/": True})
    text: str = render_vscode_settings("", settings)

    assert text.startswith("{\n")
    assert f"  {MANAGED_START_MARKER}\n" in text
    assert f'  "{KEY_TERMINAL_AUTO_APPROVE}": {{\n    "/^git(\\\\b.*)?$/": true\n  }}\n' in text
    assert text.endswith("}\n")


def test_render_replaces_stale_patterns_only() -> None:
    """A stale managed pattern is replaced; members after the block are untouched."""
    stale: str = render_vscode_settings(
        '{\n  "editor.tabSize": 2\n}\n',
        VSCodeSettings(terminal_auto_approve={r"/^old(\b.*)?$/": True}),
    )
    fresh: str = render_vscode_settings(
        stale, VSCodeSettings(terminal_auto_approve={r"/^git(\b.*)?$/": True})
    )

    assert "/^old" not in fresh
    assert "/^git" in fresh
    assert fresh.endswith(f"  {MANAGED_END_MARKER}\n" + '  "editor.tabSize": 2\n}\n')
