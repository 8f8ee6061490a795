# topmark:header:start
#
#   project      : Agent Layer
#   file         : __init__.py
#   file_relpath : src/agentlayer/jsonc/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Managed-block merge engine for JSON-with-comments documents.

The public entry point is [`merge_managed_block`][agentlayer.jsonc.merge.merge_managed_block];
the remaining names are exported for callers that run the preflight marker
check or handle the engine's typed errors.
"""

from __future__ import annotations

from agentlayer.jsonc.block import ManagedBlockSpan, check_marker_conflict, find_managed_block
from agentlayer.jsonc.errors import (
    InvalidSettingsError,
    MarkerError,
    MergeError,
    RenderShapeError,
    SerializationError,
    StructuralError,
)
from agentlayer.jsonc.merge import merge_managed_block
from agentlayer.jsonc.render import Serializer, build_managed_block, json_serializer

__all__ = [
    "InvalidSettingsError",
    "ManagedBlockSpan",
    "MarkerError",
    "MergeError",
    "RenderShapeError",
    "SerializationError",
    "Serializer",
    "StructuralError",
    "build_managed_block",
    "check_marker_conflict",
    "find_managed_block",
    "json_serializer",
    "merge_managed_block",
]
