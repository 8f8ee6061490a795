# topmark:header:start
#
#   project      : Agent Layer
#   file         : errors.py
#   file_relpath : src/agentlayer/jsonc/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Exceptions raised by the managed-block JSONC merge engine.

Every error aborts the merge before any text is produced; callers must treat
them as a hard failure for the file and never fall back to overwriting it.

Hierarchy:
    MergeError
      InvalidSettingsError   the user's document cannot be edited safely
        StructuralError      root object missing/unterminated, stray content
        MarkerError          managed block markers are duplicated/incomplete/misordered
      RenderShapeError       serialized settings are not a multi-line JSON object
      SerializationError     the injected serializer failed (chained, unchanged)
"""

from __future__ import annotations

from agentlayer.constants import INVALID_SETTINGS_PREFIX


class MergeError(Exception):
    """Base class for all merge engine errors."""


class InvalidSettingsError(MergeError):
    """The existing settings document cannot be edited without guessing.

    Attributes:
        reason (str): The bare reason, without the ``invalid VS Code settings.json`` prefix.
    """

    def __init__(self, reason: str) -> None:
        self.reason: str = reason
        super().__init__(f"{INVALID_SETTINGS_PREFIX}: {reason}")


class StructuralError(InvalidSettingsError):
    """Root object is missing, unterminated, or surrounded by non-trivia content."""


class MarkerError(InvalidSettingsError):
    """Managed block markers are duplicated, incomplete, misordered or out of range."""


class RenderShapeError(MergeError):
    """The serializer produced something other than a multi-line ``{ ... }`` object."""


class SerializationError(MergeError):
    """The injected serializer raised; the original exception is chained as ``__cause__``."""
