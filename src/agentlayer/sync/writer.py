# topmark:header:start
#
#   project      : Agent Layer
#   file         : writer.py
#   file_relpath : src/agentlayer/sync/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Text file I/O for generated files.

Both helpers open files with ``newline=""`` so that Python performs no newline
translation: the merge engine owns the newline style of the text it returns,
and whatever it produces lands on disk byte for byte. Bytes that are not valid
UTF-8 are carried through with ``surrogateescape`` and written back unchanged.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Final

from agentlayer.config.logging import get_logger

if TYPE_CHECKING:
    from agentlayer.config.logging import AgentLayerLogger

logger: AgentLayerLogger = get_logger(__name__)

ENCODING: Final[str] = "utf-8"
ENCODING_ERRORS: Final[str] = "surrogateescape"
DEFAULT_FILE_MODE: Final[int] = 0o644


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 without newline translation; a missing file reads as ``""``."""
    try:
        with open(path, encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
            return f.read()
    except FileNotFoundError:
        logger.debug("%s does not exist yet", path)
        return ""


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return DEFAULT_FILE_MODE


def write_text_atomic(path: Path, text: str) -> int:
    """Replace ``path`` with ``text`` atomically.

    The content is written to a temporary file in the target directory and
    moved over the target with `os.replace`, so readers never observe a
    partially written file. Parent directories are created as needed. The
    permissions of an existing target are kept; new files get ``0o644``.

    Args:
        path (Path): Destination file.
        text (str): Full file content, written without newline translation.

    Returns:
        int: Number of bytes written.

    Raises:
        OSError: If the directory cannot be created or the file cannot be written
            or moved into place. The temporary file is removed first.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode: int = _target_mode(path)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding=ENCODING,
        errors=ENCODING_ERRORS,
        newline="",
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as tf:
        tmp_path = Path(tf.name)
        try:
            tf.write(text)
        except OSError:
            tf.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise

    bytes_written: int = len(text.encode(ENCODING, ENCODING_ERRORS))
    logger.debug("wrote %d bytes to %s (mode %o)", bytes_written, path, mode)
    return bytes_written
