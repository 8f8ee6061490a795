# topmark:header:start
#
#   project      : Agent Layer
#   file         : newlines.py
#   file_relpath : src/agentlayer/jsonc/newlines.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

r"""Newline and BOM normalization for the JSONC merge engine.

The merge engine captures the newline convention and the UTF-8 BOM of the
incoming document once, works on BOM-free ``\n``-joined text, and re-applies
both conventions once on the way out. Nothing between those two points ever
sees a ``\r`` or a BOM.

Detection mirrors how VS Code and most editors write ``settings.json``: a file
containing any CRLF is treated as CRLF, otherwise a file containing any bare CR
is treated as CR, otherwise LF. Mixed input is rewritten to that single style.
"""

from __future__ import annotations

from dataclasses import dataclass

from agentlayer.constants import UTF8_BOM


def detect_newline(text: str) -> str:
    r"""Return the newline sequence used in ``text``.

    Args:
        text (str): The original document text.

    Returns:
        str: ``"\r\n"``, ``"\r"`` or ``"\n"`` (the default when no newline is present).
    """
    if "\r\n" in text:
        return "\r\n"
    if "\r" in text:
        return "\r"
    return "\n"


def normalize_newlines(text: str) -> str:
    r"""Convert every CRLF and bare CR line ending to ``\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def apply_newline_style(text: str, newline: str) -> str:
    r"""Replace ``\n`` line endings in normalized ``text`` with ``newline``."""
    if newline == "\n":
        return text
    return text.replace("\n", newline)


def strip_bom(text: str) -> tuple[str, str]:
    """Split a leading UTF-8 BOM off ``text``.

    Returns:
        tuple[str, str]: ``(bom, rest)`` where ``bom`` is the BOM character or ``""``.
    """
    if text.startswith(UTF8_BOM):
        return UTF8_BOM, text[len(UTF8_BOM) :]
    return "", text


@dataclass(frozen=True)
class Document:
    r"""A JSONC document reduced to BOM-free, ``\n``-only text.

    Attributes:
        text (str): Normalized text (no BOM, ``\n`` line endings only).
        newline (str): Newline sequence detected on the raw input.
        bom (str): The BOM found on the raw input, or ``""``.
    """

    text: str
    newline: str = "\n"
    bom: str = ""

    @classmethod
    def from_text(cls, raw: str) -> Document:
        """Capture the newline style and BOM of ``raw`` and normalize it."""
        newline: str = detect_newline(raw)
        bom: str
        stripped: str
        bom, stripped = strip_bom(normalize_newlines(raw))
        return cls(text=stripped, newline=newline, bom=bom)

    @property
    def lines(self) -> list[str]:
        r"""Return the normalized text split on ``\n`` (a trailing newline yields a final ``""``)."""
        return self.text.split("\n")

    @property
    def is_blank(self) -> bool:
        """Whether the document holds nothing but whitespace."""
        return self.text.strip() == ""

    def restore(self, lines: list[str]) -> str:
        """Join ``lines``, ensure a final newline and re-apply the captured BOM and newline style.

        Args:
            lines (list[str]): Normalized lines of the updated document.

        Returns:
            str: The updated document, ready to be written back.
        """
        updated: str = "\n".join(lines)
        if not updated.endswith("\n"):
            updated += "\n"
        return apply_newline_style(self.bom + updated, self.newline)
