"""
reqlix.core.headings - Heading recognizer for category documents.

Only ATX headings of level 1 (chapters) and level 2 (requirements) are
recognized. A requirement heading carries ``{index}: {title}``.
"""

from __future__ import annotations

import re
import string

# Up to three leading spaces are indentation; four or more make an
# indented code line.
MAX_HEADING_INDENT = 3

_CLOSING_SEQUENCE = re.compile(r"[ \t]+#+$")
_ONLY_HASHES = re.compile(r"^#+$")
_ESCAPABLE = re.compile(r"\\([" + re.escape(string.punctuation) + r"])")


def _strip_indent(line: str) -> str:
    """Remove up to three leading spaces; tabs are never indentation."""
    line = line.rstrip("\r\n")
    stripped = line.lstrip(" ")
    if 0 < len(line) - len(stripped) <= MAX_HEADING_INDENT:
        return stripped
    return line


def heading_text(content: str) -> str:
    """Extract the plain text of ATX heading content.

    Strips the optional closing ``#`` sequence and surrounding whitespace,
    and resolves backslash escapes of ASCII punctuation. Emphasis and code
    spans are kept as written.

    Args:
        content: Everything after the opening ``#`` marker.

    Returns:
        The heading text, possibly empty.
    """
    content = content.strip(" \t")
    if _ONLY_HASHES.match(content):
        return ""
    content = _CLOSING_SEQUENCE.sub("", content)
    return _ESCAPABLE.sub(r"\1", content).strip()


def parse_level1_heading(line: str) -> str | None:
    """Parse a chapter heading.

    Args:
        line: A single raw line (line terminator optional).

    Returns:
        The chapter name (may be empty), or None if the line is not a
        level-1 heading.
    """
    text = _strip_indent(line)
    if not text.startswith("# ") or text.startswith("##"):
        return None
    return heading_text(text[2:])


def parse_level2_heading(line: str) -> tuple[str, str] | None:
    """Parse a requirement heading of the form ``## {index}: {title}``.

    Args:
        line: A single raw line (line terminator optional).

    Returns:
        ``(index, title)`` or None if the line is not a level-2 heading or
        either part is empty.
    """
    text = _strip_indent(line)
    if not text.startswith("## ") or text.startswith("###"):
        return None

    content = heading_text(text[3:])
    index, colon, title = content.partition(":")
    if not colon:
        return None
    index = index.strip()
    title = title.strip()
    if not index or not title:
        return None
    return index, title


def is_fence(line: str) -> bool:
    """Return True if the line opens or closes a fenced code block."""
    return line.strip().startswith("```")
