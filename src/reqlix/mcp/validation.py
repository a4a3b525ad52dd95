"""
reqlix.mcp.validation - Tool parameter validation.

Every validator raises InvalidParameterError with a message meant for the
calling agent. Lengths are measured in UTF-8 bytes. Limits come from the
caller's Limits object.
"""

from __future__ import annotations

import re
from typing import Any

from reqlix.config.settings import Limits
from reqlix.core.errors import InvalidParameterError
from reqlix.core.headings import parse_level1_heading, parse_level2_heading

RESERVED_CATEGORY = "AGENTS"

_CATEGORY_CHARS = re.compile(r"^[a-z_]*$")
_CHAPTER_CHARS = re.compile(r"^[A-Za-z :\-_]*$")
_FILENAME_INVALID = '/\\:*?"<>|'

# Text that opens with an emphasis span does not start with plain text.
_LEADING_EMPHASIS = re.compile(r"^(\*{1,3}|_{1,3})(?![\s*_])(.*?\S)\1(?![A-Za-z0-9_*])")

_DEFAULT_LIMITS = Limits()


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


def _require(value: Any, name: str, limit: int) -> str:
    """Check presence and length of a string parameter."""
    if not isinstance(value, str) or value == "":
        raise InvalidParameterError(f"{name} is required")
    if _byte_length(value) > limit:
        raise InvalidParameterError(f"{name} exceeds maximum length of {limit} characters")
    return value


def validate_project_root(value: Any, limits: Limits = _DEFAULT_LIMITS) -> str:
    return _require(value, "project_root", limits.max_project_root_len)


def validate_operation_description(value: Any, limits: Limits = _DEFAULT_LIMITS) -> str:
    return _require(value, "operation_description", limits.max_operation_desc_len)


def validate_common(
    project_root: Any, operation_description: Any, limits: Limits = _DEFAULT_LIMITS
) -> None:
    """Validate the parameters shared by every tool but the version tool."""
    validate_project_root(project_root, limits)
    validate_operation_description(operation_description, limits)


def validate_category(value: Any, limits: Limits = _DEFAULT_LIMITS) -> str:
    """Validate a category name, which doubles as a file stem."""
    _require(value, "category", limits.max_category_len)

    if value.strip() != value:
        raise InvalidParameterError("category name must not start or end with whitespace")
    if not _CATEGORY_CHARS.match(value):
        raise InvalidParameterError(
            "category name must contain only lowercase English letters (a-z) "
            "and underscore (_)"
        )
    for ch in value:
        if ch in _FILENAME_INVALID:
            raise InvalidParameterError(
                f"category name contains invalid character: '{ch}' (invalid for filename)"
            )
    if value == RESERVED_CATEGORY:
        raise InvalidParameterError("category name 'AGENTS' is reserved")
    return value


def _is_plain_heading_start(text: str) -> bool:
    return bool(text) and not _LEADING_EMPHASIS.match(text)


def validate_chapter(value: Any, limits: Limits = _DEFAULT_LIMITS) -> str:
    """Validate a chapter name, which becomes a level-1 heading."""
    _require(value, "chapter", limits.max_chapter_len)

    if value.strip() != value:
        raise InvalidParameterError("chapter name must not start or end with whitespace")
    if not _CHAPTER_CHARS.match(value):
        raise InvalidParameterError(
            "chapter name must contain only uppercase and lowercase English letters "
            "(A-Z, a-z), spaces, colons (:), hyphens (-), and underscores (_)"
        )

    heading = parse_level1_heading(f"# {value}")
    if heading is None or not _is_plain_heading_start(heading):
        raise InvalidParameterError("chapter name is not valid markdown heading content")
    return value


def validate_index(value: Any, limits: Limits = _DEFAULT_LIMITS) -> str:
    return _require(value, "index", limits.max_index_len)


def validate_text(value: Any, limits: Limits = _DEFAULT_LIMITS) -> str:
    return _require(value, "text", limits.max_text_len)


def validate_title(value: Any, required: bool = True, limits: Limits = _DEFAULT_LIMITS) -> str:
    """Validate a requirement title.

    Args:
        value: The title.
        required: Whether an empty title is an error.
        limits: Parameter limits.

    Returns:
        The title ("" when optional and omitted).
    """
    if value is None and not required:
        return ""
    if not isinstance(value, str):
        raise InvalidParameterError("title is required")
    if required and value == "":
        raise InvalidParameterError("title is required")
    if _byte_length(value) > limits.max_title_len:
        raise InvalidParameterError(
            f"title exceeds maximum length of {limits.max_title_len} characters"
        )
    if value == "":
        return value

    if "\n" in value or "\r" in value:
        raise InvalidParameterError("title must not contain newlines (invalid for markdown heading)")
    # The title must read back unchanged from the heading it is written into.
    parsed = parse_level2_heading(f"## G.G.1: {value}")
    if parsed is None or parsed[1] != value:
        raise InvalidParameterError("title is not valid markdown heading content")
    return value


def validate_keywords(keywords: Any, limits: Limits = _DEFAULT_LIMITS) -> list[str]:
    """Validate search keywords and drop empty ones.

    Args:
        keywords: A single keyword or a list of keywords.
        limits: Parameter limits.

    Returns:
        The non-empty keywords, in the given order.
    """
    if isinstance(keywords, str):
        keywords = [keywords]
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        raise InvalidParameterError("keywords must be a string or a list of strings")

    if len(keywords) > limits.max_batch_size:
        raise InvalidParameterError(
            f"Keywords count exceeds maximum limit of {limits.max_batch_size}"
        )

    filtered: list[str] = []
    for keyword in keywords:
        if _byte_length(keyword) > limits.max_keyword_len:
            raise InvalidParameterError(
                f"Keyword exceeds maximum length of {limits.max_keyword_len} characters"
            )
        if keyword:
            filtered.append(keyword)
    return filtered
