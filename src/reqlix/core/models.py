"""
reqlix.core.models - Data models for requirements.

Provides the records returned by the scanner, mutator and search engine.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class RequirementSummary:
    """
    A requirement as listed inside a chapter.

    Attributes:
        index: Requirement index (e.g., "G.G.1")
        title: Requirement title
    """

    index: str
    title: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Requirement:
    """
    A complete requirement record.

    Attributes:
        index: Requirement index (e.g., "G.G.1")
        title: Requirement title
        text: Body text with leading and trailing whitespace trimmed
        category: Category name (file stem of the category document)
        chapter: Name of the enclosing chapter ("" when none precedes it)
    """

    index: str
    title: str
    text: str
    category: str
    chapter: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DeletedRequirement:
    """Identity of a requirement removed by a delete operation."""

    index: str
    title: str
    category: str
    chapter: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
