"""
reqlix.core - Markdown-as-database engine.

Heading recognition, document scanning, prefix allocation
and requirement mutation over category document text. Directory access
lives in ``reqlix.core.store`` and keyword search in ``reqlix.core.search``.
"""

from reqlix.core.document import (
    CategoryDocument,
    find_requirement,
    list_chapters,
    list_requirements,
)
from reqlix.core.errors import (
    DuplicateTitleError,
    InvalidParameterError,
    NotFoundError,
    ReqlixError,
    SerializationError,
    StorageError,
)
from reqlix.core.headings import parse_level1_heading, parse_level2_heading
from reqlix.core.models import DeletedRequirement, Requirement, RequirementSummary
from reqlix.core.mutator import delete_requirement, insert_requirement, update_requirement
from reqlix.core.prefixes import parse_index, resolve_category, unique_prefix

__all__ = [
    "CategoryDocument",
    "DeletedRequirement",
    "DuplicateTitleError",
    "InvalidParameterError",
    "NotFoundError",
    "ReqlixError",
    "Requirement",
    "RequirementSummary",
    "SerializationError",
    "StorageError",
    "delete_requirement",
    "find_requirement",
    "insert_requirement",
    "list_chapters",
    "list_requirements",
    "parse_index",
    "parse_level1_heading",
    "parse_level2_heading",
    "resolve_category",
    "unique_prefix",
    "update_requirement",
]
