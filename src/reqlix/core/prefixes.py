"""
reqlix.core.prefixes - Index prefix allocation and index helpers.

Requirement indices have three dot-separated segments:
``{category_prefix}.{chapter_prefix}.{number}``. Prefixes are the shortest
run of leading letters of a name (uppercased) that no sibling shares.

Once a category or chapter holds requirements, the prefix found in its
existing indices is reused instead of being recomputed, so issued indices
stay stable. Category resolution, on the other hand, always recomputes
prefixes from the current set of categories.
"""

from __future__ import annotations

from collections.abc import Iterable

from reqlix.core.document import CategoryDocument
from reqlix.core.errors import InvalidParameterError, NotFoundError


def _letters(name: str) -> str:
    return "".join(c for c in name if c.isascii() and c.isalpha())


def unique_prefix(name: str, siblings: Iterable[str]) -> str:
    """Compute the shortest unique uppercase letter prefix for ``name``.

    Only ASCII letters count; other characters are skipped. Siblings equal
    to ``name`` are ignored. If no unique prefix exists, the full letter
    sequence is returned, so names that differ only in non-letters share
    the same prefix.

    Args:
        name: The name to compute a prefix for.
        siblings: All names in the same scope (may include ``name``).

    Returns:
        Uppercase prefix, or "" if ``name`` has no letters.
    """
    letters = _letters(name)
    if not letters:
        return ""

    others = [_letters(other).upper() for other in siblings if other != name]
    others = [other for other in others if other]

    length = 1
    while True:
        candidate = letters[:length].upper()
        conflicts = sum(1 for other in others if other[:length] == candidate)
        if conflicts == 0 or length >= len(letters):
            return candidate
        length += 1


def resolve_category(categories: list[str], prefix: str) -> str:
    """Find the category whose freshly computed prefix equals ``prefix``.

    Raises:
        NotFoundError: If no category matches.
    """
    for category in categories:
        if unique_prefix(category, categories) == prefix:
            return category
    raise NotFoundError("Category not found")


def parse_index(index: str) -> tuple[str, str, str]:
    """Split an index into ``(category_prefix, chapter_prefix, number)``.

    Raises:
        InvalidParameterError: If the index does not have three segments.
    """
    parts = index.split(".")
    if len(parts) != 3:
        raise InvalidParameterError(f"Invalid index format: {index}")
    return parts[0], parts[1], parts[2]


def existing_category_prefix(document: CategoryDocument) -> str | None:
    """Category prefix used by the first requirement in the document."""
    for block in document.all_requirements():
        return block.name.split(".")[0]
    return None


def existing_chapter_prefix(document: CategoryDocument, chapter: str) -> str | None:
    """Chapter prefix used by the first requirement in ``chapter``."""
    for summary in document.requirements(chapter):
        parts = summary.index.split(".")
        if len(parts) >= 2:
            return parts[1]
    return None


def category_prefix_for(
    document: CategoryDocument,
    category: str,
    categories: Iterable[str],
) -> str:
    """Reuse the document's category prefix or compute a fresh one."""
    existing = existing_category_prefix(document)
    if existing is not None:
        return existing
    siblings = set(categories)
    siblings.add(category)
    return unique_prefix(category, sorted(siblings))


def chapter_prefix_for(document: CategoryDocument, chapter: str) -> str:
    """Reuse the chapter's prefix or compute one against its siblings."""
    existing = existing_chapter_prefix(document, chapter)
    if existing is not None:
        return existing
    return unique_prefix(chapter, document.chapters())


def next_requirement_number(document: CategoryDocument, chapter: str) -> int:
    """One more than the highest requirement number in ``chapter``.

    Indices that do not have three segments or a numeric last segment are
    ignored. Numbers freed by deletion are not reused while a higher one
    remains.
    """
    highest = 0
    for summary in document.requirements(chapter):
        parts = summary.index.split(".")
        if len(parts) == 3 and parts[2].isascii() and parts[2].isdigit():
            highest = max(highest, int(parts[2]))
    return highest + 1


def title_exists_in_chapter(
    document: CategoryDocument,
    chapter: str,
    title: str,
    exclude_index: str | None = None,
) -> bool:
    """Check whether ``title`` is used by another requirement in ``chapter``."""
    for summary in document.requirements(chapter):
        if exclude_index is not None and summary.index == exclude_index:
            continue
        if summary.title == title:
            return True
    return False
