"""
reqlix.core.search - Keyword search across all category documents.

Matching is a case-insensitive substring test of every keyword against
each requirement's title and text; one matching keyword is enough.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from reqlix.core.document import CategoryDocument
from reqlix.core.errors import ReqlixError
from reqlix.core.models import Requirement
from reqlix.core.store import RequirementsStore


def matches_keywords(requirement: Requirement, keywords: Iterable[str]) -> bool:
    """Check whether any lowercased keyword occurs in title or text."""
    title = requirement.title.lower()
    text = requirement.text.lower()
    return any(keyword in title or keyword in text for keyword in keywords)


def iter_requirements(store: RequirementsStore) -> Iterator[Requirement]:
    """Yield every requirement, category by category in name order.

    Categories that cannot be read are skipped.
    """
    for category in store.list_categories():
        try:
            document = CategoryDocument.from_text(store.read(category))
        except ReqlixError:
            continue

        for chapter in dict.fromkeys(document.chapters()):
            for summary in document.requirements(chapter):
                try:
                    yield document.find(category, summary.index)
                except ReqlixError:
                    continue


def search_requirements(store: RequirementsStore, keywords: list[str]) -> list[Requirement]:
    """Find requirements whose title or text contains any keyword.

    Args:
        store: The requirements store to search.
        keywords: Non-empty keywords; an empty list matches nothing.

    Returns:
        Matching requirements. Callers must not rely on the order.
    """
    if not keywords:
        return []
    lowered = [keyword.lower() for keyword in keywords]
    return [
        requirement
        for requirement in iter_requirements(store)
        if matches_keywords(requirement, lowered)
    ]
