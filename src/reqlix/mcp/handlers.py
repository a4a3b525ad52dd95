"""reqlix.mcp.handlers - Operation handlers behind the reqlix_* tools.

Each ``handle_*`` function validates its parameters, resolves the
requirements directory of ``project_root`` and performs one operation.
The result is always a JSON envelope string; errors never escape as
exceptions. Batch operations report success or failure per item and keep
going after a failed item.

Configuration arrives as a Settings object; handlers never consult the
environment themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from reqlix import __version__
from reqlix.config.settings import Settings
from reqlix.core.document import find_requirement, list_chapters, list_requirements
from reqlix.core.errors import InvalidParameterError, ReqlixError
from reqlix.core.models import DeletedRequirement, Requirement
from reqlix.core.mutator import delete_requirement, insert_requirement, update_requirement
from reqlix.core.prefixes import parse_index
from reqlix.core.search import search_requirements
from reqlix.core.store import RequirementsStore
from reqlix.mcp.responses import item_error, item_success, json_error, json_success
from reqlix.mcp.validation import (
    validate_category,
    validate_chapter,
    validate_common,
    validate_index,
    validate_keywords,
    validate_text,
    validate_title,
)
from reqlix.utilities.files import read_file_utf8

CATEGORIES_HEADING = "\n# Categories\n\n"
NO_CATEGORIES = "No categories defined yet."


@dataclass(frozen=True)
class UpdateItem:
    """One entry of a batch update."""

    index: str
    text: str
    title: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> UpdateItem:
        if not isinstance(data, dict):
            raise InvalidParameterError("items must be objects with index and text")
        return cls(
            index=data.get("index", ""),
            text=data.get("text", ""),
            title=data.get("title"),
        )


# ─────────────────────────────────────────────────────────────────────────────
# Shared helpers
# ─────────────────────────────────────────────────────────────────────────────


def _settings(settings: Settings | None) -> Settings:
    return settings if settings is not None else Settings()


def _open_store(project_root: str, settings: Settings) -> RequirementsStore:
    """Resolve (creating if needed) the requirements directory."""
    return RequirementsStore(settings.locator(project_root).requirements_dir())


def _resolve(store: RequirementsStore, index: str) -> str:
    """Category holding ``index``, found through its category prefix."""
    category_prefix, _, _ = parse_index(index)
    return store.find_category_by_prefix(category_prefix)


def _run_batch(
    values: list[Any],
    operation: Any,
    limit: int,
    limit_message: str,
) -> str:
    """Apply ``operation`` to every value and collect per-item results."""
    if not values:
        return json_success([])
    if len(values) > limit:
        return json_error(limit_message)

    results = []
    for value in values:
        try:
            results.append(item_success(operation(value)))
        except ReqlixError as e:
            results.append(item_error(str(e)))
    return json_success(results)


# ─────────────────────────────────────────────────────────────────────────────
# Read operations
# ─────────────────────────────────────────────────────────────────────────────


def _categories_chapter(categories: list[str]) -> str:
    if not categories:
        return f"{CATEGORIES_HEADING}{NO_CATEGORIES}\n"
    listing = "\n".join(f"- {category}" for category in categories)
    return f"{CATEGORIES_HEADING}{listing}\n"


def handle_get_instructions(
    project_root: str,
    operation_description: str,
    settings: Settings | None = None,
) -> str:
    """Return the instructions file text followed by a generated category list.

    The instructions file is created with default content when the project
    has none yet.
    """
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        instructions = settings.locator(project_root).find_or_create_instructions()
        content = read_file_utf8(instructions)
        categories = RequirementsStore(instructions.parent).list_categories()
    except ReqlixError as e:
        return json_error(str(e))

    return json_success({"content": content + _categories_chapter(categories)})


def handle_get_categories(
    project_root: str,
    operation_description: str,
    settings: Settings | None = None,
) -> str:
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        categories = _open_store(project_root, settings).list_categories()
    except ReqlixError as e:
        return json_error(str(e))
    return json_success({"categories": categories})


def handle_get_chapters(
    project_root: str,
    operation_description: str,
    category: str,
    settings: Settings | None = None,
) -> str:
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        validate_category(category, settings.limits)
        text = _open_store(project_root, settings).read(category)
        chapters = list_chapters(text)
    except ReqlixError as e:
        return json_error(str(e))
    return json_success({"category": category, "chapters": chapters})


def handle_get_requirements(
    project_root: str,
    operation_description: str,
    category: str,
    chapter: str,
    settings: Settings | None = None,
) -> str:
    """List ``{index, title}`` of every requirement in one chapter."""
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        validate_category(category, settings.limits)
        validate_chapter(chapter, settings.limits)
        text = _open_store(project_root, settings).read(category)
        if chapter not in list_chapters(text):
            return json_error("Chapter not found")
        requirements = list_requirements(text, chapter)
    except ReqlixError as e:
        return json_error(str(e))

    return json_success(
        {
            "category": category,
            "chapter": chapter,
            "requirements": [r.to_dict() for r in requirements],
        }
    )


def get_single_requirement(
    project_root: str, index: str, settings: Settings | None = None
) -> Requirement:
    """Fetch one requirement by index.

    Raises:
        ReqlixError: If the index is invalid or nothing matches it.
    """
    settings = _settings(settings)
    validate_index(index, settings.limits)
    store = _open_store(project_root, settings)
    category = _resolve(store, index)
    return find_requirement(store.read(category), category, index)


def handle_get_requirement(
    project_root: str,
    operation_description: str,
    index: str | list[str],
    settings: Settings | None = None,
) -> str:
    """Fetch one requirement, or up to ``max_batch_size`` in one call."""
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        if isinstance(index, list):
            return _run_batch(
                index,
                lambda value: get_single_requirement(project_root, value, settings),
                settings.limits.max_batch_size,
                "Batch request exceeds maximum limit of "
                f"{settings.limits.max_batch_size} indices",
            )
        requirement = get_single_requirement(project_root, index, settings)
    except ReqlixError as e:
        return json_error(str(e))
    return json_success(requirement)


def handle_search_requirements(
    project_root: str,
    operation_description: str,
    keywords: str | list[str],
    settings: Settings | None = None,
) -> str:
    """Find requirements whose title or text contains any keyword.

    Empty keywords are dropped; with none left the result is empty.
    """
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        filtered = validate_keywords(keywords, settings.limits)
        if not filtered:
            return json_success({"keywords": filtered, "results": []})
        results = search_requirements(_open_store(project_root, settings), filtered)
    except ReqlixError as e:
        return json_error(str(e))

    return json_success({"keywords": filtered, "results": [r.to_dict() for r in results]})


def handle_get_version() -> str:
    return json_success({"version": __version__})


# ─────────────────────────────────────────────────────────────────────────────
# Write operations
# ─────────────────────────────────────────────────────────────────────────────


def handle_insert_requirement(
    project_root: str,
    operation_description: str,
    category: str,
    chapter: str,
    title: str,
    text: str,
    settings: Settings | None = None,
) -> str:
    """Insert a requirement, creating its category and chapter when missing.

    The category document is written once, after the new requirement has
    been placed.
    """
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        validate_category(category, settings.limits)
        validate_chapter(chapter, settings.limits)
        validate_text(text, settings.limits)
        validate_title(title, required=True, limits=settings.limits)

        store = _open_store(project_root, settings)
        current = store.read_or_empty(category)
        new_text, requirement = insert_requirement(
            current,
            category,
            chapter,
            title,
            text,
            categories=store.list_categories(),
        )
        store.write(category, new_text)
    except ReqlixError as e:
        return json_error(str(e))
    return json_success(requirement)


def update_single_requirement(
    project_root: str,
    index: str,
    text: str,
    title: str | None = None,
    settings: Settings | None = None,
) -> Requirement:
    """Rewrite the text, and optionally the title, of one requirement.

    An empty title is treated like an omitted one.

    Raises:
        ReqlixError: On invalid input, unknown index or title collision.
    """
    settings = _settings(settings)
    validate_index(index, settings.limits)
    validate_text(text, settings.limits)
    new_title = validate_title(title, required=False, limits=settings.limits) or None

    store = _open_store(project_root, settings)
    category = _resolve(store, index)
    new_text, requirement = update_requirement(
        store.read(category), category, index, text, title=new_title
    )
    store.write(category, new_text)
    return requirement


def handle_update_requirement(
    project_root: str,
    operation_description: str,
    index: str | None = None,
    text: str | None = None,
    title: str | None = None,
    items: list[dict[str, Any]] | None = None,
    settings: Settings | None = None,
) -> str:
    """Update one requirement (index, text, title) or a batch (items).

    Exactly one of ``index`` and ``items`` must be given.
    """
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
    except ReqlixError as e:
        return json_error(str(e))

    if index is not None and items is not None:
        return json_error(
            "Use either index+text+title for single update OR items for batch update, not both"
        )
    if index is None and items is None:
        return json_error(
            "Either index (for single update) or items (for batch update) is required"
        )

    if items is not None:

        def update_item(data: Any) -> Requirement:
            item = UpdateItem.from_dict(data)
            return update_single_requirement(
                project_root, item.index, item.text, item.title, settings
            )

        return _run_batch(
            items,
            update_item,
            settings.limits.max_batch_size,
            f"Batch update exceeds maximum limit of {settings.limits.max_batch_size} items",
        )

    if text is None:
        return json_error("text is required for single update")
    try:
        requirement = update_single_requirement(project_root, index, text, title, settings)
    except ReqlixError as e:
        return json_error(str(e))
    return json_success(requirement)


def delete_single_requirement(
    project_root: str, index: str, settings: Settings | None = None
) -> DeletedRequirement:
    """Remove one requirement, and its chapter when that leaves it empty."""
    settings = _settings(settings)
    validate_index(index, settings.limits)
    store = _open_store(project_root, settings)
    category = _resolve(store, index)
    new_text, deleted = delete_requirement(store.read(category), category, index)
    store.write(category, new_text)
    return deleted


def handle_delete_requirement(
    project_root: str,
    operation_description: str,
    index: str | list[str],
    settings: Settings | None = None,
) -> str:
    """Delete one requirement, or up to ``max_batch_size`` in order."""
    settings = _settings(settings)
    try:
        validate_common(project_root, operation_description, settings.limits)
        if isinstance(index, list):
            return _run_batch(
                index,
                lambda value: delete_single_requirement(project_root, value, settings),
                settings.limits.max_batch_size,
                "Batch delete exceeds maximum limit of "
                f"{settings.limits.max_batch_size} indices",
            )
        deleted = delete_single_requirement(project_root, index, settings)
    except ReqlixError as e:
        return json_error(str(e))
    return json_success(deleted)

