"""
reqlix.core.mutator - Insert, update and delete requirements in a document.

Each operation is a pure function from document text to new document text.
The document is parsed into blocks, the blocks are edited and the result
is rendered back, so text outside the edited requirement is unchanged.
Nothing here touches the filesystem.
"""

from __future__ import annotations

from collections.abc import Iterable

from reqlix.core.document import Block, BlockKind, CategoryDocument
from reqlix.core.errors import DuplicateTitleError, NotFoundError
from reqlix.core.models import DeletedRequirement, Requirement
from reqlix.core.prefixes import (
    category_prefix_for,
    chapter_prefix_for,
    next_requirement_number,
    title_exists_in_chapter,
)


def requirement_heading(index: str, title: str) -> str:
    """Format a requirement heading line (without terminator)."""
    return f"## {index}: {title}"


# ─────────────────────────────────────────────────────────────────────────────
# Block-level edits
# ─────────────────────────────────────────────────────────────────────────────


def append_chapter(document: CategoryDocument, chapter: str) -> CategoryDocument:
    """Append ``# {chapter}`` at the end of the document."""
    blocks = list(document.blocks)
    text = document.render()
    if text and not text.endswith("\n"):
        blocks.append(Block(BlockKind.TEXT, "\n"))
    blocks.append(Block(BlockKind.TEXT, f"\n# {chapter}\n"))
    return CategoryDocument(blocks=blocks).reparsed()


def add_requirement_block(
    document: CategoryDocument,
    chapter: str,
    index: str,
    title: str,
    text: str,
) -> CategoryDocument:
    """Add a requirement at the end of the first chapter named ``chapter``.

    The new block goes right before the newline that precedes the next
    chapter heading, or at the end of the document.

    Raises:
        NotFoundError: If the chapter heading does not exist.
    """
    _, stop = document.chapter_span(chapter)
    block = f"{requirement_heading(index, title)}\n\n{text}\n"
    blocks = list(document.blocks)

    if stop < len(blocks):
        # The chapter span ends with the newline before the next heading.
        blocks.insert(stop, Block(BlockKind.TEXT, block + "\n"))
    else:
        blocks.append(Block(BlockKind.TEXT, "\n" + block))

    return CategoryDocument(blocks=blocks).reparsed()


def replace_requirement_block(
    document: CategoryDocument,
    index: str,
    title: str,
    text: str,
) -> CategoryDocument:
    """Rewrite the heading and body of requirement ``index``.

    Exactly one blank line separates the rewritten body from a following
    heading; otherwise the body ends with a single newline.

    Raises:
        NotFoundError: If the requirement does not exist.
    """
    start, stop = document.requirement_run(index)
    # Anything after the run starts with a chapter or requirement heading.
    separator = "\n\n" if stop < len(document.blocks) else "\n"

    replacement = Block(
        BlockKind.TEXT,
        f"{requirement_heading(index, title)}\n\n{text}{separator}",
    )
    blocks = document.blocks[:start] + [replacement] + document.blocks[stop:]
    return CategoryDocument(blocks=blocks).reparsed()


def _trim_trailing_newlines(blocks: list[Block]) -> list[Block]:
    """Drop newlines at the end of the rendered blocks."""
    trimmed = list(blocks)
    while trimmed:
        last = trimmed[-1]
        text = last.text.rstrip("\n")
        if text:
            trimmed[-1] = Block(last.kind, text, last.name, last.title, last.chapter)
            break
        trimmed.pop()
    return trimmed


def remove_requirement_block(document: CategoryDocument, index: str) -> CategoryDocument:
    """Remove the first requirement block with ``index``.

    Newlines before the removed block are collapsed, and one blank line is
    put back if any content follows it.

    Raises:
        NotFoundError: If the requirement does not exist.
    """
    position = document.requirement_position(index)
    before = _trim_trailing_newlines(document.blocks[:position])
    after = document.blocks[position + 1 :]
    after_text = document.render(after)
    rest = after_text.lstrip("\n")

    blocks = before
    if rest:
        blocks.append(Block(BlockKind.TEXT, "\n\n" + rest))
    return CategoryDocument(blocks=blocks).reparsed()


def remove_chapter_if_empty(document: CategoryDocument, chapter: str) -> CategoryDocument:
    """Remove the first chapter named ``chapter`` when no requirement remains in it.

    The chapter heading and any other text in its span are removed; the
    newline before the next chapter heading is kept.
    """
    try:
        start, stop = document.chapter_span(chapter)
    except NotFoundError:
        return document

    span = document.blocks[start:stop]
    if any(block.kind is BlockKind.REQUIREMENT for block in span):
        return document

    blocks = document.blocks[:start]
    if stop < len(document.blocks):
        blocks.append(Block(BlockKind.TEXT, "\n"))
    blocks.extend(document.blocks[stop:])
    return CategoryDocument(blocks=blocks).reparsed()


# ─────────────────────────────────────────────────────────────────────────────
# Operations
# ─────────────────────────────────────────────────────────────────────────────


def insert_requirement(
    text: str,
    category: str,
    chapter: str,
    title: str,
    body: str,
    categories: Iterable[str] = (),
) -> tuple[str, Requirement]:
    """Insert a new requirement into a category document.

    Creates the chapter heading when missing, rejects duplicate titles,
    mints the next index and appends the requirement to the chapter.

    Args:
        text: Current document text ("" for a new category).
        category: Category name.
        chapter: Chapter name.
        title: Requirement title.
        body: Requirement text.
        categories: All category names, used to compute a fresh prefix.

    Returns:
        ``(new_text, requirement)``.

    Raises:
        DuplicateTitleError: If the title is already used in the chapter.
    """
    document = CategoryDocument.from_text(text)
    if not document.has_chapter(chapter):
        document = append_chapter(document, chapter)

    if title_exists_in_chapter(document, chapter, title):
        raise DuplicateTitleError()

    category_prefix = category_prefix_for(document, category, categories)
    chapter_prefix = chapter_prefix_for(document, chapter)
    number = next_requirement_number(document, chapter)
    index = f"{category_prefix}.{chapter_prefix}.{number}"

    document = add_requirement_block(document, chapter, index, title, body)
    requirement = Requirement(
        index=index, title=title, text=body, category=category, chapter=chapter
    )
    return document.render(), requirement


def update_requirement(
    text: str,
    category: str,
    index: str,
    body: str,
    title: str | None = None,
) -> tuple[str, Requirement]:
    """Replace the text, and optionally the title, of a requirement.

    Args:
        text: Current document text.
        category: Category name.
        index: Index of the requirement to update.
        body: New requirement text.
        title: New title; None keeps the current title.

    Returns:
        ``(new_text, requirement)``.

    Raises:
        NotFoundError: If the requirement does not exist.
        DuplicateTitleError: If another requirement in the chapter has the title.
    """
    document = CategoryDocument.from_text(text)
    existing = document.find(category, index)

    new_title = existing.title if title is None else title
    if title is not None and title_exists_in_chapter(
        document, existing.chapter, new_title, exclude_index=index
    ):
        raise DuplicateTitleError()

    document = replace_requirement_block(document, index, new_title, body)
    requirement = Requirement(
        index=index,
        title=new_title,
        text=body,
        category=category,
        chapter=existing.chapter,
    )
    return document.render(), requirement


def delete_requirement(text: str, category: str, index: str) -> tuple[str, DeletedRequirement]:
    """Remove a requirement, and its chapter if that leaves it empty.

    Returns:
        ``(new_text, deleted)``.

    Raises:
        NotFoundError: If the requirement does not exist.
    """
    document = CategoryDocument.from_text(text)
    existing = document.find(category, index)
    enclosing = document.blocks[document.requirement_position(index)].chapter

    document = remove_requirement_block(document, index)
    if enclosing is not None:
        document = remove_chapter_if_empty(document, enclosing)

    deleted = DeletedRequirement(
        index=index,
        title=existing.title,
        category=category,
        chapter=existing.chapter,
    )
    return document.render(), deleted
