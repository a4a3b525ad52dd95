"""
reqlix.core.document - Category document scanner.

A category document is parsed in two passes:

1. ``scan_headings`` walks the raw text once, tracking fenced code blocks,
   and yields a HeadingEvent for every chapter (``#``) and requirement
   (``##``) heading found outside fences, with its character offsets.
2. ``CategoryDocument.from_text`` reduces those events into an ordered list
   of blocks (free text, chapter heading, requirement) whose concatenation
   is exactly the original text.

Mutations rewrite blocks and render the document back to text, so regions
that are not touched keep their bytes.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from reqlix.core.errors import NotFoundError
from reqlix.core.headings import is_fence, parse_level1_heading, parse_level2_heading
from reqlix.core.models import Requirement, RequirementSummary


class HeadingKind(Enum):
    """Kinds of headings the scanner reports."""

    CHAPTER = "chapter"
    REQUIREMENT = "requirement"


class BlockKind(Enum):
    """Kinds of blocks in a parsed document."""

    TEXT = "text"
    CHAPTER = "chapter"
    REQUIREMENT = "requirement"


@dataclass(frozen=True)
class Line:
    """A physical line of a document.

    Attributes:
        number: 1-indexed line number
        start: Offset of the first character
        end: Offset just past the line terminator (or end of text)
        content: Line text without ``\\n`` and a trailing ``\\r``
    """

    number: int
    start: int
    end: int
    content: str


@dataclass(frozen=True)
class HeadingEvent:
    """A heading found outside fenced code blocks.

    Attributes:
        kind: CHAPTER or REQUIREMENT
        line: 1-indexed line number of the heading
        start: Offset of the heading line
        end: Offset just past the heading line terminator
        name: Chapter name, or requirement index
        title: Requirement title ("" for chapters)
    """

    kind: HeadingKind
    line: int
    start: int
    end: int
    name: str
    title: str = ""


@dataclass
class Block:
    """A contiguous slice of a document.

    CHAPTER blocks hold just the heading line. REQUIREMENT blocks hold the
    heading line and the body up to the next heading. TEXT blocks hold
    anything else (text before the first heading, chapter introductions).

    Attributes:
        kind: Block kind
        text: Raw text of the block
        name: Chapter name or requirement index ("" for TEXT)
        title: Requirement title ("" otherwise)
        chapter: Enclosing chapter name, None before the first chapter
    """

    kind: BlockKind
    text: str
    name: str = ""
    title: str = ""
    chapter: str | None = None


def iter_lines(text: str) -> Iterator[Line]:
    """Split text into lines, keeping offsets.

    Only ``\\n`` ends a line; a ``\\r`` before it is dropped from
    ``content`` but kept in the offsets.
    """
    pos = 0
    number = 0
    length = len(text)
    while pos < length:
        number += 1
        newline = text.find("\n", pos)
        end = length if newline == -1 else newline + 1
        content = text[pos:end].rstrip("\n")
        if content.endswith("\r"):
            content = content[:-1]
        yield Line(number=number, start=pos, end=end, content=content)
        pos = end


def scan_headings(text: str) -> list[HeadingEvent]:
    """First pass: list chapter and requirement headings in document order.

    A line whose stripped form starts with three backticks toggles the
    fence state; headings are not recognized while a fence is open, and an
    unterminated fence runs to the end of the document.
    """
    events: list[HeadingEvent] = []
    in_fence = False

    for line in iter_lines(text):
        if is_fence(line.content):
            in_fence = not in_fence
            continue
        if in_fence:
            continue

        chapter = parse_level1_heading(line.content)
        if chapter is not None:
            events.append(
                HeadingEvent(HeadingKind.CHAPTER, line.number, line.start, line.end, chapter)
            )
            continue

        requirement = parse_level2_heading(line.content)
        if requirement is not None:
            index, title = requirement
            events.append(
                HeadingEvent(
                    HeadingKind.REQUIREMENT, line.number, line.start, line.end, index, title
                )
            )

    return events


@dataclass
class CategoryDocument:
    """Structured view of one category document.

    Attributes:
        blocks: Ordered blocks; ``render()`` joins them back into text.
        events: Heading events from the first pass.
    """

    blocks: list[Block] = field(default_factory=list)
    events: list[HeadingEvent] = field(default_factory=list)

    # -- Parsing and rendering --

    @classmethod
    def from_text(cls, text: str) -> CategoryDocument:
        """Second pass: reduce heading events into blocks."""
        events = scan_headings(text)
        blocks: list[Block] = []

        first = events[0].start if events else len(text)
        if first > 0:
            blocks.append(Block(BlockKind.TEXT, text[:first]))

        chapter: str | None = None
        for position, event in enumerate(events):
            next_start = events[position + 1].start if position + 1 < len(events) else len(text)

            if event.kind is HeadingKind.CHAPTER:
                chapter = event.name
                blocks.append(
                    Block(
                        BlockKind.CHAPTER,
                        text[event.start : event.end],
                        name=event.name,
                        chapter=chapter,
                    )
                )
                if event.end < next_start:
                    blocks.append(
                        Block(BlockKind.TEXT, text[event.end : next_start], chapter=chapter)
                    )
            else:
                blocks.append(
                    Block(
                        BlockKind.REQUIREMENT,
                        text[event.start : next_start],
                        name=event.name,
                        title=event.title,
                        chapter=chapter,
                    )
                )

        return cls(blocks=blocks, events=events)

    def render(self, blocks: list[Block] | None = None) -> str:
        """Join blocks back into document text."""
        return "".join(block.text for block in (self.blocks if blocks is None else blocks))

    def reparsed(self) -> CategoryDocument:
        """Return a freshly parsed document for the current block text."""
        return CategoryDocument.from_text(self.render())

    # -- Queries --

    def chapters(self) -> list[str]:
        """Chapter names in document order, duplicates kept."""
        return [event.name for event in self.events if event.kind is HeadingKind.CHAPTER]

    def has_chapter(self, chapter: str) -> bool:
        return chapter in self.chapters()

    def requirements(self, chapter: str) -> list[RequirementSummary]:
        """Requirement headings whose enclosing chapter is ``chapter``."""
        return [
            RequirementSummary(index=block.name, title=block.title)
            for block in self.blocks
            if block.kind is BlockKind.REQUIREMENT and block.chapter == chapter
        ]

    def all_requirements(self) -> list[Block]:
        """Every requirement block, including ones before the first chapter."""
        return [block for block in self.blocks if block.kind is BlockKind.REQUIREMENT]

    def requirement_position(self, index: str) -> int:
        """Position in ``blocks`` of the first requirement with ``index``.

        Raises:
            NotFoundError: If no requirement heading carries the index.
        """
        for position, block in enumerate(self.blocks):
            if block.kind is BlockKind.REQUIREMENT and block.name == index:
                return position
        raise NotFoundError("Requirement not found")

    def requirement_run(self, index: str) -> tuple[int, int]:
        """Block range ``[start, stop)`` covered by the requirement ``index``.

        The body ends at the next chapter heading or at the next requirement
        heading carrying a different index.
        """
        start = self.requirement_position(index)
        stop = start + 1
        while (
            stop < len(self.blocks)
            and self.blocks[stop].kind is BlockKind.REQUIREMENT
            and self.blocks[stop].name == index
        ):
            stop += 1
        return start, stop

    def find(self, category: str, index: str) -> Requirement:
        """Fetch the full requirement with ``index``.

        Raises:
            NotFoundError: If no requirement heading carries the index.
        """
        start, stop = self.requirement_run(index)
        heading = self.blocks[start]
        raw = self.render(self.blocks[start:stop])
        body = raw.split("\n", 1)[1] if "\n" in raw else ""
        text = "\n".join(line.rstrip("\r") for line in body.split("\n")).strip()
        return Requirement(
            index=index,
            title=heading.title,
            text=text,
            category=category,
            chapter=heading.chapter or "",
        )

    def chapter_span(self, chapter: str) -> tuple[int, int]:
        """Block range ``[start, stop)`` of the first chapter named ``chapter``.

        Raises:
            NotFoundError: If the chapter heading does not exist.
        """
        for position, block in enumerate(self.blocks):
            if block.kind is BlockKind.CHAPTER and block.name == chapter:
                return position, self.chapter_stop(position)
        raise NotFoundError("Chapter not found")

    def chapter_stop(self, position: int) -> int:
        stop = position + 1
        while stop < len(self.blocks) and self.blocks[stop].kind is not BlockKind.CHAPTER:
            stop += 1
        return stop


def is_empty_document(text: str) -> bool:
    """Return True for empty or whitespace-only documents."""
    return not text.strip()


def list_chapters(text: str) -> list[str]:
    """Chapter names of a document in order, duplicates preserved."""
    if is_empty_document(text):
        return []
    return CategoryDocument.from_text(text).chapters()


def list_requirements(text: str, chapter: str) -> list[RequirementSummary]:
    """Requirement summaries inside ``chapter``, in document order."""
    if is_empty_document(text):
        return []
    return CategoryDocument.from_text(text).requirements(chapter)


def find_requirement(text: str, category: str, index: str) -> Requirement:
    """Fetch a requirement by index from a document.

    Raises:
        NotFoundError: If the requirement does not exist.
    """
    return CategoryDocument.from_text(text).find(category, index)
