"""
reqlix.core.store - Category documents in a requirements directory.

The directory holds one ``<category>.md`` file per category plus the
instructions file (``AGENTS.md``), which is not a category.
"""

from __future__ import annotations

from pathlib import Path

from reqlix.core.errors import NotFoundError, StorageError
from reqlix.core.prefixes import resolve_category
from reqlix.utilities.files import read_file_utf8, write_file_utf8

CATEGORY_SUFFIX = ".md"
RESERVED_CATEGORY = "AGENTS"


class RequirementsStore:
    """
    Read and write category documents in one directory.

    Attributes:
        directory: The requirements directory
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def list_categories(self) -> list[str]:
        """Category names (file stems), sorted, without ``AGENTS``.

        Raises:
            StorageError: If the directory cannot be listed.
        """
        try:
            entries = list(self.directory.iterdir())
        except OSError as e:
            raise StorageError(
                f"Failed to read requirements directory: {e}", self.directory, e
            ) from e

        categories = [
            entry.stem
            for entry in entries
            if entry.suffix == CATEGORY_SUFFIX
            and entry.stem != RESERVED_CATEGORY
            and entry.is_file()
        ]
        return sorted(categories)

    def category_path(self, category: str) -> Path:
        return self.directory / f"{category}{CATEGORY_SUFFIX}"

    def exists(self, category: str) -> bool:
        return self.category_path(category).exists()

    def read(self, category: str) -> str:
        """Read a category document.

        Raises:
            NotFoundError: If the category file does not exist.
            StorageError: If the file cannot be read.
        """
        path = self.category_path(category)
        if not path.exists():
            raise NotFoundError("Category not found")
        return read_file_utf8(path)

    def read_or_empty(self, category: str) -> str:
        """Read a category document, or "" for a category not created yet."""
        path = self.category_path(category)
        if not path.exists():
            return ""
        return read_file_utf8(path)

    def write(self, category: str, text: str) -> None:
        write_file_utf8(self.category_path(category), text)

    def find_category_by_prefix(self, prefix: str) -> str:
        """Resolve a category prefix against the current set of categories.

        Prefixes are recomputed from the category names every time; stored
        indices are not consulted.

        Raises:
            NotFoundError: If no category has the prefix.
        """
        return resolve_category(self.list_categories(), prefix)
