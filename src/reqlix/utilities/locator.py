"""
reqlix.utilities.locator - Find (or create) the requirements directory.

The requirements directory is wherever the instructions file
(``AGENTS.md``) lives. Candidate locations are tried in order; when none
exists the file is created with the default instructions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from reqlix.core.errors import StorageError
from reqlix.utilities.files import write_file_utf8

DEFAULT_SEARCH_PATHS = ("docs/development/requirements", "docs/dev/req")
DEFAULT_CREATE_PATH = "docs/development/requirements"
INSTRUCTIONS_FILE = "AGENTS.md"

PLACEHOLDER_CONTENT = """\
# Instructions

These instructions are mandatory for all code operations:

1. Always verify that code matches requirements. If there are discrepancies, propose to the user
   to fix either the code or the requirements.

2. Make maximum effort to find relevant requirements for the code being modified and apply changes
   according to those requirements.

3. Document code thoroughly by leaving references to requirement indices in comments.

4. Requirement index format: `{CATEGORY}.{CHAPTER}.{NUMBER}` (e.g., `G.REQLIX_GET_I.1`, `T.U.2`).
   Requirements are organized hierarchically: **Category** groups related requirements together (e.g., general requirements, testing requirements).
   **Chapter** groups related requirements within a category (e.g., a specific tool or feature). **Requirement** is a single, atomic requirement with a unique index.

5. All requirements must be written in English.

6. Never edit files in {requirements_directory} directly. Always use this MCP server for all
   requirements operations.

7. When making code changes, follow this workflow:
    a. Update requirements if needed, then validate them (completeness, consistency, no redundancy or duplication)
    b. Request user review and confirmation of requirement changes
    c. Implement code changes according to the updated requirements
    d. Validate code changes for correctness and compliance with requirements; fix any issues
    e. Format all code
    f. Run automated checks (tests, code analyzers, etc.); fix any issues found

"""


def render_placeholder(requirements_directory: str) -> str:
    """Default instructions text naming the requirements directory."""
    return PLACEHOLDER_CONTENT.replace("{requirements_directory}", requirements_directory)


@dataclass
class RequirementsLocator:
    """
    Resolve the requirements directory of one project.

    Attributes:
        project_root: Project root directory
        rel_path: Preferred directory relative to the root ("" if unset)
        search_paths: Fallback directories, tried in order
        create_path: Directory used when nothing exists and rel_path is unset
        instructions_file: Name of the instructions file
    """

    project_root: Path
    rel_path: str = ""
    search_paths: tuple[str, ...] = field(default=DEFAULT_SEARCH_PATHS)
    create_path: str = DEFAULT_CREATE_PATH
    instructions_file: str = INSTRUCTIONS_FILE

    def __post_init__(self) -> None:
        self.project_root = Path(self.project_root)
        self.search_paths = tuple(self.search_paths)

    def candidate_paths(self) -> list[Path]:
        """Instructions file locations, most preferred first."""
        directories = []
        if self.rel_path:
            directories.append(self.rel_path)
        directories.extend(self.search_paths)
        return [self.project_root / d / self.instructions_file for d in directories]

    def creation_path(self) -> Path:
        """Where the instructions file is created when none exists."""
        directory = self.rel_path or self.create_path
        return self.project_root / directory / self.instructions_file

    def find_instructions(self) -> Path | None:
        for path in self.candidate_paths():
            if path.exists():
                return path
        return None

    def find_or_create_instructions(self) -> Path:
        """Return the instructions file, creating it if needed.

        Raises:
            StorageError: If the file has to be created and cannot be.
        """
        existing = self.find_instructions()
        if existing is not None:
            return existing

        path = self.creation_path()
        try:
            relative = path.parent.relative_to(self.project_root)
            requirements_directory = PurePosixPath(*relative.parts).as_posix()
        except ValueError:
            requirements_directory = ""
        if requirements_directory == ".":
            requirements_directory = ""

        try:
            write_file_utf8(path, render_placeholder(requirements_directory))
        except StorageError as e:
            raise StorageError(
                f"Failed to create requirements file: {e}", path, e.cause
            ) from e
        return path

    def requirements_dir(self) -> Path:
        """The directory holding the instructions file and category documents."""
        return self.find_or_create_instructions().parent
