"""
reqlix - Requirements kept as Markdown, served to AI agents over MCP

reqlix stores a project's requirements as plain Markdown files: one file
per category, level-1 headings for chapters and level-2 headings of the
form ``{index}: {title}`` for requirements. Agents read and edit them
through the reqlix_* tools instead of touching the files directly.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("reqlix")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__author__ = "reqlix contributors"
__license__ = "MIT"

__all__ = [
    "__version__",
]
