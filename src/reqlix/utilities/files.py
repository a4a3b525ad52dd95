"""
reqlix.utilities.files - UTF-8 file access with classified errors.

Reads and writes keep line terminators exactly as they are. Writes go to
a temporary file in the target directory which then replaces the target,
so a failed write leaves the previous content in place.
"""

from __future__ import annotations

import errno
import os
import tempfile
from pathlib import Path

from reqlix.core.errors import StorageError


def read_file_utf8(path: Path) -> str:
    """Read a file as UTF-8 text without newline translation.

    Raises:
        StorageError: With a message naming the path and the failure kind.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except PermissionError as e:
        raise StorageError(f"Permission denied: {path}", path, e) from e
    except FileNotFoundError as e:
        raise StorageError(f"File not found: {path}", path, e) from e
    except UnicodeDecodeError as e:
        raise StorageError(f"Encoding error: file is not valid UTF-8: {path}", path, e) from e
    except OSError as e:
        raise StorageError(f"Failed to read file {path}: {e}", path, e) from e


def write_file_utf8(path: Path, content: str) -> None:
    """Write UTF-8 text, creating parent directories as needed.

    Raises:
        StorageError: With a message naming the path and the failure kind.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        raise StorageError(f"Permission denied: {path}", path, e) from e
    except OSError as e:
        raise StorageError(f"Failed to create directory for {path}: {e}", path, e) from e

    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_name, path)
        tmp_name = None
    except PermissionError as e:
        raise StorageError(f"Permission denied: {path}", path, e) from e
    except FileNotFoundError as e:
        raise StorageError(f"Invalid path: {path}", path, e) from e
    except OSError as e:
        if e.errno == errno.ENOSPC:
            raise StorageError(f"Disk full: cannot write to {path}", path, e) from e
        raise StorageError(f"Failed to write file {path}: {e}", path, e) from e
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
