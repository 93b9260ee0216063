"""File system utilities: classified reads, atomic writes, permissions."""

from __future__ import annotations

import errno
import logging
import os
import platform
import stat
import tempfile
from enum import Enum
from pathlib import Path

log = logging.getLogger(__name__)

# rw-r--r--
PID_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH

_IS_WINDOWS = platform.system() == "Windows"

_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


class ReadErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    OTHER = "other"


def classify_read_error(exc: OSError) -> ReadErrorKind:
    """Tag a read failure as a missing path or a genuine I/O error."""
    if exc.errno in _NOT_FOUND_ERRNOS:
        return ReadErrorKind.NOT_FOUND
    return ReadErrorKind.OTHER


def read_text(path: Path) -> str:
    """Return the whole content of *path*. Raises OSError on failure."""
    with open(path, encoding="ascii", errors="replace") as f:
        return f.read()


def ensure_file_permissions(path: Path, mode: int = PID_FILE_MODE) -> None:
    """Set permission bits on *path* (no-op on Windows)."""
    if not _IS_WINDOWS:
        path.chmod(mode)


def atomic_write(path: Path, content: str, mode: int = PID_FILE_MODE) -> None:
    """Write content to file atomically via temp file + rename.

    The temp file lives in the target's directory so the rename stays on one
    filesystem. On failure the temp file is left behind.
    """
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".tmp_",
        suffix=path.suffix,
    )
    with os.fdopen(fd, "w", encoding="ascii") as f:
        f.write(content)
        f.flush()
        os.fsync(f.fileno())

    os.replace(tmp_path, path)
    ensure_file_permissions(path, mode)
    log.debug("Wrote %s via %s", path, tmp_path)
