"""PID file management: claim a path for this process, detect prior owners.

Usage::

    from pidclaim import AlreadyRunningError, PidFile

    pidfile = PidFile("/run/mydaemon.pid")
    try:
        pidfile.create()
    except AlreadyRunningError as e:
        sys.exit(str(e))

    try:
        # Run daemon
        pass
    finally:
        pidfile.remove()

The liveness probe only checks that *some* process holds the recorded PID.
A recycled PID belonging to an unrelated program is reported as a running
owner; remove the stale file by hand in that case.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from pidclaim.core import fileutil, process
from pidclaim.core.fileutil import ReadErrorKind

log = logging.getLogger(__name__)

_PID_RE = re.compile(r"[+-]?[0-9]+")


class PidFileError(Exception):
    """Base error for pidfile operations."""


class AlreadyRunningError(PidFileError):
    """Another live process owns the pidfile."""

    def __init__(self, pid: int, path: Path) -> None:
        self.pid = pid
        self.path = path
        super().__init__(f"Already running on PID {pid} (or pid file '{path}' is stale)")


def parse_pid(content: str) -> int | None:
    """Parse pidfile content as a base-10 integer. Returns None if corrupt."""
    if not _PID_RE.fullmatch(content):
        return None
    return int(content)


class PidFile:
    """A single pidfile claimed by the current process.

    An empty path disables the manager: every operation returns without
    touching the filesystem.
    """

    def __init__(self, path: str | os.PathLike | None) -> None:
        self._path = Path(path) if path else None
        self._pid = 0

    @classmethod
    def from_config(cls, config: dict) -> PidFile:
        """Build a manager from a loaded config dict (see core.config)."""
        pidfile_cfg = config.get("pidfile")
        if not isinstance(pidfile_cfg, dict):
            return cls(None)
        return cls(pidfile_cfg.get("path") or None)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def enabled(self) -> bool:
        return self._path is not None

    @property
    def pid(self) -> int:
        """PID last observed on disk or claimed by create(); 0 if none."""
        return self._pid

    def validate(self) -> None:
        """Record the PID of a live prior owner, if there is one.

        Missing files, corrupt content and dead PIDs are not errors.

        Raises:
            OSError: The pidfile exists but could not be read.
        """
        if self._path is None:
            return

        try:
            content = fileutil.read_text(self._path)
        except OSError as e:
            if fileutil.classify_read_error(e) is ReadErrorKind.NOT_FOUND:
                return
            raise

        pid = parse_pid(content)
        if pid is None:
            log.debug("Ignoring corrupt pidfile %s", self._path)
            return

        if not process.is_process_running(pid):
            log.debug("Ignoring stale pidfile %s (PID %d not running)", self._path, pid)
            return

        self._pid = pid

    def create(self) -> None:
        """Claim the pidfile for the current process.

        Calling it again from the owning process is a no-op.

        Raises:
            AlreadyRunningError: Another live process is recorded in the file.
            OSError: Reading or writing the pidfile failed.
        """
        if self._path is None:
            return

        self.validate()

        own_pid = process.current_pid()
        if self._pid:
            if self._pid == own_pid:
                return
            raise AlreadyRunningError(self._pid, self._path)

        self._pid = own_pid
        fileutil.atomic_write(self._path, str(own_pid))
        log.info("Wrote PID %d to %s", own_pid, self._path)

    def remove(self) -> None:
        """Delete the pidfile if it still holds the PID this manager claimed.

        Never raises: removal is advisory cleanup at shutdown.
        """
        if self._path is None:
            return

        try:
            content = fileutil.read_text(self._path)
        except OSError:
            return

        pid = parse_pid(content)
        if pid is None:
            log.debug("Not removing %s: content is not a PID", self._path)
            return
        if pid != self._pid:
            log.debug("Not removing %s: holds PID %d, ours is %d", self._path, pid, self._pid)
            return

        try:
            self._path.unlink()
        except OSError:
            log.debug("Failed to remove %s", self._path, exc_info=True)

    def __enter__(self) -> PidFile:
        self.create()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.remove()

    def __repr__(self) -> str:
        return f"PidFile(path={self._path!r}, pid={self._pid})"
