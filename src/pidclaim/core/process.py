"""Process table queries."""

from __future__ import annotations

import csv
import logging
import os
import platform
import subprocess

log = logging.getLogger(__name__)

_IS_WINDOWS = platform.system() == "Windows"


def current_pid() -> int:
    """Return the id of the calling process."""
    return os.getpid()


def is_process_running(pid: int) -> bool:
    """Check if a process with the given PID exists.

    Only existence is checked: a recycled PID belonging to an unrelated
    program still counts as running.
    """
    if pid <= 0:
        return False

    if _IS_WINDOWS:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/FO", "CSV", "/NH"],
                capture_output=True, text=True, timeout=5,
            )
        except (subprocess.SubprocessError, OSError):
            return False
        # "image","pid","session","session#","mem"
        rows = csv.reader(result.stdout.splitlines())
        return any(len(row) > 1 and row[1] == str(pid) for row in rows)

    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, owned by another user
        return True
    except (OSError, OverflowError) as e:
        log.debug("Probe of PID %d failed: %s", pid, e)
        return False
    return True
