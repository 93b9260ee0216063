"""pidclaim -- PID file management for daemons.

Quick start::

    from pidclaim import PidFile

    with PidFile("/run/mydaemon.pid"):
        serve_forever()

Build a manager from ``~/.config/pidclaim/config.yaml``::

    from pidclaim import PidFile, load_config

    pidfile = PidFile.from_config(load_config())
"""

from __future__ import annotations

__version__ = "0.1.0"

from pidclaim.core.config import load_config
from pidclaim.pidfile import AlreadyRunningError, PidFile, PidFileError, parse_pid

__all__ = [
    "__version__",
    "AlreadyRunningError",
    "PidFile",
    "PidFileError",
    "load_config",
    "parse_pid",
]
