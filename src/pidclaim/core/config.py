"""Configuration loader for pidclaim."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

DEFAULTS: dict = {
    "pidfile": {
        # Empty path disables the pidfile entirely
        "path": "",
    },
}


def config_path() -> Path:
    """Return the path to config.yaml: env var > ~/.config/pidclaim."""
    env_path = os.environ.get("PIDCLAIM_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path("~/.config/pidclaim/config.yaml").expanduser()


def load_config(path: Path | None = None) -> dict:
    """Read the pidclaim YAML config and overlay it on DEFAULTS.

    Args:
        path: YAML file to read. Defaults to config_path().

    Returns:
        Config dict whose ``pidfile.path`` is a user-expanded string, or
        "" when the pidfile is disabled. PIDCLAIM_PIDFILE wins over the file.
    """
    if path is None:
        path = config_path()

    user_config: dict = {}
    if path.exists():
        try:
            raw = path.read_text(encoding="utf-8")
            loaded = yaml.safe_load(raw) or {}
            if isinstance(loaded, dict):
                user_config = loaded
            else:
                log.warning("Config at %s is not a mapping, using defaults", path)
        except (OSError, yaml.YAMLError):
            log.warning("Failed to read config at %s, using defaults", path, exc_info=True)

    merged = _merge_over(DEFAULTS, user_config)

    pidfile_cfg = merged.get("pidfile")
    if not isinstance(pidfile_cfg, dict):
        log.warning("Config key 'pidfile' is not a mapping, using defaults")
        pidfile_cfg = DEFAULTS["pidfile"]
    pidfile_cfg = dict(pidfile_cfg)
    merged["pidfile"] = pidfile_cfg

    pid_path = os.environ.get("PIDCLAIM_PIDFILE", pidfile_cfg.get("path") or "")
    pidfile_cfg["path"] = str(Path(pid_path).expanduser()) if pid_path else ""

    return merged


def _merge_over(defaults: dict, user: dict) -> dict:
    """Overlay user values on defaults; nested mappings merge key by key."""
    merged = dict(defaults)
    for key, value in user.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _merge_over(current, value)
        merged[key] = value
    return merged
