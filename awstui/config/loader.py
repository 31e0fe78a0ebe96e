from __future__ import annotations

import json
import posixpath

from result import Err, Ok, Result

from awstui.config.schema import Settings, from_dict
from awstui.services.fs import DEFAULT_FS, FileSystem

SETTINGS_DIR = "~/.aws-tui"
SETTINGS_FILE = "settings.json"


def settings_path(fs: FileSystem = DEFAULT_FS) -> str | None:
    try:
        directory = fs.expanduser(SETTINGS_DIR)
    except RuntimeError:
        # no resolvable home directory
        return None
    if directory.startswith("~"):
        return None
    return posixpath.join(directory, SETTINGS_FILE)


def load_settings(path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[Settings, str]:
    resolved = path or settings_path(fs)
    if resolved is None or not fs.exists(resolved):
        return Ok(Settings())

    try:
        payload = json.loads(fs.read_text(resolved))
        if not isinstance(payload, dict):
            return Err(f"Settings at {resolved} must be a JSON object.")
        return Ok(from_dict(payload))
    except Exception as exc:  # noqa: BLE001
        return Err(f"Failed reading settings at {resolved}: {exc}.")


def save_settings(settings: Settings, path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[str, str]:
    resolved = path or settings_path(fs)
    if resolved is None:
        return Err("Cannot resolve the home directory for settings.")

    try:
        fs.makedirs(posixpath.dirname(resolved), mode=0o755)
        fs.write_text(resolved, json.dumps(settings.to_dict(), indent=2), mode=0o644)
    except OSError as exc:
        return Err(f"Failed writing settings at {resolved}: {exc}.")
    return Ok(resolved)
