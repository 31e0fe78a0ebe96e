from __future__ import annotations

import logging

from result import Err, Ok, Result

from awstui.config.loader import load_settings, save_settings
from awstui.config.schema import Settings
from awstui.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


def resolve_directory(path: str, fs: FileSystem = DEFAULT_FS) -> Result[str, str]:
    """Expand a leading ``~`` and check that the path is an existing directory."""
    path = path.strip()
    if not path:
        return Err("Directory path is required")
    if path.startswith("~"):
        path = fs.home() + path[1:]

    if not fs.exists(path):
        return Err(f"Directory not found: {path}")
    try:
        st = fs.stat(path)
    except OSError as exc:
        return Err(f"Directory not found: {exc}")
    if not st.is_dir:
        return Err("Path is not a directory")
    return Ok(path)


class SettingsStore:
    """User settings held in memory and rewritten in full on every change.

    The file is read the first time anything asks for a value. A failed write
    leaves the in-memory change in place and is reported through the returned
    ``Err``.
    """

    def __init__(self, path: str | None = None, fs: FileSystem = DEFAULT_FS) -> None:
        self._path = path
        self._fs = fs
        self._settings: Settings | None = None
        self.load_error: str | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = self._read()
        return self._settings

    def load(self) -> str | None:
        """Read the settings file now; returns the problem found, if any."""
        if self._settings is None:
            self._settings = self._read()
        return self.load_error

    def _read(self) -> Settings:
        result = load_settings(self._path, self._fs)
        if isinstance(result, Err):
            self.load_error = result.unwrap_err()
            logger.warning("%s Using defaults.", self.load_error)
            return Settings()
        return result.unwrap()

    @property
    def favorites(self) -> list[str]:
        return list(self.settings.favorites)

    def is_favorite(self, ref: str) -> bool:
        return ref in self.settings.favorites

    def add_favorite(self, ref: str) -> Result[bool, str]:
        settings = self.settings
        if ref in settings.favorites:
            return Ok(False)
        settings.favorites.append(ref)
        return self._save().and_then(lambda _: Ok(True))

    def remove_favorite(self, ref: str) -> Result[bool, str]:
        settings = self.settings
        if ref not in settings.favorites:
            return Ok(False)
        settings.favorites.remove(ref)
        return self._save().and_then(lambda _: Ok(True))

    def local_directory(self) -> str:
        if self.settings.local_directory:
            return self.settings.local_directory
        try:
            return self._fs.cwd()
        except OSError:
            return self._fs.home()

    def set_local_directory(self, path: str) -> Result[str, str]:
        resolved = resolve_directory(path, self._fs)
        if isinstance(resolved, Err):
            return resolved
        directory = resolved.unwrap()
        self.settings.local_directory = directory
        return self._save().and_then(lambda _: Ok(directory))

    def _save(self) -> Result[str, str]:
        result = save_settings(self.settings, self._path, self._fs)
        if isinstance(result, Err):
            logger.warning(result.unwrap_err())
        else:
            logger.debug("Settings written to %s", result.unwrap())
        return result
