from __future__ import annotations

import mimetypes
import posixpath

from result import Err, Ok, Result

from awstui.services.formatting import format_bytes
from awstui.services.fs import DEFAULT_FS, FileSystem

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CANNED_ACLS: tuple[str, ...] = (
    "private",
    "public-read",
    "public-read-write",
    "authenticated-read",
    "aws-exec-read",
    "bucket-owner-read",
    "bucket-owner-full-control",
)


def default_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


def upload_key(prefix: str, file_path: str) -> str:
    return prefix + posixpath.basename(file_path)


def download_destination(directory: str, filename: str) -> str:
    return posixpath.join(directory, filename)


def parent_prefix(key: str) -> str:
    """Prefix a new upload goes under when ``key`` is focused in the object tree."""
    if key.endswith("/"):
        return key
    head, sep, _ = key.rpartition("/")
    return head + sep


def local_files(directory: str, fs: FileSystem = DEFAULT_FS) -> Result[list[tuple[str, str]], str]:
    """Visible regular files in ``directory`` as (name, human size), sorted by name."""
    try:
        entries = list(fs.scandir(directory))
    except OSError as exc:
        return Err(f"Cannot read {directory}: {exc}")

    files: list[tuple[str, str]] = []
    for entry in entries:
        if entry.name.startswith(".") or entry.stat is None or entry.stat.is_dir:
            continue
        files.append((entry.name, format_bytes(entry.stat.size)))
    files.sort(key=lambda item: item[0])
    return Ok(files)
