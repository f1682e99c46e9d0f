from __future__ import annotations

import mimetypes
import os
from pathlib import PurePath

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(path: str | os.PathLike[str]) -> str:
    """Return the MIME type for a path's extension, or the generic binary type."""
    ctype, _ = mimetypes.guess_type(os.fspath(path), strict=False)
    return ctype or DEFAULT_CONTENT_TYPE


def filename_from_path(path: str | os.PathLike[str]) -> str | None:
    """
    Return the final component of a path, or None when it has none
    (e.g. "/", "" or a path ending in "..").
    """
    name = PurePath(path).name
    if not name or name == "..":
        return None
    return name
