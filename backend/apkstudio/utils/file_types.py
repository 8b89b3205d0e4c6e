"""
File type helpers for uploads and AI-created files.

Uploaded files always get type "file"; files created by the AI editor get a
language name derived from their extension.
"""

import os
from typing import Optional

from apkstudio.core.config import settings


FILE_TYPE_MAP = {
    "py": "python",
    "pyw": "python",
    "js": "javascript",
    "ts": "typescript",
    "html": "html",
    "css": "css",
    "json": "json",
    "md": "markdown",
    "txt": "text",
    "xml": "xml",
    "yml": "yaml",
    "yaml": "yaml",
}

DEFAULT_FILE_TYPE = "text"
UPLOAD_FILE_TYPE = "file"


def get_extension(filename: str) -> str:
    """Lower-cased extension including the dot, '' if there is none"""
    return os.path.splitext(filename or "")[1].lower()


def get_file_type(filename: str) -> str:
    """Language name for a filename, e.g. 'app.py' -> 'python'"""
    ext = get_extension(filename).lstrip(".")
    return FILE_TYPE_MAP.get(ext, DEFAULT_FILE_TYPE)


def is_allowed_extension(filename: str) -> bool:
    return get_extension(filename) in settings.ALLOWED_EXTENSIONS


def is_binary_file(filename: str) -> bool:
    return get_extension(filename) in settings.BINARY_EXTENSIONS


def build_upload_content(filename: str, data: bytes, size: Optional[int] = None) -> str:
    """
    Text stored for an uploaded file.

    Binary formats are not kept; a placeholder records name and size.
    Text that does not decode as UTF-8 is replaced by an error marker.
    """
    size = len(data) if size is None else size
    if is_binary_file(filename):
        return f"[BINARY FILE: {filename} - {size} bytes]"
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return f"[ENCODING ERROR: Unable to read {filename} as UTF-8]"
