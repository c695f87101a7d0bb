"""
Static site serving: maps a request path to a file under the public root.

Anything that resolves outside the root, a missing file and a directory
without an index document all come back as None, so the caller answers
each of them with the same 404.
"""

from pathlib import Path
from typing import Optional

INDEX_DOCUMENT = "index.html"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".webp": "image/webp",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
}


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_static_path(public_dir: Path, request_path: str) -> Optional[Path]:
    relative = request_path.lstrip("/") or INDEX_DOCUMENT
    try:
        root = Path(public_dir).resolve()
        candidate = (root / relative).resolve()
        if candidate != root and root not in candidate.parents:
            return None
        if candidate.is_dir():
            candidate = candidate / INDEX_DOCUMENT
        if not candidate.is_file():
            return None
    except (OSError, ValueError):
        return None
    return candidate
