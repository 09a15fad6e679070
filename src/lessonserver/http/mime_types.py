"""
=============================================================================
MIME TYPES
=============================================================================

The Content-Type of a served asset is decided by its file extension alone.
Anything not in the table goes out as plain text.

    ┌────────────┬──────────────────────────┐
    │ Extension  │ Content-Type             │
    ├────────────┼──────────────────────────┤
    │ .html      │ text/html                │
    │ .css       │ text/css                 │
    │ .js        │ application/javascript   │
    │ .json      │ application/json         │
    │ (other)    │ text/plain               │
    └────────────┴──────────────────────────┘

=============================================================================
"""

from pathlib import Path
from typing import Union


MIME_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
}

DEFAULT_MIME_TYPE = "text/plain"


def get_mime_type(path: Union[str, Path]) -> str:
    """
    Get the MIME type for a file based on its extension.

    The comparison is case-sensitive, matching how assets are named on disk.

    Examples:
        >>> get_mime_type("/css/style.css")
        'text/css'

        >>> get_mime_type("notes.md")
        'text/plain'
    """
    if isinstance(path, str):
        path = Path(path)

    return MIME_TYPES.get(path.suffix, DEFAULT_MIME_TYPE)
