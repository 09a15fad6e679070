"""
=============================================================================
STATIC ASSET HANDLER
=============================================================================

Serves /css/* and /js/* verbatim from the assets root:

    GET /css/style.css   →  <static_dir>/css/style.css   (text/css)
    GET /js/app.js       →  <static_dir>/js/app.js       (application/javascript)

The URL path is appended to the root as-is, so the prefix directory
("css", "js") must exist under the root.

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

    GET /css/../../etc/passwd

    full_path = (root_dir / "css/../../etc/passwd").resolve()
    full_path.relative_to(root_dir)     # ValueError: outside the root

Anything that resolves outside the root gets the same answer as a missing
file: 404 "File not found". No caching headers, no ETag, no directory
index.

=============================================================================
"""

import logging
from pathlib import Path
from typing import Union

from ..http.mime_types import get_mime_type
from ..http.response import HTTPResponse, ResponseBuilder, not_found
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)

FILE_NOT_FOUND = "File not found"


class StaticFileHandler:
    """
    Asset handler for the router's asset prefixes.

        static = StaticFileHandler("/srv/site/static")
        router.set_asset_handler(static)
    """

    def __init__(self, root_dir: Union[str, Path]):
        self.root_dir = Path(root_dir).resolve()
        if not self.root_dir.is_dir():
            logger.warning(f"Static directory {self.root_dir} does not exist; assets will 404")

    def __call__(self, path: str) -> HTTPResponse:
        return self.handle(path)

    def resolve(self, path: str) -> Union[Path, None]:
        """Filesystem path for a request path, or None if outside the root or unusable."""
        try:
            full_path = (self.root_dir / path.lstrip("/")).resolve()
        except (OSError, ValueError) as e:
            # e.g. an embedded NUL byte
            logger.warning(f"Unresolvable asset path {path!r}: {e}")
            return None

        try:
            full_path.relative_to(self.root_dir)
        except ValueError:
            logger.warning(f"Path traversal attempt: {path}")
            return None
        return full_path

    def handle(self, path: str) -> HTTPResponse:
        full_path = self.resolve(path)
        if full_path is None or not full_path.is_file():
            return not_found(FILE_NOT_FOUND)

        try:
            content = full_path.read_bytes()
        except OSError as e:
            logger.warning(f"Could not read {full_path}: {e}")
            return not_found(FILE_NOT_FOUND)

        return (ResponseBuilder()
            .status(HTTPStatus.OK)
            .content_type(get_mime_type(path))
            .body(content)
            .build())
