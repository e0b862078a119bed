"""
Static File Server

Serves files from a base directory. "/" maps to the index file, ".css"
files are sent as text/css and everything else as text/html. Missing
files, and paths that resolve outside the base directory, get a 404.
"""

import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote, urlsplit

from ..config import config


logger = logging.getLogger(__name__)


def content_type_for(path: Path) -> str:
    return "text/css" if path.suffix == ".css" else "text/html"


def resolve_path(base_dir: Path, url_path: str) -> Optional[Path]:
    """
    Map a request path to a file under base_dir.

    Returns:
        The resolved file path, or None if it escapes base_dir.
    """
    path = unquote(urlsplit(url_path).path)
    if path == "/":
        path = config.server.index_file

    base = base_dir.resolve()
    candidate = (base / path.lstrip("/")).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    return candidate


class StaticFileHandler(BaseHTTPRequestHandler):
    base_dir: Path = Path(".")

    def do_GET(self):
        file_path = resolve_path(self.base_dir, self.path)

        try:
            if file_path is None:
                raise FileNotFoundError(self.path)
            data = file_path.read_bytes()
        except OSError as e:
            logger.debug(f"Cannot serve {self.path}: {e}")
            self.send_response(404)
            self.end_headers()
            self.wfile.write(b"File not found")
            return

        self.send_response(200)
        self.send_header("Content-Type", content_type_for(file_path))
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        logger.info(f"{self.address_string()} - {format % args}")


def make_static_server(
    base_dir: Optional[Union[str, Path]] = None,
    host: Optional[str] = None,
    port: Optional[int] = None
) -> HTTPServer:
    """Create (but don't start) a static file server rooted at base_dir."""
    base_dir = Path(base_dir) if base_dir is not None else config.server.static_directory
    host = config.server.host if host is None else host
    port = config.server.port if port is None else port

    handler = type("BoundStaticFileHandler", (StaticFileHandler,), {"base_dir": base_dir})
    server = HTTPServer((host, port), handler)
    logger.info(f"Serving {base_dir} at http://{host}:{server.server_port}")
    return server
