"""
Text Router Server

Answers a fixed set of paths with plain text and everything else with 404.
"""

import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Dict, Optional

from ..config import config


logger = logging.getLogger(__name__)

ROUTES: Dict[str, str] = {
    "/": "Welcome to the home page",
    "/about": "This the about page",
}


class TextRouterHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        body = ROUTES.get(self.path)
        if body is None:
            self.send_response(404)
            self.send_header("Content-Type", "text/plain")
            self.end_headers()
            self.wfile.write(b"Page not found")
            return

        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.end_headers()
        self.wfile.write(body.encode("utf-8"))

    def log_message(self, format, *args):
        logger.info(f"{self.address_string()} - {format % args}")


def make_text_server(host: Optional[str] = None, port: Optional[int] = None) -> HTTPServer:
    """Create (but don't start) the text router server."""
    host = config.server.host if host is None else host
    port = config.server.port if port is None else port
    server = HTTPServer((host, port), TextRouterHandler)
    logger.info(f"Text server bound to http://{host}:{server.server_port}")
    return server
