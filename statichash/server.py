# statichash/server.py
"""
Example HTTP server for a static file registry.

Endpoints:
    GET /               - Page referencing the hashed stylesheet and image
    GET /static/:name   - Asset content, cacheable for max_age seconds
    GET /health         - Health check
"""

import html
import json
import logging
import threading
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any, Optional, Tuple
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)

STATIC_PREFIX = "/static/"
DEFAULT_MAX_AGE = 604800  # one week

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Static files</title>
{head}
</head>
<body>
{body}
</body>
</html>
"""


class StaticFileServer:
    """
    HTTP server serving a static file registry.

    Usage:
        server = StaticFileServer(registry, port=8080)
        server.start()  # Blocking
    """

    def __init__(self, registry, host: str = "127.0.0.1", port: int = 8080,
                 max_age: int = DEFAULT_MAX_AGE):
        self.registry = registry
        self.host = host
        self.port = port
        self.max_age = max_age
        self._httpd: Optional[HTTPServer] = None

    @property
    def cache_control(self) -> str:
        return f"public, max-age={self.max_age}"

    def render_index(self) -> str:
        """Render the landing page, linking assets by their hashed names."""
        head = []
        body = []
        for static_file in self.registry:
            url = html.escape(STATIC_PREFIX + static_file.name)
            if static_file.content_type == "text/css":
                head.append(f'    <link rel="stylesheet" href="{url}">')
            elif static_file.content_type.startswith("image/"):
                alt = html.escape(static_file.identifier or static_file.name)
                body.append(f'    <img src="{url}" alt="{alt}">')
            else:
                label = html.escape(static_file.name)
                body.append(f'    <p><a href="{url}">{label}</a></p>')
        return PAGE_TEMPLATE.format(head="\n".join(head), body="\n".join(body))

    def _create_handler(server_instance):
        """Create request handler with access to server instance."""

        class RequestHandler(BaseHTTPRequestHandler):
            server_ref = server_instance

            def log_message(self, format, *args):
                logger.debug(format % args)

            def _send_body(self, body: bytes, content_type: str, status: int = 200,
                           cache_control: Optional[str] = None, include_body: bool = True):
                self.send_response(status)
                self.send_header("Content-Type", content_type)
                self.send_header("Content-Length", str(len(body)))
                if cache_control:
                    self.send_header("Cache-Control", cache_control)
                self.end_headers()
                if include_body:
                    self.wfile.write(body)

            def _send_json(self, data: Any, status: int = 200, include_body: bool = True):
                self._send_body(json.dumps(data).encode(), "application/json", status,
                                include_body=include_body)

            def _send_not_found(self):
                self.send_response(404)
                self.send_header("Content-Length", "0")
                self.end_headers()

            def _lookup(self, path: str) -> Optional[Tuple[bytes, str]]:
                name = unquote(path[len(STATIC_PREFIX):]).lstrip("/")
                found = self.server_ref.registry.lookup(name)
                logger.debug(f"{'Hit' if found else 'Miss'}: {name}")
                return found

            def _handle(self, include_body: bool):
                path = urlparse(self.path).path

                if path.startswith(STATIC_PREFIX):
                    found = self._lookup(path)
                    if found is None:
                        self._send_not_found()
                        return
                    content, content_type = found
                    self._send_body(
                        content,
                        content_type,
                        cache_control=self.server_ref.cache_control,
                        include_body=include_body,
                    )

                elif path == "/":
                    page = self.server_ref.render_index().encode("utf-8")
                    self._send_body(page, "text/html; charset=utf-8", include_body=include_body)

                elif path == "/health":
                    self._send_json(
                        {"status": "ok", "assets": len(self.server_ref.registry)},
                        include_body=include_body,
                    )

                else:
                    self._send_not_found()

            def do_GET(self):
                self._handle(include_body=True)

            def do_HEAD(self):
                self._handle(include_body=False)

        return RequestHandler

    def bind(self) -> HTTPServer:
        """Create and bind the underlying HTTP server."""
        if self._httpd is None:
            handler = self._create_handler()
            self._httpd = HTTPServer((self.host, self.port), handler)
            self.port = self._httpd.server_address[1]
        return self._httpd

    def start(self):
        """Start the HTTP server (blocking)."""
        httpd = self.bind()
        logger.info(f"Static file server starting on {self.host}:{self.port}")
        print(f"Listening on http://{self.host}:{self.port}")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nShutting down...")
        finally:
            httpd.server_close()

    def start_background(self) -> threading.Thread:
        """Start the server in a background thread."""
        httpd = self.bind()
        thread = threading.Thread(target=httpd.serve_forever)
        thread.daemon = True
        thread.start()
        logger.info(f"Static file server running in background on {self.host}:{self.port}")
        return thread

    def shutdown(self):
        """Stop a running server."""
        if self._httpd is not None:
            self._httpd.shutdown()
            self._httpd.server_close()
            self._httpd = None
