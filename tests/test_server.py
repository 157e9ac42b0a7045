# tests/test_server.py
"""Tests for the example static file server."""

import json
import socket
from urllib.error import HTTPError
from urllib.request import Request, urlopen

import pytest

from statichash.manifest import Manifest
from statichash.registry import LazyRegistry
from statichash.server import StaticFileServer


@pytest.fixture
def registry(project_dir):
    return Manifest.from_file(project_dir / "assets.yaml").build()


@pytest.fixture
def server(registry):
    server = StaticFileServer(registry, port=0, max_age=3600)
    server.start_background()
    yield server
    server.shutdown()


def _url(server, path):
    return f"http://{server.host}:{server.port}{path}"


class TestStaticFileServer:
    """Test StaticFileServer routes."""

    def test_serves_hashed_file(self, server, registry):
        """Test hashed names are served with content type and cache headers."""
        static_file = registry["styles_css"]
        with urlopen(_url(server, registry.url_for("styles_css"))) as resp:
            assert resp.status == 200
            assert resp.headers["Content-Type"] == "text/css"
            assert resp.headers["Cache-Control"] == "public, max-age=3600"
            assert resp.read() == static_file.content

    def test_unhashed_name_is_404(self, server):
        """Test the undecorated file name is not found."""
        with pytest.raises(HTTPError) as exc_info:
            urlopen(_url(server, "/static/styles.css"))
        assert exc_info.value.code == 404

    def test_unknown_route_is_404(self, server):
        """Test unknown paths return 404."""
        with pytest.raises(HTTPError) as exc_info:
            urlopen(_url(server, "/nope"))
        assert exc_info.value.code == 404

    def test_head(self, server, registry):
        """Test HEAD returns headers without a body."""
        req = Request(_url(server, registry.url_for("crab_svg")), method="HEAD")
        with urlopen(req) as resp:
            assert resp.status == 200
            assert resp.headers["Content-Type"] == "image/svg+xml"
            assert int(resp.headers["Content-Length"]) == registry["crab_svg"].size
            assert resp.read() == b""

    def test_index_links_hashed_names(self, server, registry):
        """Test the index page links assets by hashed name."""
        with urlopen(_url(server, "/")) as resp:
            page = resp.read().decode()
        assert f'href="{registry.url_for("styles_css")}"' in page
        assert f'src="{registry.url_for("crab_svg")}"' in page

    def test_health(self, server):
        """Test health check reports the asset count."""
        with urlopen(_url(server, "/health")) as resp:
            assert json.loads(resp.read()) == {"status": "ok", "assets": 2}

    def test_head_health_has_no_body(self, server):
        """Test HEAD /health sends headers only."""
        with socket.create_connection((server.host, server.port), timeout=5) as sock:
            sock.sendall(b"HEAD /health HTTP/1.0\r\n\r\n")
            chunks = []
            while True:
                chunk = sock.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        head, _, body = b"".join(chunks).partition(b"\r\n\r\n")
        assert head.startswith(b"HTTP/1.0 200")
        assert b"Content-Type: application/json" in head
        assert body == b""


class TestLazyServing:
    """Test serving a LazyRegistry."""

    def test_lazy_registry_built_on_first_request(self, project_dir):
        """Test the registry is built by the first request, not at startup."""
        manifest = Manifest.from_file(project_dir / "assets.yaml")
        lazy = LazyRegistry(manifest.build)
        server = StaticFileServer(lazy, port=0)
        server.start_background()
        try:
            assert not lazy.is_built
            with urlopen(_url(server, "/health")) as resp:
                assert resp.status == 200
            assert lazy.is_built
        finally:
            server.shutdown()
