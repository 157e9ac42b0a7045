#!/usr/bin/env python3
"""
Example: serve a couple of hashed static files.

The registry is declared as a plain list and built on the first request.

Usage:
    python examples/serve.py
    curl -i http://127.0.0.1:8080/
"""

import logging
from pathlib import Path

from statichash import FileSource, LazyRegistry, build_registry
from statichash.build_utils import tokens_from_environ
from statichash.server import StaticFileServer

HERE = Path(__file__).parent

STATIC_FILES = [
    ("crab_svg", "images/wikimedia-crab.svg", "image/svg+xml"),
    ("styles_css", "css/styles.css", "text/css"),
]

STATICS = LazyRegistry(lambda: build_registry(
    STATIC_FILES,
    source=FileSource(HERE),
    tokens=tokens_from_environ(ident for ident, _, _ in STATIC_FILES),
))


def main():
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    print(f"Stylesheet: {STATICS.url_for('styles_css')}")
    print(f"Image: {STATICS.url_for('crab_svg')}")
    StaticFileServer(STATICS, port=8080).start()


if __name__ == "__main__":
    main()
