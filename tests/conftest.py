# tests/conftest.py
"""Shared fixtures."""

import tempfile
from pathlib import Path

import pytest

MANIFEST_YAML = """\
assets:
  - id: crab_svg
    path: images/wikimedia-crab.svg
    type: image/svg+xml
  - id: styles_css
    path: css/styles.css
    type: text/css
"""


@pytest.fixture
def project_dir():
    """A project with two assets and a manifest describing them."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "css").mkdir()
        (root / "images").mkdir()
        (root / "css" / "styles.css").write_bytes(b"body { margin: 0; }\n")
        (root / "images" / "wikimedia-crab.svg").write_bytes(b"<svg></svg>\n")
        (root / "assets.yaml").write_text(MANIFEST_YAML)
        yield root
