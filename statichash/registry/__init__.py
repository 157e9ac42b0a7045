# statichash/registry/__init__.py
"""
Static file registry.

Maps content-hashed public names to the embedded asset records. The
registry is built once and never changes afterwards.

Example:
    registry = build_registry([
        ("crab_svg", "images/wikimedia-crab.svg", "image/svg+xml"),
        ("styles_css", "css/styles.css", "text/css"),
    ])

    # In a request handler:
    found = registry.lookup("styles-AbCdEf12.css")
"""

from .registry import AssetDeclaration, LazyRegistry, Registry, StaticFile, build_registry, normalize_declarations

__all__ = [
    "AssetDeclaration",
    "LazyRegistry",
    "Registry",
    "StaticFile",
    "build_registry",
    "normalize_declarations",
]
