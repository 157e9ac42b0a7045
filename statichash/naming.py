# statichash/naming.py
"""
Public name synthesis.

    css/styles.css + "Ab12Cd34"      -> styles-Ab12Cd34.css
    assets/bundle.min.js + "Xy9Z01"  -> bundle.min-Xy9Z01.js

Only the last '.' separates the extension. Collisions are not detected
here; the registry builder checks the sorted table.
"""

from typing import Tuple

from .errors import NoExtension


def file_name(source_path: str) -> str:
    """Final path segment of a declared source path."""
    return source_path.replace("\\", "/").rsplit("/", 1)[-1]


def split_name(source_path: str) -> Tuple[str, str]:
    """
    Split the file name of a source path into (stem, extension).

    Raises:
        NoExtension: if the file name contains no '.'
    """
    name = file_name(source_path)
    stem, dot, extension = name.rpartition(".")
    if not dot:
        raise NoExtension(source_path)
    return stem, extension


def synthesize(source_path: str, token: str) -> str:
    """Build the public name "<stem>-<token>.<extension>"."""
    stem, extension = split_name(source_path)
    return f"{stem}-{token}.{extension}"
