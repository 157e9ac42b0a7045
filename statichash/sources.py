# statichash/sources.py
"""
File content sources used by the registry builder.

A source is anything with ``read(source_path) -> bytes``. Read failures
surface as SourceUnreadable so the build aborts.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from .errors import SourceUnreadable

logger = logging.getLogger(__name__)


class FileSource:
    """Reads asset files from disk, relative paths resolved against root."""

    def __init__(self, root: Optional[Path | str] = None):
        self.root = Path(root) if root is not None else Path.cwd()

    def resolve(self, source_path: str) -> Path:
        path = Path(source_path)
        if not path.is_absolute():
            path = self.root / path
        return path

    def read(self, source_path: str) -> bytes:
        path = self.resolve(source_path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise SourceUnreadable(source_path, e.strerror or str(e)) from e
        logger.debug(f"Read {source_path} ({len(content)} bytes)")
        return content

    def __repr__(self) -> str:
        return f"FileSource({str(self.root)!r})"


class DictSource:
    """In-memory source mapping declared paths to bytes."""

    def __init__(self, files: Dict[str, bytes]):
        self.files = dict(files)

    def read(self, source_path: str) -> bytes:
        try:
            return self.files[source_path]
        except KeyError:
            raise SourceUnreadable(source_path, "not found") from None
