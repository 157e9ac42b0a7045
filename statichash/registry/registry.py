# statichash/registry/registry.py
"""
Static file registry.

The registry is built once from an ordered list of declarations and is
read-only afterwards. Records are kept sorted by public name so lookups
are a binary search over the name table.
"""

import bisect
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ..digest import DEFAULT_ALGORITHM, check_algorithm, digest
from ..errors import ManifestError, NameCollision
from ..naming import synthesize
from ..sources import FileSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetDeclaration:
    """
    A build-time asset declaration.

    Attributes:
        identifier: Symbolic name used by code to refer to the asset
        source_path: Path the content is read from
        content_type: MIME type served with the content
    """
    identifier: str
    source_path: str
    content_type: str

    @classmethod
    def from_tuple(cls, triple: Tuple[str, str, str]) -> "AssetDeclaration":
        try:
            identifier, source_path, content_type = triple
        except (TypeError, ValueError):
            raise ManifestError(
                f"Invalid asset declaration: {triple!r}. "
                "Expected (identifier, source_path, content_type)"
            ) from None
        return cls(str(identifier), str(source_path), str(content_type))


@dataclass(frozen=True)
class StaticFile:
    """
    An embedded asset.

    The name is derived from the content and the source file name, so it
    changes whenever the content does.
    """
    content: bytes
    name: str
    content_type: str
    identifier: str = ""
    source_path: str = ""
    token: str = ""

    @property
    def size(self) -> int:
        return len(self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "content_type": self.content_type,
            "source_path": self.source_path,
            "token": self.token,
            "size_bytes": self.size,
        }

    def __repr__(self) -> str:
        return (
            f"StaticFile(name={self.name!r}, content_type={self.content_type!r}, "
            f"size={self.size})"
        )


DeclarationLike = Union[AssetDeclaration, Tuple[str, str, str]]


def normalize_declarations(declarations: Iterable[DeclarationLike]) -> List[AssetDeclaration]:
    """
    Convert triples to AssetDeclaration and check identifiers are unique.

    Raises:
        ManifestError: malformed triple or duplicate identifier
    """
    result = []
    seen = set()
    for decl in declarations:
        if not isinstance(decl, AssetDeclaration):
            decl = AssetDeclaration.from_tuple(decl)
        if decl.identifier in seen:
            raise ManifestError(f"Duplicate asset identifier: {decl.identifier}")
        seen.add(decl.identifier)
        result.append(decl)
    return result


class Registry:
    """
    Immutable, name-sorted collection of StaticFile records.

    Usage:
        registry = build_registry([
            ("styles_css", "css/styles.css", "text/css"),
        ])
        registry.url_for("styles_css")   # /static/styles-<token>.css
        registry.get("styles-<token>.css")
    """

    __slots__ = ("_files", "_names", "_by_identifier")

    def __init__(self, files: Iterable[StaticFile]):
        ordered = tuple(sorted(files, key=lambda f: f.name))
        for prev, cur in zip(ordered, ordered[1:]):
            if prev.name == cur.name:
                raise NameCollision(cur.name, (prev.source_path, cur.source_path))

        by_identifier = {f.identifier: f for f in ordered if f.identifier}
        object.__setattr__(self, "_files", ordered)
        object.__setattr__(self, "_names", tuple(f.name for f in ordered))
        object.__setattr__(self, "_by_identifier", MappingProxyType(by_identifier))

    def __setattr__(self, key, value):
        raise AttributeError("Registry is immutable")

    def __delattr__(self, key):
        raise AttributeError("Registry is immutable")

    def get(self, name: str) -> Optional[StaticFile]:
        """Get a file by exact public name, None if absent."""
        pos = bisect.bisect_left(self._names, name)
        if pos < len(self._names) and self._names[pos] == name:
            return self._files[pos]
        return None

    def lookup(self, name: str) -> Optional[Tuple[bytes, str]]:
        """Return (content, content_type) for a public name, None if absent."""
        static_file = self.get(name)
        if static_file is None:
            return None
        return static_file.content, static_file.content_type

    def by_identifier(self, identifier: str) -> StaticFile:
        """Get a file by its declared identifier. Raises KeyError if unknown."""
        return self._by_identifier[identifier]

    def url_for(self, identifier: str, prefix: str = "/static/") -> str:
        """Public URL of a declared asset."""
        return f"{prefix}{self.by_identifier(identifier).name}"

    @property
    def identifiers(self) -> Mapping[str, StaticFile]:
        return self._by_identifier

    def names(self) -> Tuple[str, ...]:
        return self._names

    def list(self) -> List[StaticFile]:
        return list(self._files)

    def __getitem__(self, identifier: str) -> StaticFile:
        return self.by_identifier(identifier)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[StaticFile]:
        return iter(self._files)

    def __repr__(self) -> str:
        return f"Registry({len(self._files)} files)"


def build_registry(
    declarations: Iterable[DeclarationLike],
    source=None,
    tokens: Optional[Mapping[str, str]] = None,
    algorithm: str = DEFAULT_ALGORITHM,
) -> Registry:
    """
    Build a registry from an ordered list of declarations.

    Each source is read exactly once, in declaration order. Any failure
    aborts the whole build.

    Args:
        declarations: AssetDeclaration objects or (identifier, path, mime) triples
        source: Object with read(source_path) -> bytes (default: FileSource())
        tokens: Precomputed tokens by identifier, used instead of hashing
        algorithm: hashlib algorithm for in-process digests

    Returns:
        The built Registry

    Raises:
        SourceUnreadable: a declared source could not be read
        NoExtension: a declared file name has no extension
        NameCollision: two files resolved to the same public name
        ManifestError: malformed or duplicate declarations, unusable algorithm
    """
    source = source if source is not None else FileSource()
    tokens = tokens or {}
    try:
        check_algorithm(algorithm)
    except ValueError as e:
        raise ManifestError(str(e)) from None

    files = []
    for decl in normalize_declarations(declarations):
        content = bytes(source.read(decl.source_path))
        token = tokens.get(decl.identifier)
        if token is None:
            token = digest(content, algorithm=algorithm)
        else:
            logger.debug(f"Using injected token for {decl.identifier}")
        name = synthesize(decl.source_path, token)

        files.append(StaticFile(
            content=content,
            name=name,
            content_type=decl.content_type,
            identifier=decl.identifier,
            source_path=decl.source_path,
            token=token,
        ))
        logger.debug(f"Asset {decl.identifier}: {decl.source_path} -> {name}")

    registry = Registry(files)
    logger.info(f"Built static registry with {len(registry)} files")
    return registry


class LazyRegistry:
    """
    Registry built on first use, exactly once.

    Concurrent first callers block on the lock until the build finishes;
    nobody sees a partially built registry. A failed build is not
    remembered, so the next call tries again.

    Usage:
        STATICS = LazyRegistry(lambda: build_registry(DECLARATIONS))
        STATICS.lookup(name)
    """

    def __init__(self, factory: Callable[[], Registry]):
        self._factory = factory
        self._registry: Optional[Registry] = None
        self._lock = threading.Lock()

    @property
    def is_built(self) -> bool:
        return self._registry is not None

    def get_registry(self) -> Registry:
        registry = self._registry
        if registry is not None:
            return registry
        with self._lock:
            if self._registry is None:
                self._registry = self._factory()
            return self._registry

    def get(self, name: str) -> Optional[StaticFile]:
        return self.get_registry().get(name)

    def lookup(self, name: str) -> Optional[Tuple[bytes, str]]:
        return self.get_registry().lookup(name)

    def url_for(self, identifier: str, prefix: str = "/static/") -> str:
        return self.get_registry().url_for(identifier, prefix)

    def __getitem__(self, identifier: str) -> StaticFile:
        return self.get_registry()[identifier]

    def __contains__(self, name: str) -> bool:
        return name in self.get_registry()

    def __len__(self) -> int:
        return len(self.get_registry())

    def __iter__(self) -> Iterator[StaticFile]:
        return iter(self.get_registry())
