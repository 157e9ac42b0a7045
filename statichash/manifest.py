# statichash/manifest.py
"""
Declarative asset lists.

A manifest is a YAML document naming every asset the registry embeds:

    root: .
    algorithm: sha3_256
    assets:
      - id: crab_svg
        path: images/wikimedia-crab.svg
        type: image/svg+xml
      - id: styles_css
        path: css/styles.css

``root`` is resolved relative to the manifest file. ``type`` is guessed
from the extension when omitted.
"""

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .digest import DEFAULT_ALGORITHM, check_algorithm
from .errors import ManifestError
from .registry import AssetDeclaration, Registry, build_registry, normalize_declarations
from .sources import FileSource

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(source_path: str) -> str:
    content_type, _ = mimetypes.guess_type(source_path)
    return content_type or DEFAULT_CONTENT_TYPE


def _parse_asset(entry: Any, index: int) -> AssetDeclaration:
    if isinstance(entry, (list, tuple)):
        return AssetDeclaration.from_tuple(tuple(entry))
    if not isinstance(entry, dict):
        raise ManifestError(f"Asset #{index} must be a mapping, got {type(entry).__name__}")

    missing = [key for key in ("id", "path") if not entry.get(key)]
    if missing:
        raise ManifestError(f"Asset #{index} is missing {', '.join(missing)}")

    path = str(entry["path"])
    return AssetDeclaration(
        identifier=str(entry["id"]),
        source_path=path,
        content_type=str(entry.get("type") or guess_content_type(path)),
    )


@dataclass
class Manifest:
    """Parsed asset manifest."""
    declarations: List[AssetDeclaration]
    root: Path = field(default_factory=Path.cwd)
    algorithm: str = DEFAULT_ALGORITHM

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base_dir: Optional[Path] = None) -> "Manifest":
        if not isinstance(data, Mapping):
            raise ManifestError("Manifest must be a mapping with an 'assets' list")

        assets = data.get("assets")
        if not isinstance(assets, list):
            raise ManifestError("Manifest 'assets' must be a list")

        declarations = normalize_declarations(
            _parse_asset(entry, i) for i, entry in enumerate(assets)
        )

        algorithm = str(data.get("algorithm") or DEFAULT_ALGORITHM)
        try:
            check_algorithm(algorithm)
        except ValueError as e:
            raise ManifestError(f"Invalid manifest algorithm: {e}") from None

        base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        root = base_dir / str(data.get("root") or ".")

        return cls(
            declarations=declarations,
            root=root,
            algorithm=algorithm,
        )

    @classmethod
    def from_yaml(cls, yaml_content: str, base_dir: Optional[Path] = None) -> "Manifest":
        """Parse manifest from YAML string."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ManifestError(f"Invalid manifest YAML: {e}") from e
        return cls.from_dict(data, base_dir=base_dir)

    @classmethod
    def from_file(cls, path: Path | str) -> "Manifest":
        """Load manifest from file. Relative roots resolve against its directory."""
        path = Path(path)
        try:
            yaml_content = path.read_text()
        except OSError as e:
            raise ManifestError(f"Cannot read manifest {path}: {e.strerror or e}") from e
        manifest = cls.from_yaml(yaml_content, base_dir=path.parent)
        logger.debug(f"Loaded manifest {path} ({len(manifest.declarations)} assets)")
        return manifest

    @property
    def source(self) -> FileSource:
        return FileSource(self.root)

    def build(self, tokens: Optional[Dict[str, str]] = None) -> Registry:
        return build_registry(
            self.declarations,
            source=self.source,
            tokens=tokens,
            algorithm=self.algorithm,
        )
