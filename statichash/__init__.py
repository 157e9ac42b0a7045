# statichash - Content-hashed static file registry
#
# Embeds a fixed set of static assets and gives each one a public name
# derived from its content, so clients can cache it forever and any
# change to the content produces a new name.
#
# Core concepts:
# - digest: Short URL-safe token from a cryptographic hash of the content
# - synthesize: Public name "<stem>-<token>.<ext>" from a source path
# - Registry: Immutable, name-sorted table of StaticFile records
# - build_registry: Reads every declared asset once and builds the Registry

from .digest import digest, file_digest
from .naming import split_name, synthesize
from .errors import StaticFileError, SourceUnreadable, NoExtension, NameCollision, ManifestError
from .sources import FileSource, DictSource
from .registry import AssetDeclaration, StaticFile, Registry, LazyRegistry, build_registry
from .manifest import Manifest

__all__ = [
    # Core
    "digest",
    "file_digest",
    "split_name",
    "synthesize",
    "AssetDeclaration",
    "StaticFile",
    "Registry",
    "LazyRegistry",
    "build_registry",
    # Sources and configuration
    "FileSource",
    "DictSource",
    "Manifest",
    # Errors
    "StaticFileError",
    "SourceUnreadable",
    "NoExtension",
    "NameCollision",
    "ManifestError",
]

__version__ = "0.1.0"
