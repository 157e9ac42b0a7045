# statichash/build_utils.py
"""
Build-time token injection.

Build tooling can hash assets ahead of time and hand the tokens to the
running process through environment variables named ``<identifier>_HASH``.
The registry builder uses an injected token when one is present and
hashes the content itself otherwise.

    $ eval "$(statichash env assets.yaml)"
"""

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional

from .digest import DEFAULT_ALGORITHM, digest
from .manifest import Manifest
from .sources import FileSource

logger = logging.getLogger(__name__)


def env_var_name(identifier: str) -> str:
    return f"{identifier}_HASH"


def process_file(file_path: str, env_var: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Hash a file and return the environment assignment for its token.

    Raises:
        SourceUnreadable: if the file cannot be read
    """
    content = FileSource().read(file_path)
    token = digest(content, algorithm=algorithm)
    return f"{env_var}={token}"


def export_lines(manifest: Manifest) -> List[str]:
    """One NAME=token line per declared asset."""
    source = manifest.source
    lines = []
    for decl in manifest.declarations:
        token = digest(source.read(decl.source_path), algorithm=manifest.algorithm)
        lines.append(f"{env_var_name(decl.identifier)}={token}")
    return lines


def tokens_from_environ(
    identifiers: Iterable[str],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Collect injected tokens; identifiers without one are left out."""
    environ = os.environ if environ is None else environ
    tokens = {}
    for identifier in identifiers:
        token = environ.get(env_var_name(identifier))
        if token:
            tokens[identifier] = token
    if tokens:
        logger.info(f"Using {len(tokens)} injected asset tokens")
    return tokens
