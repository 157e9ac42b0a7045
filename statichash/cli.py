#!/usr/bin/env python3
"""
statichash CLI

Build-time helpers for content-hashed static files:
  statichash hash - Print the token and public name of files
  statichash build - Build a registry from a manifest and list it
  statichash env - Print <ID>_HASH=token lines for build injection
  statichash serve - Serve a manifest with the example HTTP server

Usage:
  statichash hash <file>... [--algorithm <name>]
  statichash build <assets.yaml> [--json]
  statichash env <assets.yaml>
  statichash serve <assets.yaml> [--host <host>] [--port <port>] [--max-age <s>]
"""

import argparse
import json
import logging
import sys

from .errors import StaticFileError

logger = logging.getLogger(__name__)


def _algorithm(value: str) -> str:
    from .digest import check_algorithm

    try:
        return check_algorithm(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def cmd_hash(args):
    """Print token and public name for each file."""
    from .digest import digest
    from .naming import synthesize
    from .sources import FileSource

    source = FileSource()
    for path in args.files:
        token = digest(source.read(path), algorithm=args.algorithm)
        print(f"{token}  {synthesize(path, token)}")


def cmd_build(args):
    """Build a registry and list its contents."""
    from .build_utils import tokens_from_environ
    from .manifest import Manifest

    manifest = Manifest.from_file(args.manifest)
    tokens = tokens_from_environ(d.identifier for d in manifest.declarations) if args.use_env else None
    registry = manifest.build(tokens=tokens)

    if args.json:
        print(json.dumps([f.to_dict() for f in registry], indent=2))
        return

    print(f"Registry: {len(registry)} files")
    for static_file in registry:
        print(f"  {static_file.name}  {static_file.content_type}  {static_file.size} bytes  ({static_file.identifier})")


def cmd_env(args):
    """Print environment assignments for build-time token injection."""
    from .build_utils import export_lines
    from .manifest import Manifest

    manifest = Manifest.from_file(args.manifest)
    for line in export_lines(manifest):
        print(line)


def cmd_serve(args):
    """Serve the manifest's registry over HTTP."""
    from .build_utils import tokens_from_environ
    from .manifest import Manifest
    from .server import StaticFileServer

    manifest = Manifest.from_file(args.manifest)
    tokens = tokens_from_environ(d.identifier for d in manifest.declarations) if args.use_env else None
    registry = manifest.build(tokens=tokens)

    server = StaticFileServer(registry, host=args.host, port=args.port, max_age=args.max_age)
    server.start()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statichash",
        description="Content-hashed static file registry",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # hash
    hash_parser = subparsers.add_parser("hash", help="Print token and public name of files")
    hash_parser.add_argument("files", nargs="+", help="Files to hash")
    hash_parser.add_argument("--algorithm", type=_algorithm, default="sha3_256", help="hashlib algorithm")
    hash_parser.set_defaults(func=cmd_hash)

    # build
    build_parser_ = subparsers.add_parser("build", help="Build registry from manifest")
    build_parser_.add_argument("manifest", help="Manifest YAML file")
    build_parser_.add_argument("--json", action="store_true", help="Output JSON")
    build_parser_.add_argument("--use-env", action="store_true", help="Use injected <ID>_HASH tokens")
    build_parser_.set_defaults(func=cmd_build)

    # env
    env_parser = subparsers.add_parser("env", help="Print <ID>_HASH=token lines")
    env_parser.add_argument("manifest", help="Manifest YAML file")
    env_parser.set_defaults(func=cmd_env)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Serve registry over HTTP")
    serve_parser.add_argument("manifest", help="Manifest YAML file")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to")
    serve_parser.add_argument("--max-age", type=int, default=604800, help="Cache-Control max-age in seconds")
    serve_parser.add_argument("--use-env", action="store_true", help="Use injected <ID>_HASH tokens")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except StaticFileError as e:
        logger.debug("Build failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
