#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ndtips.core.config import docs_root, get_config
from ndtips.core.fragments import summary_text
from ndtips.core.registry import TooltipNotFoundError, TooltipRegistry
from ndtips.naturaldocs.tooltips import TooltipPayloadError, load_directory

EXIT_NOT_FOUND = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ndtips",
        description="Look up Natural Docs summary tooltips",
    )
    parser.add_argument(
        "--docs",
        type=Path,
        default=None,
        help="Natural Docs HTML output directory (default: docs_root from config)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed tooltip files instead of skipping them",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print plain-text summaries instead of HTML fragments",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging and more verbose error reporting",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    lookup = commands.add_parser("lookup", help="Print one tooltip")
    lookup.add_argument("namespace", help='Tooltip namespace, e.g. "SQFClass:Group"')
    lookup.add_argument("topic_id", type=int, help="Topic id within the namespace")

    listing = commands.add_parser("list", help="List the tooltips of a namespace")
    listing.add_argument("namespace")

    commands.add_parser("namespaces", help="List registered namespaces")
    return parser


def _load(args: argparse.Namespace) -> TooltipRegistry | None:
    cfg = get_config()
    root = args.docs if args.docs is not None else docs_root()
    if root is None:
        return None
    root = root.expanduser()
    if not root.is_dir():
        return None
    return load_directory(root, strict=args.strict or cfg.strict)


def run(args: argparse.Namespace) -> int:
    registry = _load(args)
    if registry is None:
        print("ndtips: no docs directory; pass --docs or set docs_root in the config", file=sys.stderr)
        return EXIT_USAGE
    plain = args.text or get_config().plain_text
    if args.command == "namespaces":
        for namespace in registry.namespaces():
            print(namespace)
        return 0
    try:
        if args.command == "lookup":
            fragment = registry.lookup(args.namespace, args.topic_id)
            print(summary_text(fragment) if plain else fragment)
            return 0
        for topic_id, fragment in sorted(registry.entries(args.namespace).items()):
            print(f"{topic_id}\t{summary_text(fragment)}")
    except TooltipNotFoundError as exc:
        if args.command == "lookup":
            print(f"ndtips: no tooltip for {args.namespace}#{args.topic_id}", file=sys.stderr)
        else:
            print(f"ndtips: {exc}", file=sys.stderr)
        return EXIT_NOT_FOUND
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the tooltip lookup CLI.

    Usage:
        ndtips [--docs DIR] [--text] lookup NAMESPACE ID
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        return run(args)
    except (TooltipPayloadError, UnicodeDecodeError, OSError) as exc:
        if args.debug:
            raise
        print(f"ndtips error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
