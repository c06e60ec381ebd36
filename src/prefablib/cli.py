#!/usr/bin/env python3
"""
Inspect a node definition file.

Parses the file, checks its resource paths and prints the definition (or a
named instance of it) as JSON or in the node text format::

    prefab-inspect tests/data/lights/PointLight.go --name Lamp01
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config.settings import LOG_FORMAT, LOG_LEVEL
from .core.errors import PrefabError
from .loaders.node_loader import NodeLoader

logger = logging.getLogger(__name__)


def _parse_placeholder(value: str):
    token, sep, replacement = value.partition("=")
    if not sep or not token:
        raise argparse.ArgumentTypeError(f"Expected TOKEN=VALUE, got {value!r}")
    return token, replacement


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prefab-inspect", description=__doc__.splitlines()[1])
    parser.add_argument("path", help="Node definition file")
    parser.add_argument("--name", help="Instantiate with this name before printing")
    parser.add_argument(
        "--set",
        dest="placeholders",
        action="append",
        type=_parse_placeholder,
        default=[],
        metavar="TOKEN=VALUE",
        help="Extra placeholder substitution (repeatable, needs --name)",
    )
    parser.add_argument("--strict", action="store_true", help="Reject unknown fields")
    parser.add_argument("--no-validate", action="store_true", help="Skip resource path checks")
    parser.add_argument("--namespace", action="append", dest="namespaces", help="Allowed path namespace (repeatable)")
    parser.add_argument("--format", choices=("json", "text"), default="json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else LOG_LEVEL, format=LOG_FORMAT)

    if args.placeholders and not args.name:
        logger.error("--set requires --name")
        return 2

    loader = NodeLoader(strict=args.strict, validate=not args.no_validate, namespaces=args.namespaces)
    try:
        result = loader.load_node(args.path)
        node = result.definition
        if args.name is not None:
            node = node.instantiate(args.name, dict(args.placeholders))
    except (PrefabError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1

    if args.format == "json":
        print(json.dumps(node.to_dict(), indent=2))
    else:
        sys.stdout.write(node.to_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
