#!/usr/bin/env python3
"""
asvocab CLI

Inspect a vocabulary schema and check wire documents against it:
  asvocab types - List declared types, or one type's properties
  asvocab decode - Decode a JSON document and print it re-encoded

Usage:
  asvocab types [<type>] [--schema <schema.yaml>]
  asvocab decode <document.json | -> [--schema <schema.yaml>] [--context]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .codec import dumps, loads, serialize
from .errors import VocabError
from .schema import Schema
from .vocabulary import core_schema


def load_schema(path: Optional[str]) -> Schema:
    """Load a schema file, or the built-in vocabulary when path is None."""
    if path is None:
        return core_schema()
    return Schema.from_file(Path(path))


def cmd_types(args) -> int:
    """List types, or the properties of one type."""
    schema = load_schema(args.schema)

    if args.type is None:
        for tag in sorted(schema):
            type_spec = schema.get(tag)
            parent = f" (extends {type_spec.extends})" if type_spec.extends else ""
            print(f"{tag}{parent}")
        return 0

    type_spec = schema.require(args.type)
    print(f"{type_spec.name}")
    for spec in type_spec.properties:
        cardinality = "functional" if spec.functional else "non-functional"
        kinds = ", ".join(sorted(k.value for k in spec.kinds))
        print(f"  {spec.name:<20} {cardinality:<15} {kinds}")
    return 0


def cmd_decode(args) -> int:
    """Decode a document and print the normalised wire form."""
    schema = load_schema(args.schema)

    if args.document == "-":
        raw = sys.stdin.buffer.read()
    else:
        with open(args.document, "rb") as f:
            raw = f.read()

    obj = loads(raw, schema)
    if args.context:
        print(json.dumps(serialize(obj), indent=args.indent))
    else:
        print(dumps(obj, indent=args.indent))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="asvocab",
        description="ActivityStreams vocabulary engine",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # types command
    types_parser = subparsers.add_parser("types", help="List schema types")
    types_parser.add_argument("type", nargs="?", help="Show the properties of this type")
    types_parser.add_argument("--schema", help="Schema YAML file (default: built-in)")

    # decode command
    decode_parser = subparsers.add_parser("decode", help="Decode and re-encode a document")
    decode_parser.add_argument("document", help="JSON document, or - for stdin")
    decode_parser.add_argument("--schema", help="Schema YAML file (default: built-in)")
    decode_parser.add_argument("--context", action="store_true",
                               help="Add the ActivityStreams @context if missing")
    decode_parser.add_argument("--indent", type=int, default=2,
                               help="JSON indent (default: 2)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "types":
            return cmd_types(args)
        elif args.command == "decode":
            return cmd_decode(args)
        else:
            parser.print_help()
            return 1
    except (VocabError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
