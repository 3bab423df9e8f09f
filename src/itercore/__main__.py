#!/usr/bin/env python3
"""
CLI for the itercore iteration runtime.

Usage:
    python -m itercore drain range START [STOP [STEP]] [--json] [--limit N]
    python -m itercore drain bytes TEXT [--hex]
    python -m itercore drain bytearray TEXT [--hex]
    python -m itercore drain list JSON
    python -m itercore doc

Examples:
    # Walk a descending range
    python -m itercore drain range 10 0 -3

    # Walk raw bytes given as hex, printing a JSON array
    python -m itercore drain bytes --hex 68656c6c6f --json

    # Walk a list literal
    python -m itercore drain list '[1, "two", [3]]'
"""

import argparse
import json
import logging
import sys
from typing import List


def build_container(kind: str, values: List[str], as_hex: bool = False):
    """Build the runtime container value named by ``kind`` from CLI arguments."""
    from .runtime import (
        int_val, bytes_val, bytearray_val, wrap_python, call_builtin,
    )

    if kind == 'range':
        try:
            bounds = [int(v) for v in values]
        except ValueError:
            raise ValueError(f"range bounds must be integers: {' '.join(values)}")
        if not 1 <= len(bounds) <= 3:
            raise ValueError("range takes 1 to 3 integer arguments")
        return call_builtin('range', [int_val(b) for b in bounds])

    if kind in ('bytes', 'bytearray'):
        if len(values) != 1:
            raise ValueError(f"{kind} takes exactly one argument")
        raw = bytes.fromhex(values[0]) if as_hex else values[0].encode('utf-8')
        return bytes_val(raw) if kind == 'bytes' else bytearray_val(raw)

    if kind == 'list':
        if len(values) != 1:
            raise ValueError("list takes exactly one JSON argument")
        data = json.loads(values[0])
        if not isinstance(data, list):
            raise ValueError("list argument must be a JSON array")
        return wrap_python(data)

    raise ValueError(f"unknown container kind: {kind}")


def cmd_drain(args):
    """Iterate a container and print every produced element."""
    from .errors import OperationError
    from .runtime import get_iter, get_next_object, to_python

    try:
        container = build_container(args.kind, args.values, as_hex=args.hex)
        iterator = get_iter(container)
        produced = []
        while args.limit is None or len(produced) < args.limit:
            element = get_next_object(iterator)
            if element is None:
                break
            produced.append(to_python(element))
    except (OperationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(produced))
    else:
        for item in produced:
            print(item)
    return 0


def cmd_doc(args):
    """Print the iterator type's documentation."""
    from .runtime import get_builtin_registry
    from .types import ITERATOR

    doc = get_builtin_registry().get_attribute(ITERATOR, '__doc__')
    print(doc.data)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m itercore',
        description='itercore iteration runtime',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # drain command
    drain_parser = subparsers.add_parser('drain', help='Iterate a container to exhaustion')
    drain_parser.add_argument('kind', choices=['range', 'bytes', 'bytearray', 'list'],
                              help='Container kind')
    drain_parser.add_argument('values', nargs='+', help='Container contents')
    drain_parser.add_argument('--hex', action='store_true',
                              help='Interpret bytes/bytearray contents as hex')
    drain_parser.add_argument('--json', action='store_true',
                              help='Print the elements as a JSON array')
    drain_parser.add_argument('--limit', type=int, metavar='N',
                              help='Stop after N elements')

    # doc command
    subparsers.add_parser('doc', help='Show the iterator documentation')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.action == 'drain':
        return cmd_drain(args)
    elif args.action == 'doc':
        return cmd_doc(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
