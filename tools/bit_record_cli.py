#!/usr/bin/env python3
"""
bit_record_cli.py - Command line front end for the robot header codec

Usage:
  # Decode a header byte (decimal, hex or binary literal)
  python bit_record_cli.py decode 146
  python bit_record_cli.py decode 0x92 --json
  python bit_record_cli.py decode 0b10010010

  # Encode fields into a header byte
  python bit_record_cli.py encode --gender male --version 1 --active 1 --code 2

  # Show the gigahertz table
  python bit_record_cli.py table
  python bit_record_cli.py table --json

  # Run test vectors
  python bit_record_cli.py validate vectors/bit_record.yaml

  # Decode the three sample robots
  python bit_record_cli.py demo
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from bit_record import (
    SAMPLE_BYTES, VectorReport,
    describe_byte, encode, load_test_vectors, make_record, run_test_vectors,
)
from lookup_table import dump_table_yaml, table_as_dict, table_rows


logger = logging.getLogger(__name__)


def parse_byte_literal(text: str) -> int:
    """Parse '146', '0x92' or '0b10010010' into a byte value.

    Underscore digit separators ('1_0') are rejected.
    """
    if '_' in text:
        raise ValueError(f"not a byte literal: {text!r}")
    try:
        value = int(text.strip(), 0)
    except ValueError:
        raise ValueError(f"not a byte literal: {text!r}") from None
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte out of range [0, 255]: {text}")
    return value


def format_info(info: Dict[str, Any]) -> str:
    lines = [
        f"Byte:     {info['byte']} ({info['hex']}, {info['binary']})",
        f"Gender:   {info['gender']}",
        f"Version:  {info['version']}",
        f"Active:   {'yes' if info['active'] else 'no'}",
        f"Code:     {info['code']} ({info['code']:04b})",
        f"Gigahertz: {info['resolved_value']}",
    ]
    return '\n'.join(lines)


def format_table() -> str:
    lines = ["| code | v1 | v2 | v3 | v4 |", "|------|----|----|----|----|"]
    for row in table_rows():
        lines.append(f"| {row['bits']} | {row['v1']} | {row['v2']} | {row['v3']} | {row['v4']} |")
    return '\n'.join(lines)


def print_report(report: VectorReport, verbose: bool = False) -> None:
    if report.total == 0:
        print("No test vectors found.")
        return

    print(f"Test Vectors: {report.passed}/{report.total} passed")
    print("-" * 50)
    for vr in report.results:
        status = "PASS" if vr.passed else "FAIL"
        print(f"{vr.name}: {status}")
        if verbose or not vr.passed:
            if vr.description:
                print(f"    Description: {vr.description}")
            if vr.payload_hex:
                print(f"    Payload: {vr.payload_hex}")
            for error in vr.errors:
                print(f"    ERROR: {error}")


def cmd_decode(args: argparse.Namespace) -> int:
    info = describe_byte(parse_byte_literal(args.byte))
    if args.json:
        print(json.dumps(info, indent=2))
    else:
        print(format_info(info))
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    record = make_record(args.gender, args.version, args.active, args.code)
    byte = encode(record)
    if args.json:
        print(json.dumps({'byte': byte, 'hex': f"0x{byte:02X}",
                          'binary': f"{byte:08b}"}, indent=2))
    else:
        print(f"{byte} (0x{byte:02X}, {byte:08b})")
    return 0


def cmd_table(args: argparse.Namespace) -> int:
    if args.json:
        print(json.dumps(table_as_dict(), indent=2))
    elif args.markdown:
        print(format_table())
    else:
        print(dump_table_yaml(), end='')
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    if not args.vectors.is_file():
        print(f"Error: {args.vectors} not found", file=sys.stderr)
        return 1
    report = run_test_vectors(load_test_vectors(args.vectors))
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(f"Validating: {args.vectors}")
        print("=" * 50)
        print_report(report, args.verbose)
    return 0 if report.all_passed else 1


def cmd_demo(args: argparse.Namespace) -> int:
    for byte in SAMPLE_BYTES:
        print(format_info(describe_byte(byte)))
        print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Decode and encode single-byte robot headers'
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    dec = subparsers.add_parser('decode', help='Decode a header byte')
    dec.add_argument('byte', help='Byte literal: 146, 0x92 or 0b10010010')
    dec.add_argument('-j', '--json', action='store_true', help='Output as JSON')
    dec.set_defaults(func=cmd_decode)

    enc = subparsers.add_parser('encode', help='Encode fields into a header byte')
    enc.add_argument('--gender', required=True, help='0, 1, female or male')
    enc.add_argument('--version', type=int, required=True, help='Version 1-4')
    enc.add_argument('--active', type=int, required=True, help='0 or 1')
    enc.add_argument('--code', type=int, required=True, help='Table code 0-15')
    enc.add_argument('-j', '--json', action='store_true', help='Output as JSON')
    enc.set_defaults(func=cmd_encode)

    tab = subparsers.add_parser('table', help='Show the gigahertz table')
    fmt = tab.add_mutually_exclusive_group()
    fmt.add_argument('-j', '--json', action='store_true', help='Output as JSON')
    fmt.add_argument('-m', '--markdown', action='store_true', help='Output as a markdown table')
    tab.set_defaults(func=cmd_table)

    val = subparsers.add_parser('validate', help='Run test vectors from a YAML file')
    val.add_argument('vectors', type=Path, help='Test vector YAML file')
    val.add_argument('-j', '--json', action='store_true', help='Output results as JSON')
    val.set_defaults(func=cmd_validate)

    demo = subparsers.add_parser('demo', help='Decode the sample robots')
    demo.set_defaults(func=cmd_demo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose and not logging.getLogger().handlers:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")
    logger.debug("command: %s", args.command)

    try:
        return args.func(args)
    except (ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
