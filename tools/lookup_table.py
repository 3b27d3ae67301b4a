#!/usr/bin/env python3
"""
lookup_table.py - Version-dependent gigahertz table for the robot header byte

The low nibble of a robot header byte is not a value by itself: it is a row
index into a fixed table, and the column is picked by the header's version
field. The same 4-bit code therefore means different things for different
hardware revisions.

Table Layout:
    Rows    code 0000..1111 (raw 4-bit pattern, in bit order)
    Columns version 1..4

    code   v1    v2    v3     v4
    0000    0     0     0     100
    ...
    1111   300   500  18000  235550

The row order is the bit order of the code and nothing else; the values carry
no pattern that could be computed.

Usage:
    from lookup_table import resolve

    ghz = resolve(version=4, code=0b1111)   # 235550
"""

from typing import Any, Dict, List, Tuple

import yaml


VERSION_MIN = 1
VERSION_MAX = 4
CODE_MIN = 0
CODE_MAX = 0x0F

# One row per code, one column per version (v1, v2, v3, v4)
GIGAHERTZ_TABLE: Tuple[Tuple[int, int, int, int], ...] = (
    (0, 0, 0, 100),             # 0000
    (0, 0, 100, 200),           # 0001
    (0, 100, 150, 250),         # 0010
    (0, 125, 175, 340),         # 0011
    (5, 125, 180, 365),         # 0100
    (10, 150, 200, 365),        # 0101
    (10, 150, 375, 375),        # 0110
    (10, 150, 400, 400),        # 0111
    (15, 150, 450, 1000),       # 1000
    (15, 150, 450, 1150),       # 1001
    (15, 150, 500, 1250),       # 1010
    (20, 155, 550, 5000),       # 1011
    (100, 200, 1560, 9800),     # 1100
    (150, 250, 2000, 12100),    # 1101
    (230, 330, 6000, 23500),    # 1110
    (300, 500, 18000, 235550),  # 1111
)


class InvalidArgumentError(ValueError):
    """A field value lies outside its declared domain."""


def _check_int(name: str, value: Any, low: int, high: int) -> None:
    # bool is an int subclass but never a valid version or code
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"{name} must be an integer in [{low}, {high}], got {value!r}")
    if not low <= value <= high:
        raise InvalidArgumentError(
            f"{name} must be in [{low}, {high}], got {value}")


def check_version(version: Any) -> None:
    """Raise InvalidArgumentError unless version is in [1, 4]."""
    _check_int('version', version, VERSION_MIN, VERSION_MAX)


def check_code(code: Any) -> None:
    """Raise InvalidArgumentError unless code is in [0, 15]."""
    _check_int('code', code, CODE_MIN, CODE_MAX)


def resolve(version: int, code: int) -> int:
    """
    Look up the tabulated value for a (version, code) pair.

    Args:
        version: Header version, 1..4
        code: Raw 4-bit code, 0..15

    Returns:
        Gigahertz value from the table

    Raises:
        InvalidArgumentError: version or code out of range
    """
    check_version(version)
    check_code(code)
    return GIGAHERTZ_TABLE[code][version - 1]


def table_rows() -> List[Dict[str, Any]]:
    """Return the table as one dict per code row."""
    rows = []
    for code, values in enumerate(GIGAHERTZ_TABLE):
        row: Dict[str, Any] = {'code': code, 'bits': f"{code:04b}"}
        for version, value in enumerate(values, start=VERSION_MIN):
            row[f"v{version}"] = value
        rows.append(row)
    return rows


def table_as_dict() -> Dict[int, List[int]]:
    """Return {version: [value for code 0..15]}."""
    return {
        version: [row[version - 1] for row in GIGAHERTZ_TABLE]
        for version in range(VERSION_MIN, VERSION_MAX + 1)
    }


def dump_table_yaml() -> str:
    """Render the table as YAML, keyed by the 4-bit code pattern."""
    doc = {
        'name': 'gigahertz',
        'columns': [f"v{v}" for v in range(VERSION_MIN, VERSION_MAX + 1)],
        'rows': {
            f"{code:04b}": list(values)
            for code, values in enumerate(GIGAHERTZ_TABLE)
        },
    }
    return yaml.safe_dump(doc, default_flow_style=None, sort_keys=False)
