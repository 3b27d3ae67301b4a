#!/usr/bin/env python3
"""
bit_record.py - Robot header byte encoder/decoder

A robot header packs four fields into one byte:

    bit   7     6 5      4      3 2 1 0
        +-----+------+--------+---------+
        | sex | ver  | active |  code   |
        +-----+------+--------+---------+

    gender   bit 7       0 = female, 1 = male
    version  bits 6-5    00 = v1, 01 = v2, 10 = v3, 11 = v4
    active   bit 4       0 = inactive, 1 = active
    code     bits 3-0    row index into the gigahertz table

Every byte value decodes to a valid record, and there are no reserved bits,
so encode(decode(b)) == b for all 256 bytes.

Example robots:
    11111111 == 255 == male, v4, active, 235550 GHz
    10010010 == 146 == male, v1, active, 0 GHz
    00011000 == 24  == female, v1, active, 15 GHz

Usage:
    from bit_record import decode, encode

    record = decode(0x92)
    record.resolved_value        # 0
    encode(record)               # 0x92
"""

import logging
from dataclasses import dataclass, field, asdict, replace
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from lookup_table import InvalidArgumentError, check_code, check_version, resolve


logger = logging.getLogger(__name__)


class Gender(IntEnum):
    """Gender bit values."""
    FEMALE = 0
    MALE = 1


@dataclass(frozen=True)
class BitField:
    """A contiguous run of bits: value = (byte >> shift) & mask."""
    name: str
    shift: int
    mask: int

    @property
    def width(self) -> int:
        return self.mask.bit_length()

    def extract(self, byte: int) -> int:
        return (byte >> self.shift) & self.mask

    def insert(self, value: int) -> int:
        return (value & self.mask) << self.shift


GENDER_FIELD = BitField('gender', shift=7, mask=0b1)
VERSION_FIELD = BitField('version', shift=5, mask=0b11)
ACTIVE_FIELD = BitField('active', shift=4, mask=0b1)
CODE_FIELD = BitField('code', shift=0, mask=0b1111)

LAYOUT = (GENDER_FIELD, VERSION_FIELD, ACTIVE_FIELD, CODE_FIELD)

GENDER_MASK = GENDER_FIELD.mask << GENDER_FIELD.shift    # 0x80
ACTIVE_MASK = ACTIVE_FIELD.mask << ACTIVE_FIELD.shift    # 0x10

BYTE_MAX = 0xFF

# Sample headers from the original design notes
SAMPLE_BYTES = (0xFF, 0x92, 0x18)


@dataclass(frozen=True)
class BitRecord:
    """Decoded robot header. resolved_value is derived from (version, code)."""
    gender: Gender
    version: int
    active: bool
    code: int

    @property
    def resolved_value(self) -> int:
        return resolve(self.version, self.code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gender': Gender(self.gender).name.lower(),
            'version': self.version,
            'active': bool(self.active),
            'code': self.code,
            'resolved_value': self.resolved_value,
        }


def _check_byte(byte: Any) -> None:
    if isinstance(byte, bool) or not isinstance(byte, int):
        raise InvalidArgumentError(f"byte must be an integer, got {byte!r}")
    if not 0 <= byte <= BYTE_MAX:
        raise InvalidArgumentError(f"byte must be in [0, 255], got {byte}")


def parse_gender(value: Any) -> Gender:
    """Accept Gender, 0/1, or 'female'/'male' (any case)."""
    if isinstance(value, str):
        text = value.strip()
        if text.upper() in Gender.__members__:
            return Gender[text.upper()]
        if text in ('0', '1'):
            return Gender(int(text))
        raise InvalidArgumentError(
            f"gender must be 0, 1, 'female' or 'male', got {value!r}")
    if isinstance(value, bool) or not isinstance(value, int) or value not in (0, 1):
        raise InvalidArgumentError(f"gender must be 0 or 1, got {value!r}")
    return Gender(value)


def parse_active(value: Any) -> bool:
    """Accept bool, 0/1, or 'true'/'false'/'0'/'1' (any case)."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ('true', '1'):
            return True
        if text in ('false', '0'):
            return False
        raise InvalidArgumentError(
            f"active must be true, false, 0 or 1, got {value!r}")
    if not isinstance(value, int) or value not in (0, 1):
        raise InvalidArgumentError(f"active must be 0 or 1, got {value!r}")
    return bool(value)


def validate_record(record: BitRecord) -> None:
    """
    Check every field of a record against its domain.

    Raises:
        InvalidArgumentError: first field found outside its domain
    """
    gender = record.gender
    if isinstance(gender, bool) or not isinstance(gender, int) or gender not in (0, 1):
        raise InvalidArgumentError(f"gender must be 0 or 1, got {gender!r}")
    check_version(record.version)
    active = record.active
    if not isinstance(active, int) or active not in (0, 1):
        raise InvalidArgumentError(f"active must be 0 or 1, got {active!r}")
    check_code(record.code)


def make_record(gender: Any, version: int, active: Any, code: int) -> BitRecord:
    """Build a validated record from field values."""
    record = BitRecord(parse_gender(gender), version, active, code)
    validate_record(record)
    return replace(record, active=bool(active))


def decode(byte: int) -> BitRecord:
    """
    Decode a header byte.

    Args:
        byte: Unsigned 8-bit value, 0..255

    Returns:
        BitRecord with all four fields populated

    Raises:
        InvalidArgumentError: byte is not an int in [0, 255]
    """
    _check_byte(byte)
    record = BitRecord(
        gender=Gender(GENDER_FIELD.extract(byte)),
        version=VERSION_FIELD.extract(byte) + 1,
        active=bool(ACTIVE_FIELD.extract(byte)),
        code=CODE_FIELD.extract(byte),
    )
    logger.debug("decoded 0x%02X -> %s", byte, record)
    return record


def encode(record: BitRecord) -> int:
    """
    Pack a record back into its header byte.

    Raises:
        InvalidArgumentError: any field outside its domain
    """
    validate_record(record)
    return (GENDER_FIELD.insert(int(record.gender))
            | VERSION_FIELD.insert(record.version - 1)
            | ACTIVE_FIELD.insert(int(record.active))
            | CODE_FIELD.insert(record.code))


def get_gender(byte: int) -> Gender:
    """Read only the gender bit."""
    _check_byte(byte)
    return Gender.MALE if byte & GENDER_MASK else Gender.FEMALE


def describe_byte(byte: int) -> Dict[str, Any]:
    """Byte in decimal, hex and binary plus its decoded fields."""
    record = decode(byte)
    info: Dict[str, Any] = {
        'byte': byte,
        'hex': f"0x{byte:02X}",
        'binary': f"{byte:08b}",
    }
    info.update(record.to_dict())
    info['raw'] = {f.name: f.extract(byte) for f in LAYOUT}
    return info


# =============================================================================
# Test vectors
# =============================================================================

@dataclass
class VectorResult:
    """Result of a single test vector."""
    name: str
    passed: bool
    description: str = ""
    payload_hex: str = ""
    expected: Dict[str, Any] = field(default_factory=dict)
    actual: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class VectorReport:
    """Results of a test vector run."""
    results: List[VectorResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'passed': self.passed,
            'failed': self.failed,
            'total': self.total,
            'all_passed': self.all_passed,
            'results': [r.to_dict() for r in self.results],
        }


def parse_payload(payload: Any) -> int:
    """Parse a one-byte payload given as int, hex string or single-item list."""
    if isinstance(payload, list) and len(payload) == 1:
        payload = payload[0]
    if isinstance(payload, int) and not isinstance(payload, bool):
        _check_byte(payload)
        return payload
    if isinstance(payload, str):
        clean = payload.replace(' ', '').lower()
        if clean.startswith('0x'):
            clean = clean[2:]
        data = bytes.fromhex(clean)
        if len(data) != 1:
            raise InvalidArgumentError(f"payload must be exactly one byte, got {len(data)}")
        return data[0]
    raise InvalidArgumentError(f"Cannot parse payload: {payload!r}")


def _normalise_expected(name: str, value: Any) -> Any:
    if name == 'gender':
        return parse_gender(value).name.lower()
    if name == 'active':
        return parse_active(value)
    return value


def run_test_vector(tv: Dict[str, Any]) -> VectorResult:
    """Decode one vector, compare expected fields and check the re-encode."""
    if not isinstance(tv, dict):
        result = VectorResult(name='unnamed', passed=False)
        result.errors.append(f"Test vector must be a mapping, got {tv!r}")
        return result

    result = VectorResult(
        name=tv.get('name', 'unnamed'),
        passed=False,
        description=tv.get('description') or '',
        expected=tv.get('expected') or {},
    )
    if not isinstance(result.expected, dict):
        result.errors.append(f"'expected' must be a mapping, got {result.expected!r}")
        return result

    try:
        byte = parse_payload(tv.get('payload'))
    except ValueError as e:
        result.errors.append(f"Failed to parse payload: {e}")
        return result
    result.payload_hex = f"{byte:02X}"

    record = decode(byte)
    result.actual = record.to_dict()

    for name, expected_value in result.expected.items():
        if name not in result.actual:
            result.errors.append(f"Unknown field in expected: '{name}'")
            continue
        try:
            expected_value = _normalise_expected(name, expected_value)
        except ValueError as e:
            result.errors.append(f"{name}: {e}")
            continue
        if result.actual[name] != expected_value:
            result.errors.append(
                f"{name}: expected {expected_value!r}, got {result.actual[name]!r}")

    reencoded = encode(record)
    if reencoded != byte:
        result.errors.append(f"re-encode: expected {byte:02X}, got {reencoded:02X}")

    result.passed = not result.errors
    logger.debug("vector %s: %s", result.name, "PASS" if result.passed else "FAIL")
    return result


def run_test_vectors(vectors: List[Dict[str, Any]]) -> VectorReport:
    report = VectorReport()
    for tv in vectors:
        report.results.append(run_test_vector(tv))
    return report


def load_test_vectors(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load vectors from a YAML file, either a list or a doc with 'test_vectors'."""
    with open(path) as f:
        doc = yaml.safe_load(f)
    if isinstance(doc, dict):
        doc = doc.get('test_vectors', [])
    if not isinstance(doc, list):
        raise ValueError(f"{path}: 'test_vectors' must be a list")
    for i, tv in enumerate(doc):
        if not isinstance(tv, dict):
            raise ValueError(f"{path}: test vector {i} must be a mapping, got {tv!r}")
    return doc


if __name__ == '__main__':
    print("=== Robot Header Demo ===\n")
    for b in SAMPLE_BYTES:
        info = describe_byte(b)
        print(f"{info['binary']} == {info['byte']:3d} == {info['gender']}, "
              f"version {info['version']}, "
              f"{'active' if info['active'] else 'inactive'}, "
              f"{info['resolved_value']} gigahertz")
