"""
Tests for the gigahertz lookup table.
"""

import pytest
import sys
from pathlib import Path

import yaml

# Add tools to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'tools'))

from lookup_table import (
    GIGAHERTZ_TABLE, InvalidArgumentError,
    resolve, table_rows, table_as_dict, dump_table_yaml,
)


# code -> (v1, v2, v3, v4), written out independently of the module
EXPECTED = {
    0b0000: (0, 0, 0, 100),
    0b0001: (0, 0, 100, 200),
    0b0010: (0, 100, 150, 250),
    0b0011: (0, 125, 175, 340),
    0b0100: (5, 125, 180, 365),
    0b0101: (10, 150, 200, 365),
    0b0110: (10, 150, 375, 375),
    0b0111: (10, 150, 400, 400),
    0b1000: (15, 150, 450, 1000),
    0b1001: (15, 150, 450, 1150),
    0b1010: (15, 150, 500, 1250),
    0b1011: (20, 155, 550, 5000),
    0b1100: (100, 200, 1560, 9800),
    0b1101: (150, 250, 2000, 12100),
    0b1110: (230, 330, 6000, 23500),
    0b1111: (300, 500, 18000, 235550),
}


class TestResolve:
    """Tests for resolve()."""

    @pytest.mark.parametrize("code", range(16))
    @pytest.mark.parametrize("version", [1, 2, 3, 4])
    def test_every_entry(self, version, code):
        assert resolve(version, code) == EXPECTED[code][version - 1]

    def test_corners(self):
        assert resolve(1, 0) == 0
        assert resolve(4, 0) == 100
        assert resolve(1, 15) == 300
        assert resolve(4, 15) == 235550

    def test_returns_int(self):
        for version in range(1, 5):
            for code in range(16):
                assert isinstance(resolve(version, code), int)

    @pytest.mark.parametrize("version", [0, 5, -1, 100])
    def test_version_out_of_range(self, version):
        with pytest.raises(InvalidArgumentError, match="version"):
            resolve(version, 0)

    @pytest.mark.parametrize("code", [-1, 16, 255])
    def test_code_out_of_range(self, code):
        with pytest.raises(InvalidArgumentError, match="code"):
            resolve(1, code)

    def test_rejects_non_int(self):
        with pytest.raises(InvalidArgumentError):
            resolve("1", 0)
        with pytest.raises(InvalidArgumentError):
            resolve(1, 2.0)

    def test_rejects_bool(self):
        with pytest.raises(InvalidArgumentError):
            resolve(True, 0)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve(5, 0)


class TestTableShape:
    """Tests for the table constant and its exports."""

    def test_dimensions(self):
        assert len(GIGAHERTZ_TABLE) == 16
        assert all(len(row) == 4 for row in GIGAHERTZ_TABLE)

    def test_immutable(self):
        with pytest.raises(TypeError):
            GIGAHERTZ_TABLE[0] = (1, 2, 3, 4)

    def test_table_rows(self):
        rows = table_rows()
        assert len(rows) == 16
        assert rows[0] == {'code': 0, 'bits': '0000', 'v1': 0, 'v2': 0, 'v3': 0, 'v4': 100}
        assert rows[15]['bits'] == '1111'
        assert rows[15]['v4'] == 235550

    def test_table_as_dict(self):
        table = table_as_dict()
        assert sorted(table) == [1, 2, 3, 4]
        assert table[3] == [EXPECTED[c][2] for c in range(16)]

    def test_dump_table_yaml(self):
        doc = yaml.safe_load(dump_table_yaml())
        assert doc['name'] == 'gigahertz'
        assert doc['columns'] == ['v1', 'v2', 'v3', 'v4']
        assert list(doc['rows'])[0] == '0000'
        assert doc['rows']['1100'] == [100, 200, 1560, 9800]
