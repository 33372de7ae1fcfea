"""Tests for size parsing and formatting."""

import pytest

from provisioner.utils.sizes import format_bytes, parse_bytes


class TestParseBytes:
    """Test human-readable size parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("20GB", 20 * 1000 ** 3),
            ("20G", 20 * 1000 ** 3),
            ("20gb", 20 * 1000 ** 3),
            ("20 GB", 20 * 1000 ** 3),
            ("20GiB", 20 * 1024 ** 3),
            ("1.5TB", 1500 * 1000 ** 3),
            ("512M", 512 * 1000 ** 2),
            ("100", 100),
            ("100B", 100),
            ("1,000kB", 1000 * 1000),
        ],
    )
    def test_valid_sizes(self, value, expected):
        """Test sizes accepted with decimal and binary units."""
        assert parse_bytes(value) == expected

    @pytest.mark.parametrize("value", ["", "GB", "abc", "20XB", "-5GB", "20 G B"])
    def test_invalid_sizes(self, value):
        """Test malformed sizes are rejected."""
        with pytest.raises(ValueError):
            parse_bytes(value)


class TestFormatBytes:
    """Test SI size formatting."""

    def test_small_values(self):
        assert format_bytes(0) == "0 B"
        assert format_bytes(9) == "9 B"

    def test_round_values(self):
        assert format_bytes(20 * 1000 ** 3) == "20 GB"
        assert format_bytes(100 * 1000 ** 3) == "100 GB"
        assert format_bytes(1000 ** 3) == "1.0 GB"

    def test_fractional_values(self):
        assert format_bytes(1500 * 1000 ** 2) == "1.5 GB"
