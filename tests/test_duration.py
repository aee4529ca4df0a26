"""Tests for duration parsing."""

from datetime import timedelta

import pytest

from tagged_store import parse_duration
from tagged_store.duration import ttl_ms


class TestParseDuration:
    """Tests for parse_duration function."""

    def test_units(self) -> None:
        """Test parsing every supported unit."""
        assert parse_duration("100ms") == 100
        assert parse_duration("30s") == 30_000
        assert parse_duration("5m") == 300_000
        assert parse_duration("2h") == 7_200_000
        assert parse_duration("7d") == 604_800_000

    def test_integer_passthrough(self) -> None:
        """Test that integers are taken as milliseconds."""
        assert parse_duration(1000) == 1000
        assert parse_duration(0) == 0

    def test_timedelta(self) -> None:
        """Test that timedeltas are converted to milliseconds."""
        assert parse_duration(timedelta(seconds=2)) == 2000
        assert parse_duration(timedelta(minutes=1, milliseconds=5)) == 60_005

    def test_negative_rejected(self) -> None:
        """Test that negative durations raise ValueError."""
        with pytest.raises(ValueError, match="must not be negative"):
            parse_duration(-1)

        with pytest.raises(ValueError, match="must not be negative"):
            parse_duration(timedelta(seconds=-1))

    def test_invalid_format(self) -> None:
        """Test that invalid formats raise ValueError."""
        for bad in ("invalid", "10x", "s10", "", "10"):
            with pytest.raises(ValueError, match="Invalid duration"):
                parse_duration(bad)

    def test_unsupported_type_rejected(self) -> None:
        """Test that floats and other types raise ValueError."""
        for bad in (1.5, None, [1]):
            with pytest.raises(ValueError, match="Invalid duration"):
                parse_duration(bad)  # type: ignore[arg-type]

    def test_bool_rejected(self) -> None:
        """Test that booleans are not mistaken for integers."""
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration(True)


class TestTtlMs:
    """Tests for optional TTL parsing."""

    def test_none_never_expires(self) -> None:
        assert ttl_ms(None) is None

    def test_zero_never_expires(self) -> None:
        assert ttl_ms("0s") is None
        assert ttl_ms(0) is None

    def test_positive(self) -> None:
        assert ttl_ms("1s") == 1000
