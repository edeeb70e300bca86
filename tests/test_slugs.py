"""Tests for slug normalization."""

import pytest

from dearguest.core.errors import InvalidSlug
from dearguest.invites.slugs import normalize_slug, validate_slug


class TestNormalizeSlug:
    """Tests for normalize_slug."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Raphael & Christine!", "raphael-christine"),
            ("  Summer   Party 2025 ", "summer-party-2025"),
            ("already-fine", "already-fine"),
            ("Ünïcode Names", "ncode-names"),
            ("a--b", "a-b"),
        ],
    )
    def test_normalize(self, value, expected):
        """Test normalization of free text."""
        assert normalize_slug(value) == expected

    @pytest.mark.parametrize("value", ["Raphael & Christine!", " A b  C ", "x_y.z", "--"])
    def test_idempotent(self, value):
        """Test that normalizing twice equals normalizing once."""
        once = normalize_slug(value)
        assert normalize_slug(once) == once


class TestValidateSlug:
    """Tests for validate_slug."""

    def test_valid(self):
        """Test that a valid slug is returned normalized."""
        assert validate_slug("Our Wedding") == "our-wedding"

    @pytest.mark.parametrize("value", ["", "a", "!!", "  ", "é"])
    def test_too_short(self, value):
        """Test that slugs under two characters are rejected."""
        with pytest.raises(InvalidSlug):
            validate_slug(value)
