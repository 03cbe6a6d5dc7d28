"""
Tests for vercollate.versioning.policy module.

Tests the ComparePolicy dataclass and the built-in presets.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from vercollate.exceptions import ConfigError, OptionError
from vercollate.versioning import (
    ARCH,
    DPKG,
    GENERIC,
    PRESETS,
    RHEL,
    ComparePolicy,
    get_preset,
)


class TestPresets:
    """Tests for the built-in presets."""

    def test_preset_switches(self):
        """Test the switches each ecosystem preset enables."""
        assert GENERIC == ComparePolicy()
        assert ARCH == ComparePolicy(
            epoch=True, comp_remaining=True, remainder_precedence=True
        )
        assert DPKG == ComparePolicy(epoch=True, delim_precedence=True)
        assert RHEL == ComparePolicy(
            epoch=True, delim_precedence=True, comp_remaining=True
        )

    def test_get_preset(self):
        """Test lookup by name, ignoring case."""
        assert get_preset("dpkg") is DPKG
        assert get_preset("Arch") is ARCH
        assert list(PRESETS) == ["generic", "arch", "dpkg", "rhel"]

    def test_get_unknown_preset(self):
        """Test that an unknown preset name raises ConfigError."""
        with pytest.raises(ConfigError, match="Available: generic, arch, dpkg, rhel"):
            get_preset("gentoo")

    def test_policies_are_frozen(self):
        """Test that presets cannot be mutated."""
        with pytest.raises(FrozenInstanceError):
            RHEL.epoch = False


class TestFromOptions:
    """Tests for ComparePolicy.from_options."""

    def test_no_options(self):
        """Test that absent options are all false."""
        assert ComparePolicy.from_options() == GENERIC

    def test_positional_mapping(self):
        """Test that values map onto the switches in order."""
        assert ComparePolicy.from_options(1, 1, 1, 0) == RHEL
        assert ComparePolicy.from_options(0, 1) == ComparePolicy(delim_precedence=True)

    def test_null_and_nonzero(self):
        """Test that None is false and any non-zero integer is true."""
        assert ComparePolicy.from_options(None, 5) == ComparePolicy(
            delim_precedence=True
        )

    def test_rejects_non_integers(self):
        """Test that text and floats raise OptionError."""
        with pytest.raises(OptionError):
            ComparePolicy.from_options("1")
        with pytest.raises(OptionError):
            ComparePolicy.from_options(0, 0.0)


class TestMappingConversion:
    """Tests for from_mapping, as_dict and describe."""

    def test_round_trip(self):
        """Test converting a preset to a mapping and back."""
        assert ComparePolicy.from_mapping(ARCH.as_dict()) == ARCH

    def test_partial_mapping(self):
        """Test that missing keys default to false."""
        assert ComparePolicy.from_mapping({"epoch": True}) == ComparePolicy(epoch=True)

    def test_describe(self):
        """Test the human-readable switch summary."""
        assert DPKG.describe() == "epoch, delim_precedence"
        assert GENERIC.describe() == "(none)"
