"""
Tests for Phase 5: Identity Derivation.

These tests verify:
1. The same name always yields the same sequence
2. Selection follows the fixed linear congruential generator
3. Every selected expression comes from the unity and advanced pools
"""

import pytest

from fractionalcore.catalog import CATALOG
from fractionalcore.identity import (
    DEFAULT_IDENTITY_SIZE,
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    generate_identity_set,
    identity_seed,
)
from fractionalcore.verification import verify


class TestIdentitySeed:
    """Test the name -> seed mapping."""

    def test_seed_is_sum_of_codes(self):
        """The seed is the sum of the character codes."""
        assert identity_seed("Alice") == 65 + 108 + 105 + 99 + 101
        assert identity_seed("Alice") == 478

    def test_empty_name(self):
        """An empty name seeds with 0."""
        assert identity_seed("") == 0

    def test_lcg_constants(self):
        """The generator constants are fixed."""
        assert (LCG_MULTIPLIER, LCG_INCREMENT, LCG_MODULUS) == (9301, 49297, 233280)


class TestGenerateIdentitySet:
    """Test identity set derivation."""

    def test_default_size(self):
        """Sixteen expressions by default."""
        assert DEFAULT_IDENTITY_SIZE == 16
        assert len(generate_identity_set("Alice")) == 16

    def test_known_sequence(self):
        """Alice starts at seed 62855 (index 23), then 63972 (index 20)."""
        identity = generate_identity_set("Alice", 2)
        assert [e.text for e in identity] == ["log(10)", "tan(π/4)"]

    def test_empty_name_sequence(self):
        """Seed 0 first advances to 49297, index 17."""
        identity = generate_identity_set("", 1)
        assert identity[0].text == "e^(ln(1))"

    def test_matches_reference_lcg(self):
        """Every index is seed mod 28 along the generator's sequence."""
        pool = CATALOG.identity_pool()
        seed = identity_seed("Bob")
        expected = []
        for _ in range(10):
            seed = (seed * 9301 + 49297) % 233280
            expected.append(pool[seed % len(pool)])
        assert generate_identity_set("Bob", 10) == expected

    def test_deterministic(self):
        """The same (name, size) is reproducible."""
        assert generate_identity_set("Alice", 8) == generate_identity_set("Alice", 8)

    def test_prefix_stable(self):
        """A shorter set is a prefix of a longer one."""
        assert generate_identity_set("Alice", 20)[:8] == generate_identity_set("Alice", 8)

    def test_different_names_differ(self):
        """Names with different seeds give different sequences."""
        assert generate_identity_set("Alice", 8) != generate_identity_set("Bob", 8)

    def test_members_verify_to_one(self):
        """Identity expressions all come from the unity and advanced pools."""
        pool = CATALOG.identity_pool()
        for expression in generate_identity_set("Fractional", 32):
            assert expression in pool
            assert verify(expression.text, 1)

    def test_size_zero(self):
        """A zero-length identity is empty."""
        assert generate_identity_set("Alice", 0) == []

    def test_custom_pool(self):
        """A caller-supplied pool replaces the catalog pool."""
        pool = CATALOG.zero[:3]
        identity = generate_identity_set("Alice", 5, pool=pool)
        assert all(expression in pool for expression in identity)

    def test_negative_size(self):
        """Size must be non-negative."""
        with pytest.raises(ValueError, match="non-negative"):
            generate_identity_set("Alice", -1)

    def test_empty_pool(self):
        """An empty pool cannot supply an identity."""
        with pytest.raises(ValueError, match="empty"):
            generate_identity_set("Alice", 4, pool=[])

    def test_name_must_be_text(self):
        """Names are strings."""
        with pytest.raises(TypeError):
            generate_identity_set(42)
