"""Tests for species_sim.rng — seeded per-run RNG streams and lookup."""

import numpy as np
import pytest

from species_sim.rng import (
    create_rng_hierarchy,
    get_run_rng,
)

KEYS = [('bear', 'forest'), ('bear', 'plains'), ('kangaroo', 'plains')]


class TestCreateRngHierarchy:
    def test_returns_correct_keys(self):
        rngs = create_rng_hierarchy(42, KEYS)
        assert set(rngs) == set(KEYS)

    def test_generators_are_independent(self):
        rngs = create_rng_hierarchy(42, KEYS)
        vals = {key: rng.random() for key, rng in rngs.items()}
        assert len(set(vals.values())) == len(vals), "RNG streams produced duplicate values"

    def test_reproducibility(self):
        rngs1 = create_rng_hierarchy(42, KEYS)
        rngs2 = create_rng_hierarchy(42, KEYS)
        for key in KEYS:
            np.testing.assert_array_equal(rngs1[key].random(100), rngs2[key].random(100))

    def test_different_seeds_differ(self):
        rngs1 = create_rng_hierarchy(42, KEYS)
        rngs2 = create_rng_hierarchy(43, KEYS)
        assert not np.array_equal(rngs1[KEYS[0]].random(10), rngs2[KEYS[0]].random(10))

    def test_run_independence(self):
        """Adding runs doesn't change existing runs' streams."""
        small = create_rng_hierarchy(42, KEYS[:1])
        large = create_rng_hierarchy(42, list(reversed(KEYS)))
        np.testing.assert_array_equal(
            small[KEYS[0]].random(50), large[KEYS[0]].random(50)
        )

    def test_no_runs(self):
        assert create_rng_hierarchy(42, []) == {}

    def test_negative_seed(self):
        with pytest.raises(ValueError):
            create_rng_hierarchy(-1, KEYS)


class TestGetRunRng:
    def test_valid_run(self):
        rngs = create_rng_hierarchy(42, KEYS)
        assert get_run_rng(rngs, 'bear', 'forest') is rngs[('bear', 'forest')]

    def test_unknown_run(self):
        rngs = create_rng_hierarchy(42, KEYS)
        with pytest.raises(KeyError, match="kangaroo"):
            get_run_rng(rngs, 'kangaroo', 'forest')
