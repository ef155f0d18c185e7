"""Seeded RNG factory for reproducible simulations.

Uses NumPy's SeedSequence → PCG64 hierarchy so that:
  - Each species × habitat run gets a statistically independent stream
  - The same master seed replays every run bit-exactly
  - Adding a species or habitat doesn't perturb existing runs' streams

Every probabilistic decision in a run (gender, check order, visit order,
breeding roll, temperature fluctuation) draws from that run's single stream.
"""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

import numpy as np


RunKey = Tuple[str, str]   # (species name, habitat name)


def _key_entropy(key: RunKey) -> list:
    """Stable integer words derived from a run key."""
    return [int.from_bytes(part.encode('utf-8'), 'little') for part in key]


def create_rng_hierarchy(
    master_seed: int,
    run_keys: Iterable[RunKey],
) -> Dict[RunKey, np.random.Generator]:
    """Create an independent RNG stream for each (species, habitat) run.

    Streams are derived from the master seed combined with the run key,
    so a run's stream depends only on its own names, not on its position.

    Args:
        master_seed: Master RNG seed (non-negative integer).
        run_keys: (species name, habitat name) pairs.

    Returns:
        Dictionary mapping run keys to numpy Generator instances.

    Example:
        >>> rngs = create_rng_hierarchy(42, [('bear', 'forest')])
        >>> rngs[('bear', 'forest')].random()  # reproducible
    """
    if master_seed < 0:
        raise ValueError(f"master_seed must be non-negative, got {master_seed}")
    rngs: Dict[RunKey, np.random.Generator] = {}
    for key in run_keys:
        ss = np.random.SeedSequence([master_seed, *_key_entropy(key)])
        rngs[key] = np.random.Generator(np.random.PCG64(ss))
    return rngs


def get_run_rng(
    rngs: Dict[RunKey, np.random.Generator],
    species_name: str,
    habitat_name: str,
) -> np.random.Generator:
    """Get the RNG stream for one species × habitat run.

    Raises:
        KeyError: If the run has no stream.
    """
    key = (species_name, habitat_name)
    if key not in rngs:
        raise KeyError(
            f"No RNG stream for species '{species_name}' in habitat "
            f"'{habitat_name}'. Available runs: {sorted(rngs)}"
        )
    return rngs[key]
