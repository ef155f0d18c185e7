"""Population driver: advances a single-species population month by month.

Monthly loop (one tick):
  1. Environment reset: food and water back to the habitat's monthly
     supply, temperature = seasonal mean ± fluctuation
  2. Living animals visited in a random order, each running its survival
     checks against the shared pool
  3. Dead animals removed and tallied by cause
  4. Survivors breed: pregnant females gestate, the rest try to conceive
  5. Newborns join after every animal has been visited

run_all() repeats this for every species × habitat pair in a config, each
run on its own RNG stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from species_sim.animal import Animal
from species_sim.config import SimulationConfig, SimulationSection
from species_sim.environment import Environment, Habitat, monthly_temperature
from species_sim.rng import create_rng_hierarchy, get_run_rng
from species_sim.species import Species
from species_sim.types import MONTHS_PER_YEAR, DeathCause, Gender

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════
# SINGLE TICK
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class TickStats:
    """Outcome of one population tick."""
    population: List[Animal] = field(default_factory=list)
    births: int = 0
    deaths: Dict[DeathCause, int] = field(
        default_factory=lambda: {cause: 0 for cause in DeathCause}
    )

    @property
    def total_deaths(self) -> int:
        return sum(self.deaths.values())


def step_population(
    animals: List[Animal],
    environment: Environment,
    rng: np.random.Generator,
) -> TickStats:
    """Advance every animal one tick against an already-reset environment.

    Animals are visited in an order drawn from rng. Newborns are appended
    after the scan, so they first act next tick.

    Returns:
        TickStats with survivors + newborns as the new population.
    """
    stats = TickStats()
    newborns: List[Animal] = []

    for idx in rng.permutation(len(animals)):
        animal = animals[idx]
        outcome = animal.survive(environment)
        if not outcome.is_alive:
            stats.deaths[outcome.cause] += 1
            continue
        stats.population.append(animal)
        if animal.is_pregnant:
            newborn = animal.gestate()
            if newborn is not None:
                newborns.append(newborn)
        else:
            animal.copulate(environment)

    stats.births = len(newborns)
    stats.population.extend(newborns)
    return stats


# ═══════════════════════════════════════════════════════════════════════
# FULL RUN
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationResult:
    """Results from one species living in one habitat."""
    species_name: str = ""
    habitat_name: str = ""
    n_months: int = 0
    # Population at the end of each month (length = n_months)
    monthly_population: Optional[np.ndarray] = None

    # Death accounting by cause (whole run)
    deaths_by_cause: Dict[DeathCause, int] = field(
        default_factory=lambda: {cause: 0 for cause in DeathCause}
    )

    # Summary
    total_births: int = 0
    initial_population: int = 0
    final_population: int = 0
    extinct_month: Optional[int] = None   # month index the last animal died

    @property
    def average_population(self) -> float:
        if self.monthly_population is None or len(self.monthly_population) == 0:
            return 0.0
        return float(np.mean(self.monthly_population))

    @property
    def max_population(self) -> int:
        if self.monthly_population is None or len(self.monthly_population) == 0:
            return self.initial_population
        return max(int(np.max(self.monthly_population)), self.initial_population)

    @property
    def total_deaths(self) -> int:
        return sum(self.deaths_by_cause.values())

    @property
    def mortality_rate(self) -> float:
        """Fraction of every animal that ever lived which died in the run."""
        ever_lived = self.initial_population + self.total_births
        return self.total_deaths / ever_lived if ever_lived > 0 else 0.0

    def cause_fraction(self, cause: DeathCause) -> float:
        """Share of all deaths attributed to cause."""
        total = self.total_deaths
        return self.deaths_by_cause[cause] / total if total > 0 else 0.0


def initial_population(
    species: Species,
    n_males: int,
    n_females: int,
    rng: np.random.Generator,
) -> List[Animal]:
    """Founding animals, all age 0, sharing the run's rng."""
    return ([Animal(species, rng, Gender.MALE) for _ in range(n_males)]
            + [Animal(species, rng, Gender.FEMALE) for _ in range(n_females)])


def run_simulation(
    species: Species,
    habitat: Habitat,
    years: int = 100,
    rng: Optional[np.random.Generator] = None,
    sim_cfg: Optional[SimulationSection] = None,
    seed: int = 42,
) -> SimulationResult:
    """Run one species in one habitat for a number of years.

    Args:
        species: Species to simulate.
        habitat: Habitat supplying food, water and temperature.
        years: Simulated years (12 ticks each).
        rng: Random source; a fresh Generator seeded with seed if None.
        sim_cfg: Founding population and temperature controls; defaults if None.
        seed: Seed used only when rng is None.

    Returns:
        SimulationResult with the monthly population series and death tally.
    """
    if sim_cfg is None:
        sim_cfg = SimulationSection()
    if rng is None:
        rng = np.random.default_rng(seed)

    n_months = years * MONTHS_PER_YEAR
    monthly_pop = np.zeros(n_months, dtype=np.int64)
    result = SimulationResult(
        species_name=species.name,
        habitat_name=habitat.name,
        n_months=n_months,
        monthly_population=monthly_pop,
    )

    animals = initial_population(species, sim_cfg.initial_males,
                                 sim_cfg.initial_females, rng)
    result.initial_population = len(animals)
    environment = Environment.from_habitat(habitat)
    if not animals:
        # No founders: extinct before the first tick
        result.extinct_month = 0

    logger.info("Simulating %s in %s for %d years (%d founders)",
                species.name, habitat.name, years, len(animals))

    for month in range(n_months):
        if not animals:
            # Series already zero-filled past extinction
            break
        environment.reset(monthly_temperature(
            habitat, month, rng,
            fluctuation=sim_cfg.fluctuation,
            extreme_fluctuation=sim_cfg.extreme_fluctuation,
            extreme_chance=sim_cfg.extreme_chance,
        ))
        tick = step_population(animals, environment, rng)
        animals = tick.population

        result.total_births += tick.births
        for cause, n in tick.deaths.items():
            result.deaths_by_cause[cause] += n
        monthly_pop[month] = len(animals)

        if not animals:
            result.extinct_month = month
            logger.info("%s went extinct in %s at month %d",
                        species.name, habitat.name, month)

    result.final_population = len(animals)
    logger.info("%s in %s: final population %d, %d births, %d deaths",
                species.name, habitat.name, result.final_population,
                result.total_births, result.total_deaths)
    return result


def run_all(config: SimulationConfig) -> List[SimulationResult]:
    """Run every species in every habitat of a config.

    Each species × habitat pair draws from its own RNG stream derived from
    config.simulation.seed, so results don't depend on run order.
    """
    sim = config.simulation
    keys = [(s.name, h.name) for s in config.species for h in config.habitats]
    rngs = create_rng_hierarchy(sim.seed, keys)

    results = []
    for species in config.species:
        for habitat in config.habitats:
            results.append(run_simulation(
                species, habitat,
                years=sim.years,
                rng=get_run_rng(rngs, species.name, habitat.name),
                sim_cfg=sim,
            ))
    return results
