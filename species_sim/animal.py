"""Individual survival and reproduction state machine.

Each tick an Animal runs four survival checks against the shared
Environment, in an order shuffled from its injected RNG:

  age       →  NaturalCauses  if age > max_age × 12
  drink     →  Dehydrated     if the water request is denied
  eat       →  Starved        on the third consecutive denied meal
  tolerate  →  Overheated / Froze outside [min_tolerance, max_tolerance]

The first failing check ends evaluation for the tick. survive() catches the
death-cause exception and returns Dead(cause); otherwise Alive.

Pregnancy is layered on top of ALIVE: gestation > 0 ⇔ pregnant. copulate()
starts it, gestate() advances it and eventually yields a newborn.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from species_sim.environment import Environment
from species_sim.species import Species
from species_sim.types import (
    ALIVE,
    HUNGER_TOLERANCE,
    OPPORTUNISTIC_BREEDING_ODDS,
    Dead,
    DeathCauseError,
    Dehydrated,
    Froze,
    Gender,
    NaturalCauses,
    Overheated,
    Starved,
    SurviveOutcome,
)

logger = logging.getLogger(__name__)


class Animal:
    """One individual of a species.

    Args:
        species: Shared, read-only Species record.
        rng: Random source for gender, check order and breeding rolls.
            Newborns share their mother's rng.
        gender: Gender.MALE or Gender.FEMALE; drawn uniformly from rng if None.
    """

    def __init__(self, species: Species, rng: np.random.Generator,
                 gender: Optional[Gender] = None):
        self.species = species
        self.rng = rng
        if gender is None:
            gender = Gender(int(rng.integers(0, 2)))
        self.gender = Gender(gender)
        self.age = 0
        self.hunger = 0
        self.gestation = 0

    # ── Predicates ────────────────────────────────────────────────────

    @property
    def is_male(self) -> bool:
        return self.gender == Gender.MALE

    @property
    def is_female(self) -> bool:
        return self.gender == Gender.FEMALE

    @property
    def is_mature(self) -> bool:
        first, last = self.species.breeding_window_months
        return first <= self.age <= last

    @property
    def is_pregnant(self) -> bool:
        return self.gestation > 0

    # ── Survival ──────────────────────────────────────────────────────

    def survive(self, environment: Environment) -> SurviveOutcome:
        """Run the four survival checks in random order.

        Returns:
            ALIVE if every check passed, else Dead(cause) for the first
            check that failed. Remaining checks are skipped after a failure.
        """
        checks = [
            self.age_one_month,
            lambda: self.drink(environment),
            lambda: self.eat(environment),
            lambda: self.tolerate(environment),
        ]
        try:
            for i in self.rng.permutation(len(checks)):
                checks[i]()
        except DeathCauseError as death:
            logger.debug("%s %s died at %d months: %s",
                         self.species.name, self.gender.name.lower(),
                         self.age, death)
            return Dead(death.cause)
        return ALIVE

    def age_one_month(self) -> None:
        """Advance age by one tick; old age is fatal past max_age years."""
        self.age += 1
        if self.age > self.species.max_age_months:
            raise NaturalCauses()

    def drink(self, environment: Environment) -> None:
        if not environment.provide_water(self.species.required_water):
            raise Dehydrated()

    def eat(self, environment: Environment) -> None:
        """Feed from the environment.

        Hunger counts consecutive missed meals and only a successful
        meal resets it. Two misses are survivable, the third is not.
        """
        self.hunger += 1
        if environment.provide_food(self.species.required_food):
            self.hunger = 0
        elif self.hunger > HUNGER_TOLERANCE:
            raise Starved()

    def tolerate(self, environment: Environment) -> None:
        temperature = environment.temperature
        if temperature > self.species.max_tolerance:
            raise Overheated()
        if temperature < self.species.min_tolerance:
            raise Froze()

    # ── Reproduction ──────────────────────────────────────────────────

    def copulate(self, environment: Environment) -> 'Animal':
        """Try to become pregnant. Consumes no resources.

        Only a mature, non-pregnant female can conceive. Conception happens
        on a 1-in-200 roll, or whenever the environment still has both food
        and water left this tick.
        """
        if not (self.is_female and self.is_mature) or self.is_pregnant:
            return self
        lucky = self.rng.integers(0, OPPORTUNISTIC_BREEDING_ODDS) == 0
        if lucky or (environment.food > 0 and environment.water > 0):
            self.gestate()
        return self

    def gestate(self) -> Optional['Animal']:
        """Advance gestation by one tick.

        Returns:
            A newborn of the same species once gestation exceeds the
            species' gestation_period (gestation resets to 0), else None.
        """
        self.gestation += 1
        if self.gestation <= self.species.gestation_period:
            return None
        self.gestation = 0
        return Animal(self.species, self.rng)

    def __repr__(self) -> str:
        return (f"Animal({self.species.name}, {self.gender.name}, "
                f"age={self.age}, hunger={self.hunger}, "
                f"gestation={self.gestation})")
