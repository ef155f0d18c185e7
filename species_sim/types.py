"""Core data types for species_sim.

This module is the single source of truth for:
  - Gender and DeathCause enumerations
  - The death-cause exception hierarchy raised by Animal sub-checks
  - SurviveOutcome (Alive | Dead) returned from Animal.survive()
  - Time constants (one tick = one month)

All modules import these types from here.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


# ═══════════════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════════════

MONTHS_PER_YEAR = 12

# Consecutive missed meals tolerated before starvation
HUNGER_TOLERANCE = 2

# Resource-independent breeding chance per copulate() call
OPPORTUNISTIC_BREEDING_ODDS = 200


# ═══════════════════════════════════════════════════════════════════════
# ENUMERATIONS
# ═══════════════════════════════════════════════════════════════════════

class Gender(IntEnum):
    """Animal gender. Resolved at construction, never unknown afterwards."""
    MALE   = 0
    FEMALE = 1


class DeathCause(IntEnum):
    """Cause of death tracking for demographic reporting."""
    NATURAL_CAUSES = 1   # Age > max_age (old age)
    DEHYDRATED     = 2   # Water request denied
    STARVED        = 3   # Third consecutive denied meal
    OVERHEATED     = 4   # Temperature above max tolerance
    FROZE          = 5   # Temperature below min tolerance

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').lower()


# ═══════════════════════════════════════════════════════════════════════
# DEATH-CAUSE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════

class DeathCauseError(Exception):
    """Base class for the five terminal outcomes of a survival check.

    Raised by Animal.age/drink/eat/tolerate and caught only by
    Animal.survive(), which turns it into a Dead outcome.
    """
    cause: DeathCause
    message = "died"

    def __init__(self):
        super().__init__(self.message)


class NaturalCauses(DeathCauseError):
    cause = DeathCause.NATURAL_CAUSES
    message = "old age"


class Dehydrated(DeathCauseError):
    cause = DeathCause.DEHYDRATED
    message = "not enough water"


class Starved(DeathCauseError):
    cause = DeathCause.STARVED
    message = "not enough food"


class Overheated(DeathCauseError):
    cause = DeathCause.OVERHEATED
    message = "too hot"


class Froze(DeathCauseError):
    cause = DeathCause.FROZE
    message = "too cold"


# ═══════════════════════════════════════════════════════════════════════
# SURVIVAL OUTCOME
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Alive:
    """The animal passed all four checks this tick."""
    is_alive = True


@dataclass(frozen=True)
class Dead:
    """The animal failed a check and must leave the population."""
    cause: DeathCause
    is_alive = False


SurviveOutcome = Union[Alive, Dead]

ALIVE = Alive()
