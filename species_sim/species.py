"""Species parameter record.

A Species is pure data: shared read-only by every Animal of that species,
newborns included. Range invariants are checked once, at construction.
"""

from dataclasses import dataclass

from species_sim.types import MONTHS_PER_YEAR


@dataclass(frozen=True)
class Species:
    """Immutable life-history parameters for one species.

    Ages are in years; required food/water are per tick (month);
    gestation_period is in ticks.
    """
    name: str
    min_breeding_age: int
    max_breeding_age: int
    min_tolerance: float
    max_tolerance: float
    required_food: int
    required_water: int
    gestation_period: int
    max_age: int

    def __post_init__(self):
        if self.min_breeding_age > self.max_breeding_age:
            raise ValueError(
                f"{self.name}: min_breeding_age ({self.min_breeding_age}) must be "
                f"<= max_breeding_age ({self.max_breeding_age})"
            )
        if self.min_tolerance > self.max_tolerance:
            raise ValueError(
                f"{self.name}: min_tolerance ({self.min_tolerance}) must be "
                f"<= max_tolerance ({self.max_tolerance})"
            )
        for attr in ('min_breeding_age', 'required_food', 'required_water',
                     'max_age'):
            if getattr(self, attr) < 0:
                raise ValueError(
                    f"{self.name}: {attr} must be non-negative, "
                    f"got {getattr(self, attr)}"
                )
        # copulate() starts gestation at 1, so a birth needs at least one tick
        if self.gestation_period < 1:
            raise ValueError(
                f"{self.name}: gestation_period must be >= 1, "
                f"got {self.gestation_period}"
            )

    @property
    def max_age_months(self) -> int:
        return self.max_age * MONTHS_PER_YEAR

    @property
    def breeding_window_months(self):
        """(first, last) breeding age in months, both inclusive."""
        return (self.min_breeding_age * MONTHS_PER_YEAR,
                self.max_breeding_age * MONTHS_PER_YEAR)
