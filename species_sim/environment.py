"""Environmental forcing and the shared per-tick resource pool.

Provides:
  - Habitat: static description of a place (monthly food/water supply and
    seasonal mean temperatures)
  - Seasonal temperature forcing with random monthly fluctuation
  - Environment: the food/water pool every Animal draws on during a tick

Resource allocation discipline: each provide_* call checks sufficiency and
decrements in one locked step. A request is either granted in full or
denied with nothing taken.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Mapping, Optional

import numpy as np

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════
# SEASONS
# ═══════════════════════════════════════════════════════════════════════

SEASONS = ('winter', 'spring', 'summer', 'fall')

# 0-indexed month (0 = January) → season
_MONTH_SEASON = (
    'winter', 'winter',            # Jan, Feb
    'spring', 'spring', 'spring',  # Mar–May
    'summer', 'summer', 'summer',  # Jun–Aug
    'fall', 'fall', 'fall',        # Sep–Nov
    'winter',                      # Dec
)


def season_for_month(month: int) -> str:
    """Season name for a month index (0 = January; wraps every 12)."""
    return _MONTH_SEASON[month % 12]


# ═══════════════════════════════════════════════════════════════════════
# HABITAT
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Habitat:
    """A place a species can be simulated in.

    monthly_food / monthly_water: pool capacity restored every tick.
    average_temperature: season → mean temperature; all four seasons required.
    """
    name: str
    monthly_food: int = 0
    monthly_water: int = 0
    average_temperature: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        if self.monthly_food < 0 or self.monthly_water < 0:
            raise ValueError(
                f"{self.name}: monthly_food and monthly_water must be "
                f"non-negative, got {self.monthly_food}/{self.monthly_water}"
            )
        missing = [s for s in SEASONS if s not in self.average_temperature]
        if missing:
            raise ValueError(
                f"{self.name}: average_temperature missing seasons {missing}"
            )

    def seasonal_mean(self, month: int) -> float:
        return float(self.average_temperature[season_for_month(month)])


def monthly_temperature(habitat: Habitat, month: int,
                        rng: np.random.Generator,
                        fluctuation: float = 5.0,
                        extreme_fluctuation: float = 15.0,
                        extreme_chance: float = 0.005) -> float:
    """Temperature for one month: seasonal mean ± random fluctuation.

    T(m) = T_season(m) + U(−f, +f)

    With probability extreme_chance the offset is drawn from the wider
    U(−f_extreme, +f_extreme) instead.

    Args:
        habitat: Habitat supplying the seasonal means.
        month: 0-indexed month since simulation start.
        rng: Random source.
        fluctuation: Usual half-range of the monthly offset.
        extreme_fluctuation: Half-range used on extreme months.
        extreme_chance: Per-month probability of an extreme month.

    Returns:
        Temperature for the month.
    """
    spread = fluctuation
    if rng.random() < extreme_chance:
        spread = extreme_fluctuation
    return habitat.seasonal_mean(month) + rng.uniform(-spread, spread)


# ═══════════════════════════════════════════════════════════════════════
# RESOURCE POOL
# ═══════════════════════════════════════════════════════════════════════

class Environment:
    """Shared food/water pool and ambient temperature for one tick.

    The driver calls reset() once per tick; Animals only read temperature
    and draw resources through provide_food / provide_water.
    """

    def __init__(self, food: int = 0, water: int = 0,
                 temperature: float = 0.0):
        if food < 0 or water < 0:
            raise ValueError(
                f"Environment capacities must be non-negative, got "
                f"food={food}, water={water}"
            )
        self.food_capacity = food
        self.water_capacity = water
        self._food = food
        self._water = water
        self._temperature = float(temperature)
        self._lock = threading.Lock()

    @classmethod
    def from_habitat(cls, habitat: Habitat,
                     temperature: Optional[float] = None) -> 'Environment':
        if temperature is None:
            temperature = habitat.seasonal_mean(0)
        return cls(habitat.monthly_food, habitat.monthly_water, temperature)

    @property
    def temperature(self) -> float:
        return self._temperature

    @property
    def food(self) -> int:
        """Food remaining this tick."""
        return self._food

    @property
    def water(self) -> int:
        """Water remaining this tick."""
        return self._water

    def reset(self, temperature: Optional[float] = None) -> None:
        """Refill food and water to capacity and optionally set temperature."""
        with self._lock:
            self._food = self.food_capacity
            self._water = self.water_capacity
            if temperature is not None:
                self._temperature = float(temperature)

    def provide_food(self, amount: int) -> bool:
        """Allocate amount of food if enough remains. Returns True if granted."""
        if amount < 0:
            raise ValueError(f"Cannot request negative food: {amount}")
        with self._lock:
            if self._food < amount:
                logger.debug("Food request %s denied (%s left)", amount, self._food)
                return False
            self._food -= amount
            return True

    def provide_water(self, amount: int) -> bool:
        """Allocate amount of water if enough remains. Returns True if granted."""
        if amount < 0:
            raise ValueError(f"Cannot request negative water: {amount}")
        with self._lock:
            if self._water < amount:
                logger.debug("Water request %s denied (%s left)", amount, self._water)
                return False
            self._water -= amount
            return True

    def __repr__(self) -> str:
        return (f"Environment(T={self._temperature:.1f}, "
                f"food={self._food}/{self.food_capacity}, "
                f"water={self._water}/{self.water_capacity})")
