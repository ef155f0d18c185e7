"""species_sim: monthly-tick simulation of single-species populations.

An individual-based model coupling:
  - Per-animal survival checks (aging, drinking, eating, temperature
    tolerance) run in random order each month
  - A shared, finite food/water pool refilled every month
  - Seasonal temperature with random fluctuation
  - Resource-gated reproduction with a fixed gestation period
"""

__version__ = "0.1.0"
