"""Plain-text reporting of simulation results."""

from typing import Iterable, List

from species_sim.model import SimulationResult
from species_sim.types import DeathCause


def format_result(result: SimulationResult) -> str:
    """Summary block for one species × habitat run."""
    lines = [
        f"{result.species_name}:",
        f"  {result.habitat_name}:",
        f"    Average Population: {result.average_population:.1f}",
        f"    Max Population: {result.max_population}",
        f"    Final Population: {result.final_population}",
        f"    Births: {result.total_births}",
        f"    Mortality Rate: {result.mortality_rate:.1%}",
        "    Causes of Death:",
    ]
    for cause in DeathCause:
        lines.append(
            f"      {result.cause_fraction(cause):6.1%} {cause.label}"
        )
    if result.extinct_month is not None:
        years, month = divmod(result.extinct_month, 12)
        lines.append(f"    Extinct: year {years + 1}, month {month + 1}")
    return '\n'.join(lines)


def format_report(results: Iterable[SimulationResult],
                  title: str = "Simulation Report") -> str:
    """Human-readable report covering every run."""
    lines: List[str] = [
        f"\n{'='*60}",
        f" {title}",
        f"{'='*60}",
    ]
    for result in results:
        lines.append(format_result(result))
    lines.append(f"{'='*60}\n")
    return '\n'.join(lines)
