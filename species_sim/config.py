"""Configuration system for species_sim.

Hierarchical YAML configuration with deep-merge support:
  base.yaml → scenario override → command-line overrides

The YAML layout follows the species-simulator challenge format:

  years: 10
  species:
    - name: kangaroo
      attributes:
        monthly_food_consumption: 3
        monthly_water_consumption: 4
        life_span: 30
        minimum_breeding_age: 5
        maximum_breeding_age: 20
        gestation_period: 9
        minimum_temperature: 30
        maximum_temperature: 110
  habitats:
    - name: plains
      monthly_food: 100
      monthly_water: 150
      average_temperature: {summer: 85, spring: 60, fall: 50, winter: 30}

An optional `simulation:` section holds the run controls below; a top-level
`years` is accepted as shorthand for simulation.years.
"""

from __future__ import annotations

import dataclasses
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from species_sim.environment import Habitat
from species_sim.species import Species


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION DATACLASSES
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationSection:
    """Run timing and control."""
    years: int = 100
    seed: int = 42
    initial_males: int = 1
    initial_females: int = 1
    fluctuation: float = 5.0           # Usual monthly temperature swing (±)
    extreme_fluctuation: float = 15.0  # Swing on an extreme month (±)
    extreme_chance: float = 0.005      # Per-month probability of an extreme month


@dataclass
class SimulationConfig:
    """Complete simulation configuration.

    Load from YAML via `load_config()`.
    """
    simulation: SimulationSection = field(default_factory=SimulationSection)
    species: List[Species] = field(default_factory=list)
    habitats: List[Habitat] = field(default_factory=list)


# YAML attribute name → Species field
SPECIES_ATTRIBUTE_MAP = {
    'minimum_breeding_age': 'min_breeding_age',
    'maximum_breeding_age': 'max_breeding_age',
    'minimum_temperature': 'min_tolerance',
    'maximum_temperature': 'max_tolerance',
    'monthly_food_consumption': 'required_food',
    'monthly_water_consumption': 'required_water',
    'gestation_period': 'gestation_period',
    'life_span': 'max_age',
}


# ═══════════════════════════════════════════════════════════════════════
# YAML LOADING & MERGING
# ═══════════════════════════════════════════════════════════════════════

def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Modifies base in place.

    - Dict values are merged recursively
    - Non-dict values (lists included) are replaced
    - Keys in override but not base are added

    Returns:
        The merged base dictionary.
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _dict_to_section(section_cls, data: Dict) -> Any:
    """Convert a dict to a dataclass, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(section_cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return section_cls(**filtered)


def _species_from_dict(data: Dict) -> Species:
    """Build a Species from a YAML entry.

    Accepts either the challenge layout (`name` + `attributes` block with
    challenge attribute names) or Species field names at the top level.
    """
    if 'name' not in data:
        raise ValueError(f"species entry missing 'name': {data}")
    fields = {k: v for k, v in data.items() if k != 'attributes'}
    for yaml_key, value in (data.get('attributes') or {}).items():
        if yaml_key in SPECIES_ATTRIBUTE_MAP:
            fields[SPECIES_ATTRIBUTE_MAP[yaml_key]] = value
    valid_fields = {f.name for f in dataclasses.fields(Species)}
    missing = sorted(valid_fields - set(fields))
    if missing:
        raise ValueError(f"species '{data['name']}' missing attributes {missing}")
    try:
        return _dict_to_section(Species, fields)
    except TypeError as e:
        raise ValueError(f"species '{data['name']}': wrong value type ({e})") from e


def _habitat_from_dict(data: Dict) -> Habitat:
    if 'name' not in data:
        raise ValueError(f"habitat entry missing 'name': {data}")
    data = dict(data)
    data['average_temperature'] = dict(data.get('average_temperature') or {})
    try:
        return _dict_to_section(Habitat, data)
    except TypeError as e:
        raise ValueError(f"habitat '{data['name']}': wrong value type ({e})") from e


def _yaml_to_config(data: Dict) -> SimulationConfig:
    """Convert a merged YAML dict to a SimulationConfig."""
    sim_data = dict(data.get('simulation') or {})
    if 'years' in data and 'years' not in sim_data:
        sim_data['years'] = data['years']
    simulation = _dict_to_section(SimulationSection, sim_data)

    species = [_species_from_dict(d) for d in data.get('species') or []]
    habitats = [_habitat_from_dict(d) for d in data.get('habitats') or []]
    return SimulationConfig(simulation=simulation, species=species,
                            habitats=habitats)


# Run controls that must be integers; the rest must be real numbers
_INT_FIELDS = ('years', 'seed', 'initial_males', 'initial_females')
_REAL_FIELDS = ('fluctuation', 'extreme_fluctuation', 'extreme_chance')


def _check_types(sim: SimulationSection) -> None:
    """Reject YAML values of the wrong type before any range check."""
    for name in _INT_FIELDS + _REAL_FIELDS:
        value = getattr(sim, name)
        wanted = int if name in _INT_FIELDS else (int, float)
        if isinstance(value, bool) or not isinstance(value, wanted):
            kind = "an integer" if name in _INT_FIELDS else "a number"
            raise ValueError(
                f"simulation.{name} must be {kind}, got {value!r}"
            )


def validate_config(config: SimulationConfig) -> None:
    """Validate configuration constraints. Raises ValueError on failure.

    Species and Habitat check their own ranges at construction; this covers
    the run controls and cross-entry consistency.
    """
    sim = config.simulation
    _check_types(sim)
    if sim.years < 1:
        raise ValueError(f"simulation.years must be >= 1, got {sim.years}")
    if sim.seed < 0:
        raise ValueError("simulation.seed must be non-negative")
    if sim.initial_males < 0 or sim.initial_females < 0:
        raise ValueError(
            f"simulation.initial_males/initial_females must be >= 0, got "
            f"{sim.initial_males}/{sim.initial_females}"
        )
    if sim.fluctuation < 0 or sim.extreme_fluctuation < 0:
        raise ValueError("temperature fluctuations must be non-negative")
    if not 0.0 <= sim.extreme_chance <= 1.0:
        raise ValueError(
            f"simulation.extreme_chance must be in [0, 1], got {sim.extreme_chance}"
        )
    if sim.initial_females == 0:
        warnings.warn(
            "simulation.initial_females is 0; only females conceive, "
            "so the population can never grow",
            UserWarning,
            stacklevel=2,
        )

    for kind, entries in (('species', config.species),
                          ('habitats', config.habitats)):
        names = [e.name for e in entries]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate {kind} names: {dupes}")


def _read_yaml(path: Path) -> Dict:
    """Parse one YAML file into a dict; malformed YAML is a ValueError."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(
            f"{path}: top level must be a mapping, got {type(data).__name__}"
        )
    return data


def load_config(
    base_path: Union[str, Path],
    scenario_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict] = None,
) -> SimulationConfig:
    """Load and merge hierarchical YAML configuration.

    Merge order: base → scenario → overrides.

    Raises:
        FileNotFoundError: If base_path or a given scenario_path doesn't exist.
        ValueError: If a file is malformed or validation fails.
    """
    config_dict = _read_yaml(Path(base_path))

    if scenario_path is not None:
        deep_merge(config_dict, _read_yaml(Path(scenario_path)))

    if overrides is not None:
        deep_merge(config_dict, overrides)

    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config
