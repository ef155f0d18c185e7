"""Command-line entry point.

Example:
    python -m species_sim configs/default.yaml --years 20 --seed 7
"""

import argparse
import logging
import sys
from typing import List, Optional

from species_sim.config import load_config
from species_sim.model import run_all
from species_sim.report import format_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="species-sim",
        description="Simulate species populations in habitats from a YAML config.",
        epilog="Example: python -m species_sim configs/default.yaml --years 20",
    )
    parser.add_argument(
        "config",
        help="YAML config with species and habitats",
    )
    parser.add_argument(
        "--scenario", type=str, default=None,
        help="Optional YAML merged over the base config",
    )
    parser.add_argument(
        "--years", type=int, default=None,
        help="Override simulation.years",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Override simulation.seed",
    )
    parser.add_argument(
        "--species", action="append", default=None,
        help="Only run this species (repeatable)",
    )
    parser.add_argument(
        "--habitat", action="append", default=None,
        help="Only run this habitat (repeatable)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log births, deaths and resource denials",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {}
    if args.years is not None:
        overrides.setdefault('simulation', {})['years'] = args.years
    if args.seed is not None:
        overrides.setdefault('simulation', {})['seed'] = args.seed

    try:
        config = load_config(args.config, args.scenario, overrides or None)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.species:
        config.species = [s for s in config.species if s.name in args.species]
    if args.habitat:
        config.habitats = [h for h in config.habitats if h.name in args.habitat]
    if not config.species or not config.habitats:
        print("error: nothing to simulate (no species or no habitats selected)",
              file=sys.stderr)
        return 2

    results = run_all(config)
    print(format_report(results))
    return 0
