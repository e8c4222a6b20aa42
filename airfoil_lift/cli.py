"""Command-line entry point: ``airfoil-lift [table] [--scenario NAME] ...``."""

import argparse
import logging
import sys

from . import config
from .budget import lift_budget
from .errors import LiftError
from .lift import compute_lift
from .report import LiftReport
from .sample_table import load_sample_table
from .scenarios import SCENARIOS

logger = logging.getLogger("airfoil_lift")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airfoil-lift",
        description="Lift force on a 2D NACA 2412 airfoil from Bernoulli's equation, "
                    "with uncertain inputs propagated by Monte Carlo sampling",
    )
    parser.add_argument("table", nargs="?",
                        help="Semicolon-delimited Cp table (140 rows x 7 columns, header first)")
    parser.add_argument("--scenario", default="angle-of-attack", choices=list(SCENARIOS),
                        help="Which inputs are uncertain (default: angle-of-attack)")
    parser.add_argument("--samples", type=int,
                        help=f"Monte Carlo draws per uncertain value (env {config.ENV_SAMPLES}, default 10000)")
    parser.add_argument("--seed", type=int,
                        help=f"Random seed (env {config.ENV_SEED})")
    parser.add_argument("--coverage", type=float,
                        help=f"Coverage probability of reported intervals (env {config.ENV_COVERAGE}, default 0.95)")
    parser.add_argument("--budget", action="store_true",
                        help="Also print the first-order uncertainty budget")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress (-vv for debug output)")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    logger.setLevel(level)

    scenario = SCENARIOS[args.scenario]
    if scenario.needs_table and args.table is None:
        parser.error(f"scenario '{scenario.name}' needs the Cp table file as an argument")
    if args.table is not None and not scenario.needs_table:
        logger.warning("Scenario '%s' does not read a table; ignoring %s", scenario.name, args.table)

    overrides = {k: v for k, v in (("n_samples", args.samples),
                                   ("seed", args.seed),
                                   ("coverage", args.coverage)) if v is not None}
    try:
        settings = config.configure(config.Settings.from_env(), **overrides)
        logger.info("Scenario %s: %s (%d samples)", scenario.name, scenario.description,
                    settings.n_samples)

        table = load_sample_table(args.table) if scenario.needs_table else None
        result = compute_lift(scenario.conditions(table))

        print(LiftReport.generate(result, settings.coverage))
        if args.budget:
            print(LiftReport.budget_table(lift_budget(result), settings.coverage))
    except LiftError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
