"""
Main entry point for PIOSI.

Two commands are available:

- ``play`` runs the campaign from a catalog level, or a suite of levels
  generated from a seed, with a party picked from the hero roster.
- ``summit`` runs the Summit Mode battle royale over the whole roster.
"""

import argparse
import logging
import random
import time
from collections.abc import Sequence
from pathlib import Path

from piosi.combat.engine import EngineSettings
from piosi.core.constants import (
    COLLAPSE_DELAY,
    PACING_DELAY,
    SUMMIT_DEFAULT_HP,
    SUMMIT_MAP_SIZE,
    SUMMIT_ROUND_INTERVAL,
)
from piosi.core.logging import log_error, setup_logging
from piosi.core.scheduler import ManualScheduler
from piosi.core.utils import cprint, crule
from piosi.levels.catalog import get_level
from piosi.levels.session import GameSession
from piosi.summit.summit_mode import SummitMode
from piosi.ui.cli_interface import PlayerInterface, run_summit
from piosi.units.roster import load_roster, select_heroes

DEFAULT_PARTY = ("Knight", "Archer", "Cleric")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="piosi", description="PIOSI grid tactics.")
    parser.add_argument("--roster", type=Path, default=None, help="Hero roster JSON file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    play = commands.add_parser("play", help="Play the campaign.")
    source = play.add_mutually_exclusive_group()
    source.add_argument("--level", type=int, default=1, help="Catalog level to start from.")
    source.add_argument("--seed", type=int, default=None, help="Play 25 levels generated from a seed.")
    play.add_argument(
        "--heroes",
        default=",".join(DEFAULT_PARTY),
        help="Comma separated hero names.",
    )
    play.add_argument("--pacing-delay", type=float, default=PACING_DELAY)
    play.add_argument("--collapse-delay", type=float, default=COLLAPSE_DELAY)

    summit = commands.add_parser("summit", help="Run the Summit Mode battle royale.")
    summit.add_argument("--map-size", type=int, default=SUMMIT_MAP_SIZE)
    summit.add_argument("--interval", type=float, default=SUMMIT_ROUND_INTERVAL)
    summit.add_argument("--default-hp", type=int, default=SUMMIT_DEFAULT_HP)
    summit.add_argument("--max-rounds", type=int, default=1000)
    summit.add_argument("--rng-seed", type=int, default=None, help="Seed of the placement RNG.")
    return parser


def play(args: argparse.Namespace) -> int:
    roster = load_roster(args.roster)
    party = select_heroes(roster, [name.strip() for name in args.heroes.split(",") if name.strip()])
    if not party:
        log_error("No valid hero selected.", {"heroes": args.heroes})
        return 1
    scheduler = ManualScheduler(sleep=time.sleep)
    settings = EngineSettings(pacing_delay=args.pacing_delay, collapse_delay=args.collapse_delay)
    if args.seed is not None:
        game = GameSession.from_seed(party, args.seed, scheduler=scheduler, settings=settings)
    else:
        if get_level(args.level) is None:
            log_error(f"Unknown level {args.level}.", {"level": args.level})
            return 1
        game = GameSession.from_catalog(party, args.level, scheduler=scheduler, settings=settings)
    crule("PIOSI", style="bold green")
    try:
        PlayerInterface(game, scheduler).run()
    except (KeyboardInterrupt, EOFError):
        cprint("")
        crule("Run interrupted", style="bold red")
    return 0


def summit(args: argparse.Namespace) -> int:
    scheduler = ManualScheduler(sleep=time.sleep)
    rng = random.Random(args.rng_seed)
    simulation = SummitMode(
        roster=load_roster(args.roster),
        log=cprint,
        scheduler=scheduler,
        rng=rng,
        map_size=args.map_size,
        round_interval=args.interval,
        default_hp=args.default_hp,
    )
    try:
        run_summit(simulation, scheduler, args.max_rounds)
    except KeyboardInterrupt:
        simulation.stop()
        crule("Summit interrupted", style="bold red")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    if args.command == "summit":
        return summit(args)
    return play(args)


if __name__ == "__main__":
    raise SystemExit(main())
