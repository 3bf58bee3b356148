"""Command-line interface for inspecting and checking weapon tables."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from arsenal.data.errors import DataError
from arsenal.data.repositories import WeaponsRepository
from arsenal.presentation.cli.config import get_default_config_path, load_config, save_config
from arsenal.presentation.cli.render import format_weapon_details, format_weapon_row

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arsenal", description="Inspect and validate weapon definition tables.")
    parser.add_argument(
        "--definitions",
        default=None,
        help="Directory containing weapons.ron (overrides config and ARSENAL_DEFINITIONS_PATH).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Config file to read (default: {get_default_config_path()}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log loader activity.")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List weapon identifiers.")
    show = commands.add_parser("show", help="Show one weapon definition.")
    show.add_argument("weapon_id")
    check = commands.add_parser("check", help="Validate a weapon table and exit non-zero on errors.")
    check.add_argument("file", nargs="?", default=None)
    fmt = commands.add_parser("fmt", help="Print a weapon table in canonical form.")
    fmt.add_argument("file", nargs="?", default=None)
    fmt.add_argument("--write", action="store_true", help="Rewrite the file in place instead of printing.")
    config = commands.add_parser("config", help="Show or update the persisted CLI config.")
    config.add_argument("--set-definitions-path", default=None, help="Persist the definitions directory.")
    config.add_argument("--set-log-level", default=None, help="Persist the log level (DEBUG, INFO, WARNING, ERROR).")
    return parser


def _configure_logging(verbose: bool, level_name: str) -> None:
    level = logging.INFO if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_repository(file: str | None, definitions: str | None) -> WeaponsRepository:
    if file is not None:
        return WeaponsRepository.from_file(file)
    return WeaponsRepository(base_path=definitions)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = _build_parser().parse_args(argv)
    config = load_config(Path(args.config) if args.config else None)
    _configure_logging(args.verbose, config["log_level"])
    definitions = args.definitions or config["definitions_path"] or None

    if args.command == "config":
        return _run_config(args, config)

    try:
        if args.command == "list":
            repo = _build_repository(None, definitions)
            for weapon in repo.all():
                print(format_weapon_row(weapon))
        elif args.command == "show":
            repo = _build_repository(None, definitions)
            for line in format_weapon_details(repo.get(args.weapon_id)):
                print(line)
        elif args.command == "check":
            repo = _build_repository(args.file, definitions)
            print(f"OK: {len(repo)} weapons")
        elif args.command == "fmt":
            repo = _build_repository(args.file, definitions)
            text = repo.to_ron()
            if args.write:
                target = repo.file_path
                target.write_text(text, encoding="utf-8")
                logger.info("Rewrote %s", target)
            else:
                sys.stdout.write(text)
    except DataError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def _run_config(args: argparse.Namespace, config: dict[str, str]) -> int:
    config_path = Path(args.config) if args.config else get_default_config_path()
    if args.set_definitions_path is not None or args.set_log_level is not None:
        if args.set_definitions_path is not None:
            config["definitions_path"] = args.set_definitions_path
        if args.set_log_level is not None:
            config["log_level"] = args.set_log_level
        save_config(config, config_path)
        config = load_config(config_path)
        logger.info("Saved config to %s", config_path)
    for key in sorted(config):
        print(f"{key}: {config[key]}")
    return 0
