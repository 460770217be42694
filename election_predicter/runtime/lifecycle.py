from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from election_predicter.candidates.predicter import ElectionPredicter
from election_predicter.config.loader import PROFILES, load_app_config
from election_predicter.config.model import AppConfig, log_level_names
from election_predicter.core.errors import ConfigError
from election_predicter.observability.logging import configure_logging


logger = logging.getLogger(__name__)

_COMMANDS = {"run", "list", "print-config"}

# Global options that consume the following token as their value.
_VALUE_OPTIONS = {"--log-level", "--config", "--profile"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="election-predicter",
        description="Print election predictions from candidate metadata",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=log_level_names(),
        metavar="LEVEL",
        help="Logging level (e.g. DEBUG, INFO, WARNING); overrides logging.level from config",
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config file (skips profile resolution)",
    )
    group.add_argument(
        "--profile",
        choices=list(PROFILES),
        default="app",
        help="Config profile under ./configs (app loads app.yaml; dev overlays dev.yaml)",
    )

    sub = parser.add_subparsers(dest="command")

    run_p = sub.add_parser("run", help="Run every prediction method in name order")
    run_p.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any prediction method failed",
    )
    run_p.set_defaults(command="run")

    list_p = sub.add_parser("list", help="List prediction methods and their candidates")
    list_p.set_defaults(command="list")

    print_p = sub.add_parser("print-config", help="Load and print the effective config")
    print_p.set_defaults(command="print-config")

    return parser


def _with_default_command(argv: list[str]) -> list[str]:
    """Insert `run` after the global options when no subcommand is given."""

    i = 0
    while i < len(argv):
        token = argv[i]
        if token in {"-h", "--help"}:
            return argv
        if token in _VALUE_OPTIONS:
            i += 2
        elif token.split("=", 1)[0] in _VALUE_OPTIONS:
            i += 1
        else:
            break

    if i < len(argv) and argv[i] in _COMMANDS:
        return argv
    return [*argv[:i], "run", *argv[i:]]


def _load_app_config(ns: argparse.Namespace) -> AppConfig:
    cfg, config_paths = load_app_config(config_path=ns.config, profile=ns.profile)
    if config_paths:
        logger.info("config_loaded", extra={"config_files": [str(p) for p in config_paths]})
    else:
        logger.info("config_defaults", extra={"profile": ns.profile})
    return cfg


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint referenced by pyproject.toml."""

    argv_list = _with_default_command(list(argv) if argv is not None else sys.argv[1:])

    parser = _build_parser()

    try:
        ns = parser.parse_args(argv_list)
    except SystemExit as e:
        # argparse has already printed help/usage.
        code = e.code
        return int(code) if isinstance(code, int) else 1

    try:
        configure_logging(level=ns.log_level or "INFO")
        cfg = _load_app_config(ns)
        configure_logging(level=ns.log_level or cfg.logging.level, fmt=cfg.logging.format)

        if ns.command == "print-config":
            sys.stdout.write(json.dumps(cfg.to_dict(), ensure_ascii=False, indent=2))
            sys.stdout.write("\n")
            return 0

        predicter = ElectionPredicter(method_prefix=cfg.predicter.method_prefix, out=sys.stdout)

        if ns.command == "list":
            listing = [
                {"method": m.__name__, **predicter.registry.get(m.__name__).to_dict()}
                for m in predicter.annotated_methods()
            ]
            sys.stdout.write(json.dumps(listing, ensure_ascii=False, indent=2))
            sys.stdout.write("\n")
            return 0

        results = predicter.predict_results()
        if ns.strict and not all(r.ok for r in results):
            return 1
        return 0

    except ConfigError as e:
        logger.error("config_error", extra={"error": str(e)})
        sys.stderr.write(f"ConfigError: {e}\n")
        return 2
    except Exception as e:  # noqa: BLE001
        logger.exception("fatal_error")
        sys.stderr.write(f"Fatal error: {e}\n")
        return 1
