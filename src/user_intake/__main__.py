"""CLI entry point — ``python -m user_intake``."""

from __future__ import annotations

import argparse
import sys

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError as ConfigError

load_dotenv()

import user_intake.sources  # noqa: F401

from user_intake.config import load_config
from user_intake.engine import IntakeEngine
from user_intake.errors import IntakeError
from user_intake.registry import get_source, list_registered

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_CONFIG = 2


def _print_sources() -> None:
    """Print all registered input sources."""
    print("\nSOURCES")
    print("-------")
    sources = list_registered()
    if not sources:
        print("  (none)")
    for key, class_name in sources.items():
        print(f"  {key:30s} {class_name}")
    print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="user-intake",
        description="Validate one user record and store it in the users table.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to an intake YAML config file (environment variables override it).",
    )
    parser.add_argument(
        "-s", "--source",
        help="Input source key, e.g. 'console' or 'json_file'. Overrides the config.",
    )
    parser.add_argument(
        "-i", "--input",
        help="Input file for file-based sources (sets file_path).",
    )
    parser.add_argument(
        "-l", "--list-sources",
        action="store_true",
        default=False,
        help="List all registered input sources, then exit.",
    )

    args = parser.parse_args(argv)

    if args.list_sources:
        _print_sources()
        return EXIT_OK

    try:
        config = load_config(args.config)
    except (ConfigError, yaml.YAMLError, ValueError, OSError) as exc:
        print(f"Error: invalid configuration: {exc}")
        return EXIT_BAD_CONFIG

    if args.source is not None:
        config.source.kind = args.source
    if args.input is not None:
        config.source.inline_config["file_path"] = args.input

    try:
        get_source(config.source.kind)
    except KeyError as exc:
        print(f"Error: {exc.args[0]}")
        return EXIT_FAILURE

    try:
        IntakeEngine(config).run()
    except IntakeError as exc:
        print(f"Error: {exc}")
        return EXIT_FAILURE
    except (ValueError, OSError) as exc:  # unreadable input file
        print(f"Error: {exc}")
        return EXIT_FAILURE

    print("User data saved successfully!")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
