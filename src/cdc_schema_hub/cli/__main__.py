"""
Unified CLI entry point for CDC Schema Hub.

Usage:
    python -m cdc_schema_hub.cli <command> [options]

Available commands:
    show         - Print derived key/value schemas for tables
    register     - Register key/value schemas for tables with the registry
    get          - Fetch the key or value schema registered for a topic
"""

import argparse
import sys
from typing import List, Optional

from cdc_schema_hub.cli.schemas import (
    add_common_arguments,
    add_table_arguments,
    run_get,
    run_register,
    run_show,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdc_schema_hub.cli",
        description="CDC Schema Hub CLI - derive and register CDC event schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cdc_schema_hub.cli show --tables-file config/tables.yml
  python -m cdc_schema_hub.cli register --tables-file config/tables.yml --table shop.orders
  python -m cdc_schema_hub.cli get --topic shop.orders --key
        """,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print derived schemas",
        description="Derive key and value schemas without contacting the registry",
    )
    add_common_arguments(show_parser)
    add_table_arguments(show_parser)

    register_parser = subparsers.add_parser(
        "register",
        help="Register schemas with the registry",
        description="Derive and register key and value schemas for tables",
    )
    add_common_arguments(register_parser)
    add_table_arguments(register_parser)

    get_parser = subparsers.add_parser(
        "get",
        help="Fetch a registered schema",
        description="Fetch the latest key or value schema registered for a topic",
    )
    add_common_arguments(get_parser)
    get_parser.add_argument("--topic", required=True, help="Topic name")
    part = get_parser.add_mutually_exclusive_group()
    part.add_argument("--key", action="store_true", help="Fetch the key schema")
    part.add_argument(
        "--value", action="store_true", help="Fetch the value schema (default)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "show":
        return run_show(args)
    elif args.command == "register":
        return run_register(args)
    elif args.command == "get":
        return run_get(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
