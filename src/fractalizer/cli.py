"""CLI entrypoint for Fractalizer."""

import argparse
import json
import shutil
import sys
from pathlib import Path

from fractalizer.api.context import build_context
from fractalizer.api.export import RESOURCES, export_resource
from fractalizer.auth.policy import Viewer
from fractalizer.config.loader import DEFAULT_CONFIG_PATH, get_storage_path, load_config, load_config_or_default
from fractalizer.database.sqlite_client import session_context
from fractalizer.errors import FractalizerError
from fractalizer.runners.load_demo import main as load_demo_main
from fractalizer.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXAMPLE_CONFIG_PATH = Path("config/fractalizer.config.example.yaml")


def _load_cli_config(args: argparse.Namespace) -> dict:
    if args.config:
        return load_config(args.config)
    return load_config_or_default()


def cmd_init(args: argparse.Namespace) -> None:
    """Initialize fractalizer.config.yaml from the example file."""
    if not EXAMPLE_CONFIG_PATH.exists():
        logger.error(f"Example file not found: {EXAMPLE_CONFIG_PATH}")
        return

    if DEFAULT_CONFIG_PATH.exists() and not args.force:
        print(f"Skipped {DEFAULT_CONFIG_PATH} (already exists, use --force to overwrite)")
        return

    shutil.copy(EXAMPLE_CONFIG_PATH, DEFAULT_CONFIG_PATH)
    print(f"Created {DEFAULT_CONFIG_PATH}")
    print("  Next steps:")
    print("  1. Review and customize fractalizer.config.yaml")
    print("  2. Run: fractalizer seed")
    print("  3. Run: fractalizer posts --with author,comments.author")


def cmd_seed(args: argparse.Namespace) -> None:
    load_demo_main(args.fixture, _load_cli_config(args))


def cmd_resource(args: argparse.Namespace) -> None:
    """Print a resource envelope (single item when an ID is given, else one page)."""
    config = _load_cli_config(args)
    viewer = Viewer(user_id=args.viewer, is_admin=args.admin)
    ctx = build_context(config, viewer=viewer)

    with session_context(get_storage_path(config)) as session:
        output = export_resource(
            session,
            ctx,
            args.command,
            resource_id=args.id,
            includes=args.includes,
            page=args.page,
            per_page=args.per_page,
            out=args.out,
        )

    if output is None:
        print(f"{args.command[:-1].capitalize()} {args.id} not found", file=sys.stderr)
        sys.exit(1)
    print(output)


def _add_resource_parser(subparsers, name: str) -> None:
    resource_parser = subparsers.add_parser(name, help=f"Show {name} with optional includes")
    resource_parser.add_argument(
        "id",
        type=int,
        nargs="?",
        help=f"Single {name[:-1]} ID (if not provided, lists a page of {name})",
    )
    resource_parser.add_argument(
        "--with",
        dest="includes",
        type=str,
        help="Include selection, e.g. author,comments.author",
    )
    resource_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number for collections (default: 1)",
    )
    resource_parser.add_argument(
        "--per-page",
        type=int,
        help="Page size for collections (default: from config)",
    )
    resource_parser.add_argument(
        "--viewer",
        type=int,
        help="Render as this user ID (controls restricted fields)",
    )
    resource_parser.add_argument(
        "--admin",
        action="store_true",
        help="Render as an admin viewer",
    )
    resource_parser.add_argument(
        "--out",
        type=Path,
        help="Output file path (if not provided, prints to stdout)",
    )
    resource_parser.set_defaults(func=cmd_resource)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Fractalizer - API resources with on-demand includes")
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Config file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # init command
    init_parser = subparsers.add_parser("init", help="Create fractalizer.config.yaml from the example")
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing config file",
    )
    init_parser.set_defaults(func=cmd_init)

    # seed command
    seed_parser = subparsers.add_parser("seed", help="Load the demo blog into SQLite")
    seed_parser.add_argument(
        "--fixture",
        type=Path,
        help="Fixture YAML (default: demo.fixture from config)",
    )
    seed_parser.set_defaults(func=cmd_seed)

    # resource commands
    for name in RESOURCES:
        _add_resource_parser(subparsers, name)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except FractalizerError as e:
        if not e.client_error:
            logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
            raise
        logger.info(f"Rejected request: {e}")
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
