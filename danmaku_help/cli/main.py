"""CLI entry point for the danmaku help registry."""

import argparse
import logging
import sys

from danmaku_help import __version__
from danmaku_help.lib.config import get_settings
from danmaku_help.lib.exceptions import (
    HelpError,
    ConfigError,
    NotFoundError,
    ValidationError,
    PersistenceError,
)
from danmaku_help.services.forum import ForumSeeder, create_forum_store
from danmaku_help.services.help import (
    HelpRegistry,
    export_payload,
    get_registry,
    load_registry,
)

# Exit codes per CLI contract
EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_NOT_FOUND = 4
EXIT_INTERNAL_ERROR = 5


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="danmaku-help",
        description="Browse the danmaku scripting manuals and seed them into the forum",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  danmaku-help categories
  danmaku-help show mathFunctions
  danmaku-help entry specialKeywords repeat
  danmaku-help export ./help_content.json
  danmaku-help seed --db ./forum.db
        """,
    )

    parser.add_argument(
        "--content",
        type=str,
        default=None,
        help="JSON payload to load instead of the bundled help content",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress",
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser("categories", help="List help categories")

    show = subparsers.add_parser("show", help="List the entries of a category")
    show.add_argument("category", help="Category id, e.g. danmakuHelpers")

    entry = subparsers.add_parser("entry", help="Print one entry's content")
    entry.add_argument("category", help="Category id")
    entry.add_argument("name", help="Entry name")

    export = subparsers.add_parser("export", help="Write the help payload as JSON")
    export.add_argument("output", help="Destination file")

    seed = subparsers.add_parser("seed", help="Seed the forum manual sections")
    seed.add_argument(
        "--db",
        type=str,
        default=None,
        help="SQLite forum database (default: HELP_FORUM_DB)",
    )

    return parser


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.WARNING
    format_str = "[%(asctime)s] %(levelname)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _resolve_registry(args: argparse.Namespace) -> HelpRegistry:
    if args.content:
        return load_registry(args.content)
    return get_registry()


def _cmd_categories(registry: HelpRegistry, args: argparse.Namespace) -> int:
    for category_id in registry.list_categories():
        print(f"{category_id:<28} {len(registry.get_category(category_id))}")
    return EXIT_SUCCESS


def _cmd_show(registry: HelpRegistry, args: argparse.Namespace) -> int:
    for entry in registry.get_category(args.category):
        print(entry.display_title)
    return EXIT_SUCCESS


def _cmd_entry(registry: HelpRegistry, args: argparse.Namespace) -> int:
    entry = registry.find_entry(args.category, args.name)
    print(entry.display_title)
    print()
    print(registry.render(entry))
    return EXIT_SUCCESS


def _cmd_export(registry: HelpRegistry, args: argparse.Namespace) -> int:
    path = export_payload(registry, args.output)
    print(f"Exported {len(registry)} categories to {path}")
    return EXIT_SUCCESS


def _cmd_seed(registry: HelpRegistry, args: argparse.Namespace) -> int:
    settings = get_settings()
    db_path = args.db or settings.require_forum_db()

    seeder = ForumSeeder(
        registry=registry,
        store=create_forum_store(db_path),
        author=settings.system_author,
    )
    report = seeder.seed()

    for section in report.sections:
        print(
            f"  {section.section:<20} created={section.created} "
            f"updated={section.updated} unchanged={section.unchanged} "
            f"skipped={section.skipped}"
        )
    print(
        f"Seeded {len(report.sections)} sections: "
        f"{report.created} created, {report.updated} updated"
    )
    return EXIT_SUCCESS


COMMANDS = {
    "categories": _cmd_categories,
    "show": _cmd_show,
    "entry": _cmd_entry,
    "export": _cmd_export,
    "seed": _cmd_seed,
}


def run(args: argparse.Namespace) -> int:
    """
    Run a CLI command with the given arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    handler = COMMANDS.get(args.command)
    if handler is None:
        print("Error: No command given. Use --help to list commands.", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        registry = _resolve_registry(args)
        return handler(registry, args)

    except NotFoundError as e:
        print(f"Not found (404): {e.message}", file=sys.stderr)
        return EXIT_NOT_FOUND

    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    except ValidationError as e:
        print(f"Error: Invalid help content: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    except PersistenceError as e:
        print(f"Error: Storage error: {e.message}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR

    except HelpError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR

    except Exception as e:
        print(f"Error: Unexpected error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose or get_settings().verbose)

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
