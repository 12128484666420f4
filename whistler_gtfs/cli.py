"""Command-line interface for whistler-gtfs."""

import argparse
import json
import logging
import sys

from whistler_gtfs.api import ON_MISMATCH_CHOICES, check_rules, load_rules, transform
from whistler_gtfs.errors import RuleMismatchError, RuleTableError
from whistler_gtfs.gtfs.models import TransformConfig
from whistler_gtfs.version import VERSION


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def read_service_ids(path: str) -> set[str]:
    """Read one service id per line, ignoring blank lines."""
    with open(path, encoding="utf-8") as f:
        return {line.strip() for line in f if line.strip()}


def cmd_transform(args: argparse.Namespace) -> int:
    """Execute transform command."""
    setup_logging(args.verbose)

    try:
        config = TransformConfig(
            input_path=args.input,
            rules_path=args.rules,
            service_ids=read_service_ids(args.service_ids) if args.service_ids else None,
            on_mismatch=args.on_mismatch,
        )
        result = transform(args.input, config)
    except RuleMismatchError as e:
        print(f"Rule mismatch: {e}", file=sys.stderr)
        print("The feed changed, update the rule table.", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Transform failed")
        return 1

    print(f"\nStats: {result.report.stats}")
    if result.report.mismatches:
        print(f"\nTransform finished with {len(result.report.mismatches)} rule mismatches:")
        for mismatch in result.report.mismatches:
            print(f"  - {mismatch}")
        return 1

    print("\nTransform successful!")
    return 0


def cmd_check_rules(args: argparse.Namespace) -> int:
    """Execute check-rules command."""
    setup_logging(args.verbose)

    try:
        codes = check_rules(args.rules)
    except (OSError, RuleTableError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\nRule table valid!")
    print(f"Route codes: {', '.join(str(code) for code in codes)}")
    return 0


def cmd_dump_rules(args: argparse.Namespace) -> int:
    """Execute dump-rules command."""
    try:
        table = load_rules(args.rules)
    except (OSError, RuleTableError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(table.to_dict(), indent=2))
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="whistler-gtfs",
        description="Apply Whistler Transit System bus rules to a GTFS feed",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Transform command
    transform_parser = subparsers.add_parser("transform", help="Normalize routes, trips and stops")
    transform_parser.add_argument("--input", required=True, help="Path to GTFS directory")
    transform_parser.add_argument(
        "--rules", default=None, help="Rule table JSON file (default: packaged Whistler table)"
    )
    transform_parser.add_argument(
        "--service-ids",
        default=None,
        help="File with one useful service id per line (default: keep all services)",
    )
    transform_parser.add_argument(
        "--on-mismatch",
        choices=ON_MISMATCH_CHOICES,
        default="halt",
        help="Stop at the first uncovered value or skip and report it (default: halt)",
    )
    transform_parser.set_defaults(func=cmd_transform)

    # Check-rules command
    check_parser = subparsers.add_parser("check-rules", help="Validate a rule table")
    check_parser.add_argument("--rules", default=None, help="Rule table JSON file")
    check_parser.set_defaults(func=cmd_check_rules)

    # Dump-rules command
    dump_parser = subparsers.add_parser("dump-rules", help="Print a rule table as JSON")
    dump_parser.add_argument("--rules", default=None, help="Rule table JSON file")
    dump_parser.set_defaults(func=cmd_dump_rules)

    # Parse and execute
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
