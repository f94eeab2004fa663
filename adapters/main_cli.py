import argparse
import sys

from infrastructure.logging import setup_logger
from infrastructure.telemetry import setup_opentelemetry

from adapters.extract_cli import ExtractCLI
from adapters.fetch_cli import FetchCLI


def main() -> int:
    """
    Unified entry point for the `sitescraper` command.

    Subcommands:
        extract   – Filter a local HTML file.
        fetch     – Fetch a URL and filter the page.
    """
    # Setup shared infrastructure
    setup_logger()
    setup_opentelemetry()

    # Top‑level parser only defines subcommands; each subcommand parses its own arguments.
    parser = argparse.ArgumentParser(
        prog="sitescraper", description="Filter HTML documents and extract content"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("extract", help="Filter a local HTML file", add_help=False)
    subparsers.add_parser("fetch", help="Fetch a URL and filter the page", add_help=False)

    # Parse only the subcommand name; the remaining args are passed through.
    args, remaining = parser.parse_known_args()

    if args.command == "extract":
        return ExtractCLI().run(remaining)
    elif args.command == "fetch":
        return FetchCLI().run(remaining)
    else:
        parser.error(f"Unknown subcommand: {args.command}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
