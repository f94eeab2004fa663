"""
Command-line interface adapter.

This module provides the CLI adapter that filters a local HTML file.
"""

import argparse
import logging
import os
from typing import List, Optional

from opentelemetry import trace

from adapters.cli_common import (
    add_filter_arguments,
    pattern_from_args,
    render_report,
    write_output,
)
from adapters.html_parser import BeautifulSoupParser
from application.scrape_service import ScrapeService
from domain.errors import IndexOutOfRange, ParseError
from domain.models import ExtractionMode

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure and return the argument parser."""
    parser = argparse.ArgumentParser(
        description="Filter a local HTML file and extract matching content."
    )
    parser.add_argument(
        "-in",
        "--input-file",
        dest="input_file",
        help="Path to the input HTML file",
        required=True,
    )
    add_filter_arguments(parser)
    return parser


class ExtractCLI:
    """Command-line interface for filtering local HTML files."""

    def __init__(self, service: Optional[ScrapeService] = None) -> None:
        self.parser = setup_argument_parser()
        if service is None:
            features = os.getenv("SITESCRAPER_PARSER", "lxml")
            self.service = ScrapeService(parser=BeautifulSoupParser(features))
        else:
            self.service = service

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the CLI application.

        Args:
            args: Optional arguments list (defaults to sys.argv)

        Returns:
            Exit code (0 for success, 1 for error)
        """
        with tracer.start_as_current_span("cli.run") as span:
            parsed_args = self.parser.parse_args(args)
            pattern = pattern_from_args(parsed_args)

            logger.debug(
                "CLI arguments: input_file=%s, pattern=%r, mode=%s, index=%s",
                parsed_args.input_file,
                pattern,
                parsed_args.mode,
                parsed_args.index,
            )
            span.set_attribute("input.file", parsed_args.input_file)
            span.set_attribute("filter.pattern", repr(pattern))
            if parsed_args.output_file:
                span.set_attribute("output.file", parsed_args.output_file)

            try:
                document = self.service.parse_file(parsed_args.input_file)
                report = self.service.scrape(
                    document,
                    pattern,
                    mode=ExtractionMode(parsed_args.mode),
                    index=parsed_args.index,
                    source=parsed_args.input_file,
                )
                write_output(
                    render_report(report, parsed_args.output_format),
                    parsed_args.output_file,
                )

                logger.info(
                    "Extracted %d matches from %s",
                    len(report.matches),
                    parsed_args.input_file,
                )
                span.set_attribute("success", True)
                span.set_attribute("exit_code", 0)
                return 0

            except FileNotFoundError:
                logger.error("Input file '%s' not found", parsed_args.input_file)
                span.set_attribute("success", False)
                span.set_attribute("error.type", "FileNotFoundError")
                span.set_attribute("exit_code", 1)
                return 1
            except (ParseError, IndexOutOfRange) as e:
                logger.error("%s: %s", type(e).__name__, e)
                span.set_attribute("success", False)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                span.set_attribute("exit_code", 1)
                return 1
            except OSError as e:
                logger.error("I/O error: %s", e)
                span.set_attribute("success", False)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                span.set_attribute("exit_code", 1)
                return 1
