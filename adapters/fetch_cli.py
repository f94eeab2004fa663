import argparse
import logging
import os
from typing import List, Optional

from opentelemetry import trace

from adapters.cli_common import (
    add_filter_arguments,
    env_int,
    pattern_from_args,
    render_report,
    write_output,
)
from adapters.html_parser import BeautifulSoupParser
from adapters.http_client import HTTPClientAdapter
from application.scrape_service import ScrapeService
from domain.errors import FetchError, IndexOutOfRange, ParseError
from domain.models import ExtractionMode

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Fetch a URL, filter the page and extract matching content"
    )
    parser.add_argument("url", help="URL to fetch")
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Request timeout in seconds (default: $SITESCRAPER_HTTP_TIMEOUT or 30)",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=None,
        help="Retries after a failed request (default: $SITESCRAPER_HTTP_MAX_RETRIES or 3)",
    )
    parser.add_argument(
        "--insecure", action="store_true", help="Skip TLS certificate verification"
    )
    add_filter_arguments(parser)
    return parser


class FetchCLI:
    """CLI for scraping remote pages."""

    def __init__(self, service: Optional[ScrapeService] = None) -> None:
        self.parser = setup_argument_parser()
        self.service = service

    def _build_service(self, parsed_args: argparse.Namespace) -> ScrapeService:
        timeout = (
            parsed_args.timeout
            if parsed_args.timeout is not None
            else env_int("SITESCRAPER_HTTP_TIMEOUT", 30)
        )
        max_retries = (
            parsed_args.max_retries
            if parsed_args.max_retries is not None
            else env_int("SITESCRAPER_HTTP_MAX_RETRIES", 3)
        )
        http_client = HTTPClientAdapter(
            timeout=timeout,
            max_retries=max_retries,
            user_agent=os.getenv("SITESCRAPER_USER_AGENT", "sitescraper/1.0"),
            verify_ssl=not parsed_args.insecure,
        )
        parser = BeautifulSoupParser(os.getenv("SITESCRAPER_PARSER", "lxml"))
        return ScrapeService(parser=parser, fetcher=http_client)

    def run(self, args: Optional[List[str]] = None) -> int:
        """Execute the CLI command."""
        with tracer.start_as_current_span("cli.run") as span:
            parsed_args = self.parser.parse_args(args)
            pattern = pattern_from_args(parsed_args)

            logger.debug("Parsed CLI arguments: %s", parsed_args)
            span.set_attribute("cli.url", parsed_args.url)
            span.set_attribute("cli.mode", parsed_args.mode)
            span.set_attribute("filter.pattern", repr(pattern))

            service = self.service or self._build_service(parsed_args)

            try:
                document = service.fetch_document(parsed_args.url)
                report = service.scrape(
                    document,
                    pattern,
                    mode=ExtractionMode(parsed_args.mode),
                    index=parsed_args.index,
                    source=parsed_args.url,
                )
                write_output(
                    render_report(report, parsed_args.output_format),
                    parsed_args.output_file,
                )

                span.set_attribute("scrape.matches", len(report.matches))
                logger.info(
                    "Extracted %d matches from %s", len(report.matches), parsed_args.url
                )
                return 0

            except (FetchError, ParseError, IndexOutOfRange) as e:
                logger.error("Scrape failed: %s", e)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                span.set_attribute("success", False)
                span.set_attribute("exit_code", 1)
                return 1
            except OSError as e:
                logger.error("Could not write output: %s", e)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                span.set_attribute("success", False)
                span.set_attribute("exit_code", 1)
                return 1
