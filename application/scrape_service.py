"""
Application services for scraping.

This module orchestrates the parse and fetch collaborators with the domain
filter engine and content extractor.
"""

import logging
from typing import List, Optional, Protocol, Union

from opentelemetry import trace

from domain import extractors
from domain.errors import FetchError, ParseError
from domain.matcher import FilteredResult, Scope, filter_nodes
from domain.models import ExtractionMode, MatchRecord, ScrapeReport
from domain.nodes import Document, Element
from domain.patterns import PatternLike, normalize_pattern

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


class HtmlParser(Protocol):
    """Turns raw markup into a document tree."""

    def parse(self, raw_markup: Union[bytes, str]) -> Document: ...


class Fetcher(Protocol):
    """Retrieves raw markup from a URL."""

    def fetch(self, url: str) -> bytes: ...


_EXTRACTORS = {
    ExtractionMode.TEXT: extractors.get_text,
    ExtractionMode.MARKUP: extractors.get_inner_markup,
    ExtractionMode.OUTER: extractors.get_outer_markup,
}


class ScrapeService:
    """Service for filtering parsed documents and extracting their content."""

    def __init__(self, parser: HtmlParser, fetcher: Optional[Fetcher] = None) -> None:
        self.parser = parser
        self.fetcher = fetcher

    def parse_html(self, raw_markup: Union[bytes, str]) -> Document:
        """
        Parse markup into a document.

        Raises:
            ParseError: Propagated unchanged from the parser
        """
        with tracer.start_as_current_span("parse_document") as span:
            try:
                document = self.parser.parse(raw_markup)
            except ParseError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.message", str(e))
                raise
            span.set_attribute("html.content_length", len(raw_markup))
            return document

    def parse_file(self, file_path: str) -> Document:
        """
        Read and parse an HTML file.

        Args:
            file_path: Path to the HTML file

        Returns:
            The parsed Document

        Raises:
            FileNotFoundError: If the file doesn't exist
            OSError: If the file can't be read (directory, permissions)
            ParseError: If the file holds no markup
        """
        with tracer.start_as_current_span("read_html_file") as span:
            span.set_attribute("file.path", file_path)
            logger.debug("Reading HTML file: %s", file_path)

            try:
                with open(file_path, "rb") as f:
                    raw_markup = f.read()
            except FileNotFoundError:
                span.set_attribute("error", True)
                span.set_attribute("error.type", "FileNotFoundError")
                raise
            except OSError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                logger.error("Error reading file %s: %s", file_path, e)
                raise

            span.set_attribute("file.size_bytes", len(raw_markup))
            return self.parse_html(raw_markup)

    def fetch_document(self, url: str) -> Document:
        """
        Fetch a URL and parse the response body.

        Raises:
            FetchError: Propagated unchanged from the fetcher
            ParseError: If the body holds no markup
        """
        if self.fetcher is None:
            raise FetchError(url, "no fetcher configured")

        with tracer.start_as_current_span("fetch_document") as span:
            span.set_attribute("url", url)
            try:
                raw_markup = self.fetcher.fetch(url)
            except FetchError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.message", str(e))
                raise

            logger.info("Fetched %d bytes from %s", len(raw_markup), url)
            return self.parse_html(raw_markup)

    def filter(self, scope: Scope, pattern: PatternLike) -> FilteredResult:
        """Filter a document, element or previous result."""
        return filter_nodes(scope, pattern)

    def scrape(
        self,
        scope: Scope,
        pattern: PatternLike,
        mode: ExtractionMode = ExtractionMode.TEXT,
        index: Optional[int] = None,
        source: str = "<document>",
    ) -> ScrapeReport:
        """
        Filter ``scope`` and extract the requested content from each match.

        Args:
            scope: Document, element or previous result to search
            pattern: Anything the pattern normalizer accepts
            mode: Which extraction to run on every match
            index: When given, only this match is extracted
            source: Label stored on the report (file path or URL)

        Returns:
            A ScrapeReport with one MatchRecord per extracted match

        Raises:
            IndexOutOfRange: If ``index`` is outside the result
        """
        normalized = normalize_pattern(pattern)
        with tracer.start_as_current_span("scrape") as span:
            span.set_attribute("scrape.mode", mode.value)
            result = filter_nodes(scope, normalized)

            selected: List[tuple] = []
            if index is None:
                selected = list(enumerate(result))
            else:
                span.set_attribute("scrape.index", index)
                element = result[index]
                position = index if index >= 0 else len(result) + index
                selected = [(position, element)]

            extract = _EXTRACTORS[mode]
            matches = [
                self._record(position, element, extract(element))
                for position, element in selected
            ]

            span.set_attribute("scrape.matches", len(matches))
            logger.info(
                "Extracted %d of %d matches for %r", len(matches), len(result), normalized
            )
            return ScrapeReport(
                source=source,
                pattern=normalized.to_dict(),
                mode=mode,
                matches=matches,
            )

    def _record(self, position: int, element: Element, content: str) -> MatchRecord:
        return MatchRecord(
            index=position,
            tag_name=element.tag_name,
            attributes=element.attributes,
            content=content,
        )
