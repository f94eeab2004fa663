"""
HTML parser adapter.

Builds the domain document tree from raw markup using BeautifulSoup. Comments,
doctype declarations and other non-content strings are dropped; everything
else becomes an Element or a Text node.
"""

import logging
from typing import List, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from opentelemetry import trace

from domain.errors import ParseError
from domain.nodes import Document, Element, Text

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


class BeautifulSoupParser:
    """Parse markup into a Document using a BeautifulSoup tree builder."""

    def __init__(self, features: str = "lxml") -> None:
        self.features = features

    def parse(self, raw_markup: Union[bytes, str]) -> Document:
        """
        Parse raw markup.

        Args:
            raw_markup: HTML as bytes (encoding is sniffed) or text

        Returns:
            The synthetic Document root of the parsed tree

        Raises:
            ParseError: If the input is empty or contains no markup
        """
        with tracer.start_as_current_span("parse_html") as span:
            self._validate(raw_markup)
            span.set_attribute("html.content_length", len(raw_markup))
            span.set_attribute("html.parser", self.features)

            soup = BeautifulSoup(
                raw_markup, self.features, multi_valued_attributes=None
            )
            document = self._convert(soup)

            logger.debug(
                "Parsed %d chars into %d top-level nodes",
                len(raw_markup),
                len(document.children),
            )
            return document

    def _validate(self, raw_markup: Union[bytes, str]) -> None:
        if isinstance(raw_markup, bytes):
            opening, closing = b"<", b">"
        elif isinstance(raw_markup, str):
            opening, closing = "<", ">"
        else:
            raise ParseError(
                f"cannot parse input of type {type(raw_markup).__name__}"
            )

        if not raw_markup.strip():
            raise ParseError("cannot parse empty input")
        if opening not in raw_markup or closing not in raw_markup:
            raise ParseError("input does not contain any markup")

    def _convert(self, soup: BeautifulSoup) -> Document:
        """Copy the soup into domain nodes without recursion."""
        document = Document()
        pending: List[Tuple[Tag, Element]] = [(soup, document)]
        while pending:
            source, target = pending.pop()
            for child in source.children:
                if isinstance(child, Tag):
                    element = Element(child.name, self._attributes(child))
                    target.append(element)
                    pending.append((child, element))
                elif isinstance(child, PreformattedString):
                    # Comment, Doctype, CData, Declaration, ProcessingInstruction
                    continue
                elif isinstance(child, NavigableString):
                    target.append(Text(str(child)))
        return document

    def _attributes(self, tag: Tag) -> dict:
        attributes = {}
        for name, value in tag.attrs.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attributes[name] = "" if value is None else str(value)
        return attributes
