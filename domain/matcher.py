"""
Traversal and match engine.

Walks a document (or a previously filtered result) depth-first in pre-order,
evaluates a FilterPattern on every element and collects the matches in
document order. A non-matching element is still descended into, and a
matching one is too, so nested matches are all reported.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Set, Union, overload

from opentelemetry import trace

from domain import extractors
from domain.errors import IndexOutOfRange
from domain.nodes import Element, Node
from domain.patterns import FilterPattern, PatternLike, normalize_pattern

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


class FilteredResult:
    """Ordered, read-only set of matched elements sharing the source tree."""

    def __init__(self, elements: Iterable[Element] = ()):
        self._elements: List[Element] = list(elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __bool__(self) -> bool:
        return bool(self._elements)

    @overload
    def __getitem__(self, index: int) -> Element: ...

    @overload
    def __getitem__(self, index: slice) -> "FilteredResult": ...

    def __getitem__(
        self, index: Union[int, slice]
    ) -> Union[Element, "FilteredResult"]:
        if isinstance(index, slice):
            return FilteredResult(self._elements[index])
        try:
            return self._elements[index]
        except IndexError:
            raise IndexOutOfRange(index, len(self._elements)) from None

    def filter(self, pattern: PatternLike) -> "FilteredResult":
        """Filter again, using every matched element as a scope."""
        return filter_nodes(self, pattern)

    def get_inner_markup(self) -> str:
        return extractors.get_inner_markup(self._elements)

    def get_outer_markup(self) -> str:
        return extractors.get_outer_markup(self._elements)

    def to_markup(self) -> str:
        return self.get_outer_markup()

    def get_text(self) -> str:
        return extractors.get_text(self._elements)

    def get_attr_value(self, name: str) -> str:
        """Concatenate the value of ``name`` across all matches."""
        return "".join(element.get_attr_value(name) for element in self._elements)

    def tag_names(self) -> List[str]:
        return [element.tag_name for element in self._elements]

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Summaries of the matches for JSON output."""
        return [
            {"tag_name": element.tag_name, "attributes": dict(element.attributes)}
            for element in self._elements
        ]

    def __repr__(self) -> str:
        return f"FilteredResult({self.tag_names()!r})"


Scope = Union[Node, FilteredResult]


def _walk(root: Node) -> Iterator[Element]:
    """Pre-order traversal yielding every element under and including ``root``."""
    if isinstance(root, Element):
        yield from root.iter_elements()


def filter_nodes(scope: Scope, pattern: PatternLike) -> FilteredResult:
    """
    Collect every element in ``scope`` that satisfies ``pattern``.

    Args:
        scope: A document, an element, or a previous FilteredResult
        pattern: Anything ``normalize_pattern`` accepts

    Returns:
        A FilteredResult in document order, possibly empty
    """
    predicate: FilterPattern = normalize_pattern(pattern)
    roots: Iterable[Node] = scope if isinstance(scope, FilteredResult) else [scope]

    with tracer.start_as_current_span("filter") as span:
        span.set_attribute("filter.pattern", repr(predicate))

        matches: List[Element] = []
        seen: Set[int] = set()
        for root in roots:
            for element in _walk(root):
                # Overlapping scopes from a chained filter share subtrees
                if id(element) in seen:
                    continue
                seen.add(id(element))
                if predicate.matches(element):
                    matches.append(element)

        span.set_attribute("filter.matches", len(matches))
        logger.debug("Filter %r matched %d elements", predicate, len(matches))
        return FilteredResult(matches)
