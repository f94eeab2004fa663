"""
Filter patterns.

Users describe what to look for with a bare tag name, a ``(tag, attr)`` pair
or a ``(tag, attr, value)`` triple. Each shape normalizes to a single
``FilterPattern`` whose fields are either a concrete string or ``None``
(wildcard). ``""`` and ``"*"`` are both accepted as wildcard markers.
"""

import logging
from typing import Dict, Optional, Sequence, Union

from domain.nodes import Element, Node

# Get logger for this module
logger = logging.getLogger(__name__)

WILDCARD = "*"

PatternLike = Union[str, Sequence[str], "FilterPattern"]


def _field(value: Optional[str], lower: bool = False) -> Optional[str]:
    """Map wildcard markers to ``None`` and optionally lowercase names."""
    if value is None or value == "" or value == WILDCARD:
        return None
    return value.lower() if lower else value


class FilterPattern:
    """Normalized tag/attribute/value predicate over a node."""

    __slots__ = ("tag", "attr_name", "attr_value")

    def __init__(
        self,
        tag: Optional[str] = None,
        attr_name: Optional[str] = None,
        attr_value: Optional[str] = None,
    ):
        self.tag = _field(tag, lower=True)
        self.attr_name = _field(attr_name, lower=True)
        self.attr_value = _field(attr_value)

    @classmethod
    def for_tag(cls, tag: str) -> "FilterPattern":
        """Pattern matching elements by tag name only."""
        return cls(tag)

    @classmethod
    def for_attribute(cls, tag: str, attr_name: str) -> "FilterPattern":
        """Pattern matching elements that carry ``attr_name``."""
        return cls(tag, attr_name)

    @classmethod
    def for_value(cls, tag: str, attr_name: str, attr_value: str) -> "FilterPattern":
        """
        Pattern matching elements whose attribute equals ``attr_value``.

        With a wildcard ``attr_name`` every attribute of the element is
        checked for the value.
        """
        return cls(tag, attr_name, attr_value)

    @property
    def is_match_all(self) -> bool:
        return self.tag is None and self.attr_name is None and self.attr_value is None

    def matches(self, node: Node) -> bool:
        """Evaluate the predicate. Text nodes never match."""
        if not isinstance(node, Element):
            return False

        if self.tag is not None and node.tag_name != self.tag:
            return False

        if self.attr_name is not None:
            if self.attr_name not in node.attributes:
                return False
            if self.attr_value is not None:
                return node.attributes[self.attr_name] == self.attr_value
            return True

        if self.attr_value is not None:
            # Attribute-name agnostic scan
            return any(value == self.attr_value for value in node.attributes.values())

        return True

    def to_tuple(self) -> tuple:
        return (self.tag, self.attr_name, self.attr_value)

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to dictionary representation."""
        return {"tag": self.tag, "attr_name": self.attr_name, "attr_value": self.attr_value}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FilterPattern) and other.to_tuple() == self.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __repr__(self) -> str:
        return (
            f"FilterPattern(tag={self.tag!r}, attr_name={self.attr_name!r}, "
            f"attr_value={self.attr_value!r})"
        )


def normalize_pattern(raw: PatternLike) -> FilterPattern:
    """
    Convert a user supplied filter description into a FilterPattern.

    Args:
        raw: A tag name, a 1-3 element tuple/list, or a FilterPattern

    Returns:
        The normalized FilterPattern

    Raises:
        TypeError: If ``raw`` is none of the accepted shapes
    """
    if isinstance(raw, FilterPattern):
        return raw
    if isinstance(raw, str):
        pattern = FilterPattern.for_tag(raw)
    elif isinstance(raw, (tuple, list)):
        if not 1 <= len(raw) <= 3 or not all(
            isinstance(part, str) or part is None for part in raw
        ):
            raise TypeError(
                f"filter pattern must hold 1 to 3 strings, got {raw!r}"
            )
        if len(raw) == 1:
            pattern = FilterPattern.for_tag(raw[0])
        elif len(raw) == 2:
            pattern = FilterPattern.for_attribute(raw[0], raw[1])
        else:
            pattern = FilterPattern.for_value(raw[0], raw[1], raw[2])
    else:
        raise TypeError(f"unsupported filter pattern type: {type(raw).__name__}")

    logger.debug("Normalized filter %r to %r", raw, pattern)
    return pattern
