"""
Domain models for scrape output.

This module contains the records produced when a filtered result is turned
into user-facing output.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ExtractionMode(Enum):
    """What to extract from each matched element."""

    TEXT = "text"
    MARKUP = "markup"
    OUTER = "outer"


class MatchRecord:
    """Domain model representing one extracted match."""

    def __init__(
        self,
        index: int,
        tag_name: str,
        attributes: Optional[Dict[str, str]] = None,
        content: str = "",
    ):
        self.index = index
        self.tag_name = tag_name
        self.attributes = attributes or {}
        self.content = content

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "index": self.index,
            "tag_name": self.tag_name,
            "attributes": dict(self.attributes),
            "content": self.content,
        }

    def __repr__(self) -> str:
        return f"MatchRecord(index={self.index}, tag_name={self.tag_name})"


class ScrapeReport:
    """Domain model representing the outcome of one filter-and-extract run."""

    def __init__(
        self,
        source: str,
        pattern: Dict[str, Optional[str]],
        mode: ExtractionMode,
        matches: Optional[List[MatchRecord]] = None,
    ):
        self.source = source
        self.pattern = pattern
        self.mode = mode
        self.matches = matches or []

    @property
    def content(self) -> str:
        """All extracted content concatenated in document order."""
        return "".join(match.content for match in self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "pattern": dict(self.pattern),
            "mode": self.mode.value,
            "count": len(self.matches),
            "matches": [match.to_dict() for match in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScrapeReport":
        """Create from dictionary."""
        return cls(
            source=data["source"],
            pattern=data.get("pattern", {}),
            mode=ExtractionMode(data["mode"]),
            matches=[
                MatchRecord(
                    index=item["index"],
                    tag_name=item["tag_name"],
                    attributes=item.get("attributes"),
                    content=item.get("content", ""),
                )
                for item in data.get("matches", [])
            ],
        )
