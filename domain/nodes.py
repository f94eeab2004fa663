"""
Domain models for the document tree.

A parsed document is a strict tree: a synthetic ``Document`` root owning
``Element`` and ``Text`` children. Nodes keep no reference to their parent.
Tag and attribute names are stored lowercase; values are kept as authored.
"""

from typing import Any, Dict, Iterator, List, Optional, Union


class Text:
    """Leaf node holding literal character content."""

    def __init__(self, data: str):
        self.data = data

    @property
    def children(self) -> List["Node"]:
        return []

    @property
    def text_content(self) -> str:
        return self.data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"type": "text", "data": self.data}

    def __repr__(self) -> str:
        preview = self.data if len(self.data) <= 30 else self.data[:27] + "..."
        return f"Text({preview!r})"


class Element:
    """Domain model representing a tagged node with attributes and children."""

    def __init__(
        self,
        tag_name: str,
        attributes: Optional[Dict[str, str]] = None,
        children: Optional[List["Node"]] = None,
    ):
        self.tag_name = tag_name.lower()
        self.attributes: Dict[str, str] = {}
        for name, value in (attributes or {}).items():
            # First occurrence wins, as in HTML
            self.attributes.setdefault(name.lower(), value)
        self.children: List[Node] = list(children) if children else []

    @property
    def text_content(self) -> str:
        """Direct literal text; always empty for an element."""
        return ""

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self.attributes

    def get_attr_value(self, name: str) -> str:
        """Return the value of ``name``, or an empty string if absent."""
        return self.attributes.get(name.lower(), "")

    def append(self, child: "Node") -> "Node":
        self.children.append(child)
        return child

    def iter_elements(self) -> Iterator["Element"]:
        """Yield this element and every descendant element in document order."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Element):
                yield node
                stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "type": "element",
            "tag_name": self.tag_name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return (
            f"Element(tag_name={self.tag_name!r}, attributes={self.attributes!r}, "
            f"children={len(self.children)})"
        )


class Document(Element):
    """Synthetic root of a parsed tree. Never reported as a match."""

    def __init__(self, children: Optional[List["Node"]] = None):
        super().__init__("", None, children)

    def iter_elements(self) -> Iterator[Element]:
        for element in super().iter_elements():
            if element is not self:
                yield element

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "document",
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return f"Document(children={len(self.children)})"


Node = Union[Element, Text]
