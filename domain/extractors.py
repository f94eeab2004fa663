"""
Content extraction from document nodes.

Both extraction modes are pure reads over the tree. A target is either a
single node or an ordered collection of nodes (such as a FilteredResult), in
which case the per-node outputs are concatenated in order with no separator.
"""

from typing import Iterable, List, Union

from domain.nodes import Element, Node, Text

# Elements that never carry content and are written without a closing tag
VOID_ELEMENTS = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    ]
)

Target = Union[Node, Iterable[Node]]


def _targets(target: Target) -> Iterable[Node]:
    if isinstance(target, (Element, Text)):
        return [target]
    return target


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


def _start_tag(element: Element) -> str:
    attrs = "".join(
        f' {name}="{_escape_attr(value)}"' for name, value in element.attributes.items()
    )
    return f"<{element.tag_name}{attrs}>"


def _serialize(node: Node, out: List[str]) -> None:
    """Append the outer markup of ``node`` to ``out``."""
    # Explicit stack; closing tags are pushed as plain strings
    stack: List[Union[Node, str]] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, Text):
            out.append(item.data)
        else:
            out.append(_start_tag(item))
            if item.tag_name in VOID_ELEMENTS and not item.children:
                continue
            stack.append(f"</{item.tag_name}>")
            stack.extend(reversed(item.children))


def inner_markup(node: Node) -> str:
    """Serialize the children of a single node."""
    if isinstance(node, Text):
        return ""
    out: List[str] = []
    for child in node.children:
        _serialize(child, out)
    return "".join(out)


def outer_markup(node: Node) -> str:
    """Serialize a single node including its own tag."""
    if isinstance(node, Element) and not node.tag_name:
        # The synthetic document root has no tag of its own
        return inner_markup(node)
    out: List[str] = []
    _serialize(node, out)
    return "".join(out)


def text(node: Node) -> str:
    """Concatenate every text literal under a single node, in document order."""
    out: List[str] = []
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            out.append(current.data)
        else:
            stack.extend(reversed(current.children))
    return "".join(out)


def get_inner_markup(target: Target) -> str:
    """
    Return the inner markup of a node or of every node in a result.

    Text children are emitted verbatim. Elements are written with their
    attributes in stored order and a matching closing tag.
    """
    return "".join(inner_markup(node) for node in _targets(target))


def get_outer_markup(target: Target) -> str:
    """Return the outer markup of a node or of every node in a result."""
    return "".join(outer_markup(node) for node in _targets(target))


def get_text(target: Target) -> str:
    """Return the visible text of a node or of every node in a result."""
    return "".join(text(node) for node in _targets(target))
