from __future__ import annotations

import re
import uuid

from .types import (
    Arrow,
    Diagram,
    Element,
    Node,
    NODE_KINDS,
    RELATIONSHIP_KINDS,
)

# ============================================================================
# Diagram graph operations
#
# Lookup is a linear scan over diagram.elements: diagrams are small and the
# element order is significant (exporters render in insertion order).
# ============================================================================


def new_element_id() -> str:
    return str(uuid.uuid4())


def is_arrow(element: Element) -> bool:
    """True if the element is a relationship edge."""
    return element.kind in RELATIONSHIP_KINDS


def is_node(element: Element) -> bool:
    """True if the element is a class or interface box."""
    return element.kind in NODE_KINDS


def find_element(diagram: Diagram, element_id: str) -> Element | None:
    for element in diagram.elements:
        if element.id == element_id:
            return element
    return None


def add_element(diagram: Diagram, element: Element) -> Element:
    """Append an element, keeping ids unique within the diagram."""
    if find_element(diagram, element.id) is not None:
        raise ValueError(
            f"Element id {element.id} already exists in diagram {diagram.id}"
        )
    diagram.elements.append(element)
    return element


def remove_element(diagram: Diagram, element_id: str) -> bool:
    """Remove an element by id. Arrows pointing at it are left in place."""
    before = len(diagram.elements)
    diagram.elements = [e for e in diagram.elements if e.id != element_id]
    return len(diagram.elements) != before


def nodes(diagram: Diagram) -> list[Node]:
    return [e for e in diagram.elements if is_node(e)]  # type: ignore[misc]


def arrows(diagram: Diagram) -> list[Arrow]:
    return [e for e in diagram.elements if is_arrow(e)]  # type: ignore[misc]


def find_node_by_label(diagram: Diagram, label: str) -> Node | None:
    """First node whose label matches exactly."""
    for node in nodes(diagram):
        if node.text == label:
            return node
    return None


def resolve_endpoints(diagram: Diagram, arrow: Arrow) -> tuple[Node, Node] | None:
    """Return the labelled (source, target) nodes of an arrow.

    None when either end is missing, is not a node, or has no label.
    """
    source = find_element(diagram, arrow.source)
    target = find_element(diagram, arrow.target)
    if source is None or target is None:
        return None
    if not is_node(source) or not is_node(target):
        return None
    if not source.text or not target.text:
        return None
    return source, target  # type: ignore[return-value]


# ============================================================================
# Member strings
#
# Attributes and methods are stored as "<visibility> <name>: <type>",
# e.g. "+ name: string" or "- save: void".
# ============================================================================

VISIBILITY_SYMBOLS = {
    "public": "+",
    "private": "-",
}

_MEMBER_RE = re.compile(
    r"^\s*([+\-#~])?\s*([A-Za-z_]\w*)\s*(?:\([^)]*\))?\s*(?::\s*(.+?))?\s*$"
)


def visibility_symbol(keyword: str) -> str:
    """Map a visibility keyword to its UML symbol (protected/internal -> #)."""
    return VISIBILITY_SYMBOLS.get(keyword, "#")


def format_member(symbol: str, name: str, type_: str) -> str:
    return f"{symbol} {name}: {type_}"


def split_member(member: str) -> tuple[str, str, str | None] | None:
    """Split a member string into (visibility, name, type).

    Returns None if the string has no recognisable name.
    """
    match = _MEMBER_RE.match(member)
    if not match:
        return None
    return match.group(1) or "", match.group(2), match.group(3)
