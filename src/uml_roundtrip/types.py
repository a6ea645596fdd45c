from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Union

# ============================================================================
# Diagram graph types
#
# The in-memory representation of one UML class diagram. Every importer
# produces a Diagram and every exporter reads one.
# ============================================================================

NodeKind = Literal["class", "interface"]

RelationshipKind = Literal[
    "inheritance",     # A --|> B   (A extends B)
    "implementation",  # A ..|> B   (A implements B)
    "dependency",      # A ..> B    (A uses B)
    "association",     # A --> B    (A holds a reference to B)
]

LayoutMode = Literal["stack", "layered"]

NODE_KINDS: tuple[str, ...] = ("class", "interface")
RELATIONSHIP_KINDS: tuple[str, ...] = (
    "inheritance",
    "implementation",
    "dependency",
    "association",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Position:
    x: float
    y: float


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class NodeProperties:
    """Structured members of a class or interface.

    Each entry is a formatted member string such as "+ name: string".
    """

    attributes: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Node:
    """A class or interface box."""

    id: str
    kind: NodeKind
    position: Position
    size: Size | None = None
    # Display label, i.e. the class name
    text: str | None = None
    properties: NodeProperties | None = None


@dataclass(slots=True)
class Arrow:
    """A directed relationship between two element ids.

    source/target are plain ids: the referenced nodes may have been removed
    since the arrow was created.
    """

    id: str
    kind: RelationshipKind
    source: str
    target: str
    # Routing control points, filled by the layered layout or the editor
    points: list[Position] | None = None


@dataclass(slots=True)
class TextAnnotation:
    """Free-floating text, not part of the relationship graph."""

    id: str
    text: str
    position: Position
    kind: Literal["text"] = "text"


Element = Union[Node, Arrow, TextAnnotation]


@dataclass(slots=True)
class Diagram:
    """A named, ordered collection of elements."""

    id: str
    name: str
    elements: list[Element] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass(slots=True)
class CodeExport:
    """Result of rendering a diagram to text."""

    code: str


# ============================================================================
# Import options -- user-facing configuration
# ============================================================================

IMPORT_DEFAULTS = {
    # Name given to every imported diagram
    "diagram_name": "Imported Diagram",
    # Vertical offset of the first imported node
    "base_y": 100,
    # Vertical distance between consecutive imported nodes
    "step_y": 150,
    # Horizontal offset of imported classes
    "class_x": 200,
    # Horizontal offset of imported interfaces
    "interface_x": 500,
    # Default node box size
    "node_width": 150,
    "node_height": 100,
    # "stack" keeps the import placement, "layered" runs the grandalf layout
    "layout": "stack",
    # Spacing used by the layered layout
    "node_spacing": 40,
    "layer_spacing": 60,
    # Padding around the layered layout
    "padding": 40,
}


@dataclass(slots=True)
class ImportOptions:
    diagram_name: str | None = None
    base_y: float | None = None
    step_y: float | None = None
    class_x: float | None = None
    interface_x: float | None = None
    node_width: float | None = None
    node_height: float | None = None
    layout: LayoutMode | None = None
    node_spacing: float | None = None
    layer_spacing: float | None = None
    padding: float | None = None

    def get(self, key: str):
        """Return the option value, falling back to IMPORT_DEFAULTS."""
        value = getattr(self, key, None)
        return IMPORT_DEFAULTS[key] if value is None else value
