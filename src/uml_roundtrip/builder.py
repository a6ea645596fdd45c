from __future__ import annotations

import logging

from .graph import add_element, new_element_id
from .layout import layout_diagram
from .types import (
    Arrow,
    Diagram,
    ImportOptions,
    Node,
    NodeKind,
    NodeProperties,
    Position,
    RelationshipKind,
    Size,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Diagram builder -- shared back end of the text importers
#
# Nodes are stacked in one vertical sequence in order of creation. Each kind
# has its own fixed column. Relationship endpoints are resolved by exact
# class name; a name that was never declared drops the relationship.
# ============================================================================


class DiagramBuilder:
    def __init__(self, options: ImportOptions | None = None) -> None:
        self.options = options or ImportOptions()
        self.diagram = Diagram(
            id=new_element_id(),
            name=self.options.get("diagram_name"),
        )
        # Class name -> node, for deduplication and endpoint resolution
        self._by_name: dict[str, Node] = {}
        self._next_y = float(self.options.get("base_y"))

    def node(self, name: str) -> Node | None:
        return self._by_name.get(name)

    def add_node(self, name: str, kind: NodeKind) -> Node:
        """Create a node for a declaration, or return the first one with that name."""
        existing = self._by_name.get(name)
        if existing is not None:
            logger.debug("Duplicate declaration of %r ignored", name)
            return existing

        column = "interface_x" if kind == "interface" else "class_x"
        node = Node(
            id=new_element_id(),
            kind=kind,
            position=Position(x=float(self.options.get(column)), y=self._next_y),
            size=Size(
                width=float(self.options.get("node_width")),
                height=float(self.options.get("node_height")),
            ),
            text=name,
        )
        self._next_y += float(self.options.get("step_y"))
        add_element(self.diagram, node)
        self._by_name[name] = node
        return node

    def add_relationship(
        self, source: str, target: str, kind: RelationshipKind
    ) -> Arrow | None:
        """Connect two declared classes by name; unknown names are skipped."""
        source_node = self._by_name.get(source)
        target_node = self._by_name.get(target)
        if source_node is None or target_node is None:
            logger.debug(
                "Dropping %s %r -> %r: undeclared class", kind, source, target
            )
            return None

        arrow = Arrow(
            id=new_element_id(),
            kind=kind,
            source=source_node.id,
            target=target_node.id,
        )
        add_element(self.diagram, arrow)
        return arrow

    def add_members(
        self, name: str, attributes: list[str], methods: list[str]
    ) -> None:
        node = self._by_name.get(name)
        if node is None or not (attributes or methods):
            return
        if node.properties is None:
            node.properties = NodeProperties()
        node.properties.attributes.extend(attributes)
        node.properties.methods.extend(methods)

    def build(self) -> Diagram:
        if self.options.get("layout") == "layered":
            layout_diagram(self.diagram, self.options)
        return self.diagram
