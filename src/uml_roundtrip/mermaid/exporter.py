from __future__ import annotations

from ..graph import arrows, nodes, resolve_endpoints
from ..types import Diagram

# ============================================================================
# Mermaid exporter
#
# Output order:
#   1. "classDiagram" header
#   2. One block per labelled node, in insertion order
#   3. One line per arrow whose both ends resolve to labelled nodes
# ============================================================================

INDENT = "  "

RELATIONSHIP_ARROWS: dict[str, str] = {
    "inheritance": "--|>",
    "implementation": "..|>",
    "dependency": "..>",
    "association": "-->",
}


def relationship_arrow(kind: str) -> str:
    return RELATIONSHIP_ARROWS.get(kind, "-->")


def export_mermaid(diagram: Diagram) -> str:
    """Render a diagram as Mermaid classDiagram text."""
    lines: list[str] = ["classDiagram"]

    for node in nodes(diagram):
        if not node.text:
            continue
        lines.append(f"{INDENT}class {node.text} {{")
        if node.kind == "interface":
            lines.append(f"{INDENT * 2}<<interface>>")
        if node.properties is not None:
            for attr in node.properties.attributes:
                lines.append(f"{INDENT * 2}{attr}")
            for method in node.properties.methods:
                lines.append(f"{INDENT * 2}{method}()")
        lines.append(f"{INDENT}}}")

    for arrow in arrows(diagram):
        ends = resolve_endpoints(diagram, arrow)
        if ends is None:
            continue
        source, target = ends
        lines.append(
            f"{INDENT}{source.text} {relationship_arrow(arrow.kind)} {target.text}"
        )

    return "\n".join(lines) + "\n"
