from __future__ import annotations

from ..builder import DiagramBuilder
from ..types import Diagram, ImportOptions
from .scanner import scan_declarations, scan_relationships

# ============================================================================
# Mermaid importer
#
# Every "class Name" becomes a class node, stacked top to bottom in order of
# first appearance. Relationship lines are resolved against those names.
# ============================================================================


def import_mermaid(text: str, options: ImportOptions | None = None) -> Diagram:
    """Build a new diagram from Mermaid classDiagram text."""
    builder = DiagramBuilder(options)

    for name in scan_declarations(text):
        builder.add_node(name, "class")

    for rel in scan_relationships(text):
        builder.add_relationship(rel.source, rel.target, rel.kind)

    return builder.build()
