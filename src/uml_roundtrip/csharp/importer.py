from __future__ import annotations

import logging

from ..builder import DiagramBuilder
from ..graph import nodes
from ..types import Diagram, ImportOptions
from .scanner import (
    find_blocks,
    scan_classes,
    scan_interfaces,
    scan_members,
    scan_relationships,
)

logger = logging.getLogger(__name__)

# ============================================================================
# C# importer
#
# Passes over the source text:
#   1. class declarations      -> class nodes (class column)
#   2. interface declarations  -> interface nodes (interface column)
#   3. base lists              -> inheritance / implementation arrows
#   4. class/interface bodies  -> attribute and method strings per node
# ============================================================================


def import_csharp(text: str, options: ImportOptions | None = None) -> Diagram:
    """Build a new diagram from C#-like source text."""
    builder = DiagramBuilder(options)

    for name in scan_classes(text):
        builder.add_node(name, "class")

    interface_names: list[str] = []
    for name in scan_interfaces(text):
        node = builder.add_node(name, "interface")
        if node.kind == "interface":
            interface_names.append(name)

    for rel in scan_relationships(text, interface_names):
        builder.add_relationship(rel.source, rel.target, rel.kind)

    for node in nodes(builder.diagram):
        if not node.text:
            continue
        for body in find_blocks(text, node.text):
            members = scan_members(body)
            builder.add_members(node.text, members.attributes, members.methods)

    diagram = builder.build()
    logger.debug(
        "Imported %d elements from C# source (%d chars)",
        len(diagram.elements), len(text),
    )
    return diagram
