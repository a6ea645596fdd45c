from __future__ import annotations

from ..registry import register
from ..types import Diagram, ImportOptions
from .scanner import (
    RelationshipMatch,
    scan_declarations,
    scan_relationships,
    relationship_kind,
)
from .importer import import_mermaid
from .exporter import export_mermaid, relationship_arrow


@register("mermaid", "markup")
class MermaidConverter:
    name = "mermaid"

    @staticmethod
    def import_text(text: str, options: ImportOptions | None = None) -> Diagram:
        return import_mermaid(text, options)

    @staticmethod
    def export_text(diagram: Diagram) -> str:
        return export_mermaid(diagram)


__all__ = [
    "MermaidConverter",
    "RelationshipMatch",
    "scan_declarations",
    "scan_relationships",
    "relationship_kind",
    "import_mermaid",
    "export_mermaid",
    "relationship_arrow",
]
