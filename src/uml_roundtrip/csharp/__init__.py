from __future__ import annotations

from ..registry import register
from ..types import Diagram, ImportOptions
from .scanner import (
    BaseList,
    MemberMatch,
    RelationshipMatch,
    find_blocks,
    looks_like_interface,
    scan_base_lists,
    scan_classes,
    scan_interfaces,
    scan_members,
    scan_relationships,
    strip_nested_types,
)
from .importer import import_csharp
from .exporter import export_csharp


@register("csharp", "c#", "code")
class CSharpConverter:
    name = "csharp"

    @staticmethod
    def import_text(text: str, options: ImportOptions | None = None) -> Diagram:
        return import_csharp(text, options)

    @staticmethod
    def export_text(diagram: Diagram) -> str:
        return export_csharp(diagram)


__all__ = [
    "CSharpConverter",
    "BaseList",
    "MemberMatch",
    "RelationshipMatch",
    "find_blocks",
    "looks_like_interface",
    "scan_base_lists",
    "scan_classes",
    "scan_interfaces",
    "scan_members",
    "scan_relationships",
    "strip_nested_types",
    "import_csharp",
    "export_csharp",
]
