"""uml-roundtrip -- Convert UML class diagrams to and from Mermaid and C# text."""

from __future__ import annotations

import logging

from .types import (
    Arrow,
    CodeExport,
    Diagram,
    ImportOptions,
    Node,
    NodeProperties,
    Position,
    Size,
    TextAnnotation,
)
from .errors import DiagramNotFoundError, ElementNotFoundError, UnknownNotationError
from .registry import detect_notation, register, registered_notations, resolve
from .repository import DiagramRepository, InMemoryDiagramRepository
from .service import DiagramService

# Importing the notation packages registers their converters
from .mermaid import MermaidConverter, import_mermaid, export_mermaid
from .csharp import CSharpConverter, import_csharp, export_csharp
from .layout import layout_diagram

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "import_text",
    "export_text",
    "detect_notation",
    "register",
    "registered_notations",
    "resolve",
    "import_mermaid",
    "export_mermaid",
    "import_csharp",
    "export_csharp",
    "layout_diagram",
    "MermaidConverter",
    "CSharpConverter",
    "DiagramService",
    "DiagramRepository",
    "InMemoryDiagramRepository",
    "DiagramNotFoundError",
    "ElementNotFoundError",
    "UnknownNotationError",
    "Arrow",
    "CodeExport",
    "Diagram",
    "ImportOptions",
    "Node",
    "NodeProperties",
    "Position",
    "Size",
    "TextAnnotation",
]


def import_text(
    text: str,
    notation: str | None = None,
    options: ImportOptions | None = None,
) -> Diagram:
    """Build a diagram from Mermaid or C# text without storing it.

    Auto-detects the notation when none is given.
    """
    return resolve(notation or detect_notation(text)).import_text(text, options)


def export_text(diagram: Diagram, notation: str) -> str:
    """Render a diagram to Mermaid or C# text."""
    return resolve(notation).export_text(diagram)
