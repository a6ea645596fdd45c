from __future__ import annotations

import logging
from typing import Any

from .errors import DiagramNotFoundError, ElementNotFoundError
from .graph import add_element, find_element, is_node, new_element_id
from .graph import remove_element as _remove_element
from .registry import detect_notation, resolve
from .repository import DiagramRepository
from .types import (
    Arrow,
    CodeExport,
    Diagram,
    Element,
    ImportOptions,
    Node,
    NodeKind,
    NodeProperties,
    NODE_KINDS,
    Position,
    RELATIONSHIP_KINDS,
    RelationshipKind,
    Size,
    TextAnnotation,
)

logger = logging.getLogger(__name__)

# Element fields that update_element() may change
_UPDATABLE_FIELDS = ("kind", "size", "text", "properties", "position", "points")


class DiagramService:
    """Diagram editing and text conversion on top of a repository."""

    def __init__(self, repository: DiagramRepository) -> None:
        self.repository = repository

    def _load(self, diagram_id: str) -> Diagram:
        diagram = self.repository.find_by_id(diagram_id)
        if diagram is None:
            raise DiagramNotFoundError(diagram_id)
        return diagram

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def create_diagram(self, name: str) -> Diagram:
        diagram = Diagram(id=new_element_id(), name=name)
        return self.repository.save(diagram)

    def get_diagram(self, diagram_id: str) -> Diagram:
        return self._load(diagram_id)

    def add_element(
        self,
        diagram_id: str,
        kind: NodeKind,
        position: Position,
        size: Size | None = None,
        text: str | None = None,
    ) -> Node:
        if kind not in NODE_KINDS:
            raise ValueError(
                f"add_element creates class or interface nodes, got {kind!r}"
            )
        diagram = self._load(diagram_id)
        node = Node(
            id=new_element_id(),
            kind=kind,
            position=position,
            size=size,
            text=text,
            properties=NodeProperties(),
        )
        add_element(diagram, node)
        self.repository.save(diagram)
        return node

    def update_element(self, diagram_id: str, element_id: str, **updates: Any) -> Element:
        """Change fields of an element in place.

        Only the keys present in updates are touched, so passing size=None
        clears the size.
        """
        unknown = set(updates) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update element fields: {sorted(unknown)}")

        diagram = self._load(diagram_id)
        element = find_element(diagram, element_id)
        if element is None:
            raise ElementNotFoundError(diagram_id, element_id)

        if "kind" in updates and updates["kind"]:
            new_kind = updates["kind"]
            family = NODE_KINDS if is_node(element) else RELATIONSHIP_KINDS
            if new_kind not in family or isinstance(element, TextAnnotation):
                raise ValueError(
                    f"Cannot change a {element.kind!r} element into {new_kind!r}"
                )
            element.kind = new_kind

        for key in ("size", "text", "properties", "position", "points"):
            if key not in updates:
                continue
            if not hasattr(element, key):
                raise ValueError(f"{element.kind!r} elements have no {key!r}")
            if key == "properties" and not updates[key]:
                continue
            setattr(element, key, updates[key])

        self.repository.save(diagram)
        return element

    def remove_element(self, diagram_id: str, element_id: str) -> None:
        """Remove an element. Arrows that pointed at it are kept."""
        diagram = self._load(diagram_id)
        _remove_element(diagram, element_id)
        self.repository.save(diagram)

    def connect_elements(
        self,
        diagram_id: str,
        source_id: str,
        target_id: str,
        kind: RelationshipKind,
    ) -> Arrow:
        if kind not in RELATIONSHIP_KINDS:
            raise ValueError(f"Unknown relationship kind: {kind!r}")
        diagram = self._load(diagram_id)
        for element_id in (source_id, target_id):
            if find_element(diagram, element_id) is None:
                raise ElementNotFoundError(diagram_id, element_id)

        arrow = Arrow(
            id=new_element_id(),
            kind=kind,
            source=source_id,
            target=target_id,
        )
        add_element(diagram, arrow)
        self.repository.save(diagram)
        return arrow

    def add_text_element(
        self, diagram_id: str, position: Position, text: str
    ) -> TextAnnotation:
        diagram = self._load(diagram_id)
        annotation = TextAnnotation(id=new_element_id(), text=text, position=position)
        add_element(diagram, annotation)
        self.repository.save(diagram)
        return annotation

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def import_diagram(
        self,
        text: str,
        notation: str | None = None,
        options: ImportOptions | None = None,
    ) -> Diagram:
        """Build a new diagram from text and save it.

        The notation is detected from the text when not given.
        """
        notation = notation or detect_notation(text)
        converter = resolve(notation)
        diagram = converter.import_text(text, options)
        saved = self.repository.save(diagram)
        logger.info(
            "Imported diagram %s from %s (%d elements)",
            saved.id, notation, len(saved.elements),
        )
        return saved

    def export_diagram(self, diagram_id: str, notation: str) -> CodeExport:
        """Render a stored diagram to text."""
        converter = resolve(notation)
        diagram = self._load(diagram_id)
        code = converter.export_text(diagram)
        logger.info("Exported diagram %s to %s", diagram_id, notation)
        return CodeExport(code=code)

    def import_from_mermaid(self, code: str, options: ImportOptions | None = None) -> Diagram:
        return self.import_diagram(code, "mermaid", options)

    def import_from_csharp(self, code: str, options: ImportOptions | None = None) -> Diagram:
        return self.import_diagram(code, "csharp", options)

    def export_to_mermaid(self, diagram_id: str) -> CodeExport:
        return self.export_diagram(diagram_id, "mermaid")

    def export_to_csharp(self, diagram_id: str) -> CodeExport:
        return self.export_diagram(diagram_id, "csharp")
