from __future__ import annotations


class DiagramNotFoundError(LookupError):
    """Raised when a diagram id is not present in the repository."""

    def __init__(self, diagram_id: str) -> None:
        super().__init__(f"Diagram with id {diagram_id} not found")
        self.diagram_id = diagram_id


class ElementNotFoundError(LookupError):
    """Raised when an element id is not present in a diagram."""

    def __init__(self, diagram_id: str, element_id: str) -> None:
        super().__init__(
            f"Element with id {element_id} not found in diagram {diagram_id}"
        )
        self.diagram_id = diagram_id
        self.element_id = element_id


class UnknownNotationError(ValueError):
    """Raised when no converter is registered for a notation name."""

    def __init__(self, notation: str) -> None:
        super().__init__(f"No converter registered for notation: {notation!r}")
        self.notation = notation
