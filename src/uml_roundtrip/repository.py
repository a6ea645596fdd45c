from __future__ import annotations

import copy
from dataclasses import replace
from typing import Protocol

from .types import Diagram, utc_now

# ============================================================================
# Diagram repository
#
# The conversion core only needs save() and find_by_id(). Any store that
# follows this protocol can back DiagramService.
# ============================================================================


class DiagramRepository(Protocol):
    def save(self, diagram: Diagram) -> Diagram:
        """Store a diagram and return it with a refreshed updated_at."""
        ...

    def find_by_id(self, diagram_id: str) -> Diagram | None: ...

    def find_all(self) -> list[Diagram]: ...

    def delete(self, diagram_id: str) -> None: ...


class InMemoryDiagramRepository:
    """Dict-backed store.

    Diagrams are deep-copied on the way in and out so callers always work on
    their own snapshot.
    """

    def __init__(self) -> None:
        self._diagrams: dict[str, Diagram] = {}

    def save(self, diagram: Diagram) -> Diagram:
        updated = replace(copy.deepcopy(diagram), updated_at=utc_now())
        self._diagrams[diagram.id] = updated
        return copy.deepcopy(updated)

    def find_by_id(self, diagram_id: str) -> Diagram | None:
        diagram = self._diagrams.get(diagram_id)
        return copy.deepcopy(diagram) if diagram is not None else None

    def find_all(self) -> list[Diagram]:
        return [copy.deepcopy(d) for d in self._diagrams.values()]

    def delete(self, diagram_id: str) -> None:
        self._diagrams.pop(diagram_id, None)

    def __len__(self) -> int:
        return len(self._diagrams)

    def __contains__(self, diagram_id: object) -> bool:
        return diagram_id in self._diagrams
