from __future__ import annotations

import re
from dataclasses import dataclass

from ..types import RelationshipKind

# ============================================================================
# Mermaid class diagram scanners
#
# Best-effort extraction, not a full Mermaid parser:
#   class Animal              (declaration, anywhere in the text)
#   class Animal { ... }      (declaration; the body is not read)
#   Dog --|> Animal           (inheritance)
#   Dog ..|> Pet              (implementation)
#   Dog ..> Bone              (dependency)
#   Dog --> Owner             (association)
#   Dog <arrow> Owner : label (any other arrow falls back to association)
# ============================================================================

_CLASS_RE = re.compile(r"\bclass\s+(\w+)")

# Arrow tokens: dashes, dots, heads and bars with an optional o/* end marker
_RELATIONSHIP_RE = re.compile(
    r"^(\w+)\s+(o?[-.<>|*]+o?)\s+(\w+)(?:\s*:\s*(.*))?$"
)

RELATIONSHIP_SYMBOLS: dict[str, RelationshipKind] = {
    "--|>": "inheritance",
    "..|>": "implementation",
    "..>": "dependency",
    "-->": "association",
}

DEFAULT_RELATIONSHIP: RelationshipKind = "association"


@dataclass(slots=True)
class RelationshipMatch:
    source: str
    symbol: str
    target: str
    kind: RelationshipKind
    label: str | None = None


def split_lines(text: str) -> list[str]:
    """Split into trimmed statements, dropping blanks and %% comments."""
    return [
        l.strip()
        for l in re.split(r"[\n;]", text)
        if l.strip() and not l.strip().startswith("%%")
    ]


def scan_declarations(text: str) -> list[str]:
    """Class names in order of first appearance, without duplicates."""
    names: list[str] = []
    for match in _CLASS_RE.finditer(text):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return names


def relationship_kind(symbol: str) -> RelationshipKind:
    return RELATIONSHIP_SYMBOLS.get(symbol, DEFAULT_RELATIONSHIP)


def scan_relationships(text: str) -> list[RelationshipMatch]:
    """Relationship statements in order of appearance."""
    found: list[RelationshipMatch] = []
    for line in split_lines(text):
        match = _RELATIONSHIP_RE.match(line)
        if not match:
            continue
        label = match.group(4)
        found.append(
            RelationshipMatch(
                source=match.group(1),
                symbol=match.group(2),
                target=match.group(3),
                kind=relationship_kind(match.group(2)),
                label=label.strip() if label else None,
            )
        )
    return found
