from __future__ import annotations

import re
from typing import Callable, Protocol

from .errors import UnknownNotationError
from .types import Diagram, ImportOptions

# ============================================================================
# Conversion registry
#
# Maps a notation name ("mermaid", "csharp" and their aliases) to the
# converter class that imports and exports it. Converters register
# themselves with the @register decorator when their module is imported.
# ============================================================================


class Converter(Protocol):
    name: str

    @staticmethod
    def import_text(text: str, options: ImportOptions | None = None) -> Diagram: ...

    @staticmethod
    def export_text(diagram: Diagram) -> str: ...


_REGISTRY: dict[str, type] = {}


def register(*names: str) -> Callable[[type], type]:
    def deco(cls: type) -> type:
        for name in names:
            _REGISTRY[name.strip().lower()] = cls
        return cls
    return deco


def resolve(notation: str) -> type[Converter]:
    key = (notation or "").strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnknownNotationError(notation) from None


def registered_notations() -> dict[str, type]:
    return dict(_REGISTRY)


_CODE_HINT_RE = re.compile(
    r"\b(?:public|private|protected|internal)\s+(?:\w+\s+)*(?:class|interface)\b"
    r"|\binterface\s+\w+"
    r"|\bnamespace\s+[\w.]+"
    r"|\bclass\s+\w+\s*:\s*\w+"
)


def detect_notation(text: str) -> str:
    """Guess the notation of a text blob.

    A leading "classDiagram" header means Mermaid; C# keywords mean C#.
    Anything else is treated as Mermaid.
    """
    first_line = (text.strip().split("\n")[0] or "").strip()
    if re.match(r"^classDiagram\b", first_line):
        return "mermaid"
    if _CODE_HINT_RE.search(text):
        return "csharp"
    return "mermaid"
