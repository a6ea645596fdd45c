from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from ..graph import format_member, visibility_symbol
from ..types import RelationshipKind

# ============================================================================
# C# scanners
#
# Best-effort structural extraction, not a C# front end:
#   class Dog                           (class declaration)
#   interface IPet                      (interface declaration)
#   class Dog : Animal, IPet            (base list -> inheritance + implementation)
#   public string Name { get; set; }    (auto-property -> "+ Name: string")
#   private void Bark(int times)        (method -> "- Bark: void")
#
# Interfaces in a base list are recognised by the I-prefix convention
# (IPet, IDisposable) or by being declared with the interface keyword.
# ============================================================================

_CLASS_RE = re.compile(r"\bclass\s+(\w+)")
_INTERFACE_RE = re.compile(r"\binterface\s+(\w+)")

# class Name[<T, U>] : base, base, ...   (stops at {, }, ; or end of line)
_BASE_LIST_RE = re.compile(
    r"\bclass\s+(\w+)\s*(?:<[^<>{};]*>)?\s*:\s*([^{};\n]+)"
)
_WHERE_RE = re.compile(r"\bwhere\b")
_INTERFACE_NAME_RE = re.compile(r"^I[A-Z]")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_]\w*$")

_VISIBILITY = r"(public|private|protected|internal)(?:\s+(?:internal|protected))?"
_MODIFIERS = (
    r"(?:(?:static|virtual|override|abstract|async|readonly|new|sealed"
    r"|extern|unsafe|required|partial)\s+)*"
)
# Generic arguments may nest one level: Dictionary<string, List<int>>
_GENERIC = r"<(?:[^<>(){};]|<[^<>(){};]*>)*>"
_TYPE = rf"([\w.]+(?:{_GENERIC})?(?:\[\])*\??)"

_PROPERTY_RE = re.compile(
    rf"{_VISIBILITY}\s+{_MODIFIERS}{_TYPE}\s+(\w+)\s*\{{\s*(?:get|set|init)\s*;"
)
_METHOD_RE = re.compile(
    rf"{_VISIBILITY}\s+{_MODIFIERS}{_TYPE}\s+(\w+)\s*\(([^)]*)\)"
)


@dataclass(slots=True)
class BaseList:
    """The names after the colon of one class declaration."""

    name: str
    bases: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RelationshipMatch:
    source: str
    target: str
    kind: RelationshipKind


@dataclass(slots=True)
class MemberMatch:
    attributes: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)


# ============================================================================
# Declarations
# ============================================================================


def _unique(names: Iterable[str]) -> list[str]:
    out: list[str] = []
    for name in names:
        if name not in out:
            out.append(name)
    return out


def scan_classes(text: str) -> list[str]:
    """Class names in order of first appearance."""
    return _unique(m.group(1) for m in _CLASS_RE.finditer(text))


def scan_interfaces(text: str) -> list[str]:
    """Interface names in order of first appearance."""
    return _unique(m.group(1) for m in _INTERFACE_RE.finditer(text))


# ============================================================================
# Relationships
# ============================================================================


def looks_like_interface(name: str) -> bool:
    """I-prefix naming convention: IPet, IDisposable (but not Item)."""
    return bool(_INTERFACE_NAME_RE.match(name))


def _split_bases(raw: str) -> list[str]:
    """Split a base list on top-level commas, reducing each entry to a bare name."""
    raw = _WHERE_RE.split(raw, maxsplit=1)[0]
    parts: list[str] = []
    depth = 0
    current = ""
    for ch in raw:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        current += ch
    parts.append(current)

    names: list[str] = []
    for part in parts:
        # Drop generic arguments and namespace qualifiers
        name = part.split("<", 1)[0].strip().rsplit(".", 1)[-1]
        if _IDENTIFIER_RE.match(name):
            names.append(name)
    return names


def scan_base_lists(text: str) -> list[BaseList]:
    """Base lists of all class declarations, in order of appearance."""
    return [
        BaseList(name=m.group(1), bases=_split_bases(m.group(2)))
        for m in _BASE_LIST_RE.finditer(text)
    ]


def scan_relationships(
    text: str, interface_names: Iterable[str] = ()
) -> list[RelationshipMatch]:
    """Inheritance and implementation edges declared in base lists.

    The first base that is not an interface is the parent class; every
    interface in the list is implemented. Other bases are ignored.
    """
    known_interfaces = set(interface_names)
    found: list[RelationshipMatch] = []
    for base_list in scan_base_lists(text):
        for index, base in enumerate(base_list.bases):
            if base in known_interfaces or looks_like_interface(base):
                found.append(RelationshipMatch(base_list.name, base, "implementation"))
            elif index == 0:
                found.append(RelationshipMatch(base_list.name, base, "inheritance"))
    return found


# ============================================================================
# Members
# ============================================================================

_TYPE_KEYWORDS = r"(?:class|interface|struct|enum)"

# Nested type header, with its leading modifiers, up to its opening brace
_NESTED_HEADER_RE = re.compile(
    r"(?:\b(?:public|private|protected|internal|static|sealed|abstract"
    r"|partial|readonly|unsafe|new|ref)\s+)*"
    rf"\b{_TYPE_KEYWORDS}\s+\w+"
    rf"(?:(?!\b{_TYPE_KEYWORDS}\s+\w)[^{{}};])*\{{"
)


def _block_start_re(name: str) -> re.Pattern[str]:
    # Header may span lines but must not run into another declaration
    return re.compile(
        rf"\b(?:class|interface)\s+{re.escape(name)}\b"
        r"(?:(?!\b(?:class|interface)\s+\w)[^{};])*\{"
    )


def _closing_brace(text: str, start: int) -> int:
    """Index of the brace closing the block that opens just before start.

    Returns len(text) when the block is never closed.
    """
    depth = 1
    pos = start
    while pos < len(text):
        if text[pos] == "{":
            depth += 1
        elif text[pos] == "}":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return len(text)


def find_blocks(text: str, name: str) -> list[str]:
    """Bodies of every class/interface block declared with this name."""
    bodies: list[str] = []
    for match in _block_start_re(name).finditer(text):
        start = match.end()
        bodies.append(text[start:_closing_brace(text, start)])
    return bodies


def strip_nested_types(body: str) -> str:
    """Drop nested class, interface, struct and enum declarations from a body.

    Nested types are declarations of their own; find_blocks() reaches them
    by name.
    """
    kept: list[str] = []
    pos = 0
    while True:
        match = _NESTED_HEADER_RE.search(body, pos)
        if match is None:
            break
        kept.append(body[pos:match.start()])
        pos = _closing_brace(body, match.end()) + 1
    kept.append(body[pos:])
    return "".join(kept)


def scan_members(body: str) -> MemberMatch:
    """Auto-properties and methods of one block body, in order of appearance.

    Fields, constructors and anything else unrecognised are skipped, and so
    are the members of nested types.
    """
    body = strip_nested_types(body)
    members = MemberMatch()
    for m in _PROPERTY_RE.finditer(body):
        members.attributes.append(
            format_member(visibility_symbol(m.group(1)), m.group(3), m.group(2))
        )
    for m in _METHOD_RE.finditer(body):
        members.methods.append(
            format_member(visibility_symbol(m.group(1)), m.group(3), m.group(2))
        )
    return members
