from __future__ import annotations

from ..graph import arrows, nodes, resolve_endpoints, split_member
from ..types import Diagram, Node

# ============================================================================
# C# exporter
#
# Inheritance and implementation are written into the class header
# ("public class Dog : Animal, IPet"). Dependencies and associations have no
# structural C# form and are appended as line comments after all
# declarations.
# ============================================================================

INDENT = "    "

_COMMENT_VERBS = {
    "dependency": "depends on",
    "association": "is associated with",
}


def _collect_bases(diagram: Diagram) -> tuple[dict[str, str], dict[str, list[str]]]:
    """Build label -> parent and label -> implemented interfaces maps."""
    parents: dict[str, str] = {}
    interfaces: dict[str, list[str]] = {}
    for arrow in arrows(diagram):
        ends = resolve_endpoints(diagram, arrow)
        if ends is None:
            continue
        source, target = ends
        if arrow.kind == "inheritance":
            # A class has a single parent; the first arrow wins
            parents.setdefault(source.text, target.text)  # type: ignore[arg-type]
        elif arrow.kind == "implementation":
            implemented = interfaces.setdefault(source.text, [])  # type: ignore[arg-type]
            if target.text not in implemented:
                implemented.append(target.text)  # type: ignore[arg-type]
    return parents, interfaces


def _member_name(member: str) -> str | None:
    parts = split_member(member)
    return parts[1] if parts else None


def _render_class(
    node: Node, parent: str | None, implemented: list[str]
) -> list[str]:
    bases = ([parent] if parent else []) + implemented
    header = f"public class {node.text}"
    if bases:
        header += " : " + ", ".join(bases)

    body: list[list[str]] = []
    if node.properties is not None:
        for attr in node.properties.attributes:
            name = _member_name(attr)
            if name:
                body.append([f"{INDENT}public string {name} {{ get; set; }}"])
        for method in node.properties.methods:
            name = _member_name(method)
            if name:
                body.append([
                    f"{INDENT}public void {name}()",
                    f"{INDENT}{{",
                    f"{INDENT * 2}// Method body",
                    f"{INDENT}}}",
                ])

    lines = [header, "{"]
    for i, chunk in enumerate(body):
        # Blank line before each method stub
        if i > 0 and len(chunk) > 1:
            lines.append("")
        lines.extend(chunk)
    lines.append("}")
    return lines


def _render_interface(node: Node) -> list[str]:
    lines = [f"public interface {node.text}", "{"]
    if node.properties is not None:
        for method in node.properties.methods:
            name = _member_name(method)
            if name:
                lines.append(f"{INDENT}public void {name}();")
    lines.append("}")
    return lines


def export_csharp(diagram: Diagram) -> str:
    """Render a diagram as C# class and interface declarations."""
    parents, interfaces = _collect_bases(diagram)

    blocks: list[list[str]] = []
    for node in nodes(diagram):
        if not node.text:
            continue
        if node.kind == "interface":
            blocks.append(_render_interface(node))
        else:
            blocks.append(
                _render_class(node, parents.get(node.text), interfaces.get(node.text, []))
            )

    comments: list[str] = []
    for arrow in arrows(diagram):
        verb = _COMMENT_VERBS.get(arrow.kind)
        if verb is None:
            continue
        ends = resolve_endpoints(diagram, arrow)
        if ends is None:
            continue
        source, target = ends
        comments.append(f"// {source.text} {verb} {target.text}")
    if comments:
        blocks.append(comments)

    return "\n\n".join("\n".join(block) for block in blocks) + ("\n" if blocks else "")
