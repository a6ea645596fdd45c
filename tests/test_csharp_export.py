"""Tests for the C# exporter."""
from __future__ import annotations

from uml_roundtrip.csharp import export_csharp
from uml_roundtrip.types import (
    Arrow,
    Diagram,
    Node,
    NodeProperties,
    Position,
)


def make_node(node_id: str, label: str | None, kind: str = "class", **kwargs) -> Node:
    return Node(id=node_id, kind=kind, position=Position(0, 0), text=label, **kwargs)


def make_diagram(*elements) -> Diagram:
    return Diagram(id="d1", name="Test", elements=list(elements))


def zoo() -> Diagram:
    return make_diagram(
        make_node("animal", "Animal"),
        make_node("pet", "IPet", kind="interface"),
        make_node("walker", "IWalker", kind="interface"),
        make_node("dog", "Dog"),
        make_node("bone", "Bone"),
        make_node("owner", "Owner"),
        Arrow(id="a1", kind="inheritance", source="dog", target="animal"),
        Arrow(id="a2", kind="implementation", source="dog", target="pet"),
        Arrow(id="a3", kind="implementation", source="dog", target="walker"),
        Arrow(id="a4", kind="dependency", source="dog", target="bone"),
        Arrow(id="a5", kind="association", source="dog", target="owner"),
    )


class TestClassHeaders:
    def test_plain_class(self):
        code = export_csharp(make_diagram(make_node("n", "Animal")))
        assert code == "public class Animal\n{\n}\n"

    def test_parent_and_interfaces_share_one_colon(self):
        lines = export_csharp(zoo()).splitlines()
        assert "public class Dog : Animal, IPet, IWalker" in lines

    def test_interfaces_only(self):
        code = export_csharp(
            make_diagram(
                make_node("c", "Cat"),
                make_node("p", "IPet", kind="interface"),
                Arrow(id="a", kind="implementation", source="c", target="p"),
            )
        )
        assert "public class Cat : IPet\n" in code

    def test_only_first_parent_is_used(self):
        code = export_csharp(
            make_diagram(
                make_node("c", "Cat"),
                make_node("a", "Animal"),
                make_node("m", "Mammal"),
                Arrow(id="r1", kind="inheritance", source="c", target="a"),
                Arrow(id="r2", kind="inheritance", source="c", target="m"),
            )
        )
        assert "public class Cat : Animal\n" in code

    def test_interface_declaration(self):
        code = export_csharp(make_diagram(make_node("p", "IPet", kind="interface")))
        assert code == "public interface IPet\n{\n}\n"


class TestMembers:
    def test_attributes_become_string_properties(self):
        node = make_node(
            "n",
            "Animal",
            properties=NodeProperties(attributes=["+ name: string", "- age: int"]),
        )
        code = export_csharp(make_diagram(node))
        assert "    public string name { get; set; }" in code
        assert "    public string age { get; set; }" in code

    def test_methods_become_void_stubs(self):
        node = make_node(
            "n", "Animal", properties=NodeProperties(methods=["+ speak: void"])
        )
        code = export_csharp(make_diagram(node))
        assert (
            "    public void speak()\n"
            "    {\n"
            "        // Method body\n"
            "    }"
        ) in code

    def test_interface_methods_are_signatures(self):
        node = make_node(
            "p",
            "IPet",
            kind="interface",
            properties=NodeProperties(attributes=["+ name: string"], methods=["+ play: void"]),
        )
        code = export_csharp(make_diagram(node))
        assert "    public void play();" in code
        assert "name" not in code


class TestRelationshipComments:
    def test_dependency_and_association_comments(self):
        lines = export_csharp(zoo()).splitlines()
        assert "// Dog depends on Bone" in lines
        assert "// Dog is associated with Owner" in lines

    def test_structural_relationships_are_not_commented(self):
        code = export_csharp(zoo())
        assert "// Dog" in code
        assert "Animal\n" not in code.split("// Dog", 1)[1]
        assert "IPet" not in code.split("// Dog", 1)[1]

    def test_comments_come_after_all_declarations(self):
        code = export_csharp(zoo())
        assert code.index("// Dog depends on Bone") > code.rindex("public class")

    def test_dangling_arrows_are_ignored(self):
        code = export_csharp(
            make_diagram(
                make_node("d", "Dog"),
                Arrow(id="a1", kind="inheritance", source="d", target="gone"),
                Arrow(id="a2", kind="dependency", source="gone", target="d"),
            )
        )
        assert code == "public class Dog\n{\n}\n"

    def test_empty_diagram_exports_empty_text(self):
        assert export_csharp(make_diagram()) == ""
