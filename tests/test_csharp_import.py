"""Tests for the C# scanners and importer.

Covers: class/interface declarations, base lists, the I-prefix convention,
auto-properties, methods, visibility mapping, malformed members.
"""
from __future__ import annotations

import pytest

from uml_roundtrip.csharp import (
    export_csharp,
    find_blocks,
    import_csharp,
    looks_like_interface,
    scan_base_lists,
    scan_classes,
    scan_interfaces,
    scan_members,
    scan_relationships,
    strip_nested_types,
)
from uml_roundtrip.graph import arrows, find_element, find_node_by_label, nodes


def arrow_pairs(diagram):
    return [
        (
            find_element(diagram, a.source).text,
            find_element(diagram, a.target).text,
            a.kind,
        )
        for a in arrows(diagram)
    ]


# ============================================================================
# Declarations
# ============================================================================


class TestDeclarationScanner:
    def test_finds_classes_and_interfaces_separately(self):
        text = "public interface IPet {}\npublic class Dog {}\npublic class Cat {}"
        assert scan_classes(text) == ["Dog", "Cat"]
        assert scan_interfaces(text) == ["IPet"]

    def test_ignores_class_constraint_keyword(self):
        text = "public class Repo<T> where T : class\n{\n}"
        assert scan_classes(text) == ["Repo"]


# ============================================================================
# Relationships
# ============================================================================


class TestRelationshipScanner:
    def test_interface_naming_convention(self):
        assert looks_like_interface("IPet")
        assert looks_like_interface("IDisposable")
        assert not looks_like_interface("Item")
        assert not looks_like_interface("Animal")

    def test_base_list_strips_generics_and_namespaces(self):
        lists = scan_base_lists(
            "class Repo<T> : Base<T, int>, System.IDisposable where T : new()\n{"
        )
        assert len(lists) == 1
        assert lists[0].name == "Repo"
        assert lists[0].bases == ["Base", "IDisposable"]

    def test_single_base_is_inheritance(self):
        rels = scan_relationships("class Dog : Animal")
        assert [(r.source, r.target, r.kind) for r in rels] == [
            ("Dog", "Animal", "inheritance")
        ]

    def test_parent_and_interface(self):
        rels = scan_relationships("class Dog : Animal, IPet")
        assert [(r.source, r.target, r.kind) for r in rels] == [
            ("Dog", "Animal", "inheritance"),
            ("Dog", "IPet", "implementation"),
        ]

    def test_interface_only_base_is_implementation(self):
        rels = scan_relationships("class Dog : IPet, IComparable<Dog>")
        assert [(r.target, r.kind) for r in rels] == [
            ("IPet", "implementation"),
            ("IComparable", "implementation"),
        ]

    def test_declared_interface_without_prefix(self):
        rels = scan_relationships("class Bird : Flyable", interface_names=["Flyable"])
        assert rels[0].kind == "implementation"

    def test_non_interface_after_comma_is_ignored(self):
        rels = scan_relationships("class Dog : Animal, Mammal")
        assert [(r.target, r.kind) for r in rels] == [("Animal", "inheritance")]


# ============================================================================
# Members
# ============================================================================


class TestMemberScanner:
    def test_extracts_properties_and_methods_in_order(self):
        members = scan_members(
            """
            public string Name { get; set; }
            private int Age { get; private set; }
            protected bool Active { get; }
            public void Speak() { }
            private int Count(string a, int b) { return 0; }
            internal Task<bool> SaveAsync() { }
            """
        )
        assert members.attributes == [
            "+ Name: string",
            "- Age: int",
            "# Active: bool",
        ]
        assert members.methods == [
            "+ Speak: void",
            "- Count: int",
            "# SaveAsync: Task<bool>",
        ]

    def test_skips_modifiers(self):
        members = scan_members(
            "public static int Total { get; set; }\npublic override string ToString() { }"
        )
        assert members.attributes == ["+ Total: int"]
        assert members.methods == ["+ ToString: string"]

    def test_fields_and_constructors_are_omitted(self):
        members = scan_members(
            "private int _age;\npublic Dog(string name) { }\npublic string Name { get; set; }"
        )
        assert members.attributes == ["+ Name: string"]
        assert members.methods == []

    def test_nested_generic_types(self):
        members = scan_members(
            "public Dictionary<string, List<int>> Map { get; set; }\n"
            "public List<List<int>> Rows() { }"
        )
        assert members.attributes == ["+ Map: Dictionary<string, List<int>>"]
        assert members.methods == ["+ Rows: List<List<int>>"]

    def test_nested_type_members_are_skipped(self):
        members = scan_members(
            "public string Name { get; set; }\n"
            "public class Inner { public int Size { get; set; } public void Grow() { } }\n"
            "private enum Mode { A, B }\n"
            "public void Run() { }"
        )
        assert members.attributes == ["+ Name: string"]
        assert members.methods == ["+ Run: void"]

    def test_strip_nested_types_keeps_surrounding_text(self):
        body = "int a;\nstruct P { int x; }\nint b;"
        assert strip_nested_types(body) == "int a;\n\nint b;"

    def test_find_blocks_matches_braces(self):
        text = (
            "class Dog\n{\n    public void Bark() { if (x) { } }\n}\n"
            "class Cat\n{\n    public void Meow() { }\n}"
        )
        bodies = find_blocks(text, "Dog")
        assert len(bodies) == 1
        assert "Bark" in bodies[0]
        assert "Meow" not in bodies[0]

    def test_find_blocks_does_not_run_into_next_declaration(self):
        text = "class Dog : Animal\nclass Animal { public string Name { get; set; } }"
        assert find_blocks(text, "Dog") == []


# ============================================================================
# Importer
# ============================================================================


class TestCSharpImporter:
    def test_inheritance_and_implementation(self):
        d = import_csharp(
            "public class Animal {}\n"
            "public interface IPet {}\n"
            "public class Dog : Animal, IPet {}"
        )
        assert arrow_pairs(d) == [
            ("Dog", "Animal", "inheritance"),
            ("Dog", "IPet", "implementation"),
        ]

    def test_classes_then_interfaces_share_one_vertical_sequence(self):
        d = import_csharp("interface IPet {}\nclass Dog {}\nclass Cat {}")
        placed = [(n.text, n.kind, n.position.x, n.position.y) for n in nodes(d)]
        assert placed == [
            ("Dog", "class", 200, 100),
            ("Cat", "class", 200, 250),
            ("IPet", "interface", 500, 400),
        ]

    def test_undeclared_base_is_dropped(self):
        d = import_csharp("class Dog : Animal {}")
        assert [n.text for n in nodes(d)] == ["Dog"]
        assert arrows(d) == []

    def test_extracts_members_into_properties(self):
        d = import_csharp(
            "public class Animal\n"
            "{\n"
            "    public string Name { get; set; }\n"
            "    private int _legs;\n"
            "    public void Speak()\n"
            "    {\n"
            "    }\n"
            "}\n"
            "public interface IPet\n"
            "{\n"
            "    public void Play();\n"
            "}\n"
        )
        animal = find_node_by_label(d, "Animal")
        assert animal.properties.attributes == ["+ Name: string"]
        assert animal.properties.methods == ["+ Speak: void"]
        pet = find_node_by_label(d, "IPet")
        assert pet.kind == "interface"
        assert pet.properties.methods == ["+ Play: void"]

    def test_class_without_members_has_no_properties(self):
        d = import_csharp("class Empty {}")
        assert nodes(d)[0].properties is None

    def test_duplicate_declaration_accumulates_members(self):
        d = import_csharp(
            "partial class Dog { public string Name { get; set; } }\n"
            "partial class Dog { public void Bark() { } }"
        )
        assert len(nodes(d)) == 1
        dog = nodes(d)[0]
        assert dog.properties.attributes == ["+ Name: string"]
        assert dog.properties.methods == ["+ Bark: void"]

    def test_interface_named_like_a_class_keeps_first_node(self):
        d = import_csharp("class Thing {}\ninterface Thing {}")
        assert [(n.text, n.kind) for n in nodes(d)] == [("Thing", "class")]

    def test_text_without_declarations_gives_empty_diagram(self):
        d = import_csharp("// nothing to see here\nvar x = 1;")
        assert d.elements == []

    def test_nested_class_members_stay_on_the_nested_node(self):
        d = import_csharp(
            "public class Outer\n"
            "{\n"
            "    public string Name { get; set; }\n"
            "    public class Inner\n"
            "    {\n"
            "        public int Size { get; set; }\n"
            "        public void Grow() { }\n"
            "    }\n"
            "}\n"
        )
        outer = find_node_by_label(d, "Outer")
        inner = find_node_by_label(d, "Inner")
        assert outer.properties.attributes == ["+ Name: string"]
        assert outer.properties.methods == []
        assert inner.properties.attributes == ["+ Size: int"]
        assert inner.properties.methods == ["+ Grow: void"]

        code = export_csharp(d)
        assert code.count("Size") == 1
        assert code.count("Grow") == 1
