"""
Tests for tag-dispatched visitors and transformers.
"""

import dataclasses

from sigsort.ast import (
    ClassDecl,
    ConstantDecl,
    Include,
    MethodDefinition,
    ModuleDecl,
    Private,
)
from sigsort.visitor import DeclarationTransformer, DeclarationVisitor


def sample_tree():
    return ClassDecl(
        name="Outer",
        members=(
            ConstantDecl(name="A", type="Integer"),
            ModuleDecl(name="Inner", members=(MethodDefinition(name="run"),)),
            Private(),
            MethodDefinition(name="helper"),
        ),
    )


class RecordingVisitor(DeclarationVisitor):
    def __init__(self):
        self.events = []

    def visit_class(self, node):
        self.events.append(("visit", node.name))

    def leave_class(self, node):
        self.events.append(("leave", node.name))

    def visit_module(self, node):
        self.events.append(("visit", node.name))

    def leave_module(self, node):
        self.events.append(("leave", node.name))

    def visit_method(self, node):
        self.events.append(("method", node.name))

    def generic_visit(self, node):
        self.events.append(("generic", getattr(node, "tag", None)))


class TestDeclarationVisitor:
    """Tests for DeclarationVisitor dispatch."""

    def test_depth_first_order(self):
        """Test visit/leave order and fallback to generic_visit."""
        visitor = RecordingVisitor()
        visitor.visit(sample_tree())

        assert visitor.events == [
            ("visit", "Outer"),
            ("generic", "constant"),
            ("visit", "Inner"),
            ("method", "run"),
            ("leave", "Inner"),
            ("generic", "private"),
            ("method", "helper"),
            ("leave", "Outer"),
        ]

    def test_returning_false_skips_members(self):
        """Test that visit_<tag> returning False prunes the subtree."""

        class SkipModules(RecordingVisitor):
            def visit_module(self, node):
                super().visit_module(node)
                return False

        visitor = SkipModules()
        visitor.visit(sample_tree())

        assert ("method", "run") not in visitor.events
        assert ("leave", "Inner") in visitor.events

    def test_visit_all(self):
        """Test that visit_all walks every top-level node."""
        visitor = RecordingVisitor()
        visitor.visit_all([ClassDecl(name="A"), ClassDecl(name="B")])

        assert visitor.events == [
            ("visit", "A"),
            ("leave", "A"),
            ("visit", "B"),
            ("leave", "B"),
        ]

    def test_untagged_objects_use_generic_visit(self):
        """Test that members without a tag reach generic_visit instead of failing."""
        foreign = object()
        visitor = RecordingVisitor()
        visitor.visit(ClassDecl(name="A", members=(foreign,)))

        assert visitor.events == [("visit", "A"), ("generic", None), ("leave", "A")]


class TestDeclarationTransformer:
    """Tests for DeclarationTransformer rebuilding."""

    def test_identity_returns_same_tree(self):
        """Test that a transformer without handlers returns the original node."""
        tree = sample_tree()
        assert DeclarationTransformer().transform(tree) is tree

    def test_leave_replaces_node(self):
        """Test that leave_<tag> results replace nodes in their parent."""

        class Rename(DeclarationTransformer):
            def leave_method(self, original, updated):
                return dataclasses.replace(updated, name=updated.name.upper())

        result = Rename().transform(sample_tree())

        assert result.members[1].members[0].name == "RUN"
        assert result.members[3].name == "HELPER"

    def test_leave_none_drops_node(self):
        """Test that returning None from leave_<tag> removes the node."""

        class DropMarkers(DeclarationTransformer):
            def leave_private(self, original, updated):
                return None

        result = DropMarkers().transform(sample_tree())

        assert [member.tag for member in result.members] == ["constant", "module", "method"]

    def test_visit_false_keeps_children(self):
        """Test that children are not transformed when visit returns False."""

        class Rename(DeclarationTransformer):
            def visit_module(self, node):
                return False

            def leave_method(self, original, updated):
                return dataclasses.replace(updated, name="x")

        result = Rename().transform(sample_tree())

        assert result.members[1].members[0].name == "run"
        assert result.members[3].name == "x"

    def test_leave_sees_updated_children(self):
        """Test that leave_<tag> receives the original and the rebuilt node."""
        seen = {}

        class Watch(DeclarationTransformer):
            def leave_include(self, original, updated):
                return None

            def leave_module(self, original, updated):
                seen["original"] = original
                seen["updated"] = updated
                return updated

        tree = ModuleDecl(name="M", members=(Include(name="Kernel"),))
        Watch().transform(tree)

        assert seen["original"] is tree
        assert seen["updated"].members == ()

    def test_untagged_objects_kept(self):
        """Test that members without a tag pass through unchanged."""
        foreign = object()
        tree = ClassDecl(name="A", members=(foreign, MethodDefinition(name="run")))

        class Rename(DeclarationTransformer):
            def leave_method(self, original, updated):
                return dataclasses.replace(updated, name="go")

        result = Rename().transform(tree)

        assert result.members[0] is foreign
        assert result.members[1].name == "go"
