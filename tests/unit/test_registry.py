"""Unit tests for ClassRegistry."""

from ui5ts.core.models import Kind
from ui5ts.generator.nodes import ClassNode
from ui5ts.generator.registry import ClassRegistry


def make_class(full_name: str, base: str | None = None) -> ClassNode:
    return ClassNode(
        kind=Kind.CLASS,
        name=full_name.rsplit(".", 1)[-1],
        full_name=full_name,
        extends=base,
    )


class TestRegistration:
    """Tests for adding and looking up classes."""

    def test_add_and_get(self) -> None:
        registry = ClassRegistry()
        node = make_class("sap.ui.base.Object")
        assert registry.add(node) is True
        assert registry.get("sap.ui.base.Object") is node
        assert "sap.ui.base.Object" in registry
        assert len(registry) == 1

    def test_unknown_name(self) -> None:
        registry = ClassRegistry()
        assert registry.get("sap.m.Button") is None
        assert registry.get(None) is None

    def test_duplicate_keeps_first(self) -> None:
        registry = ClassRegistry()
        first = make_class("sap.m.Button")
        assert registry.add(first) is True
        assert registry.add(make_class("sap.m.Button", "sap.ui.core.Control")) is False
        assert registry.get("sap.m.Button") is first
        assert registry.subclasses_of("sap.ui.core.Control") == []

    def test_iteration_order(self) -> None:
        registry = ClassRegistry()
        names = ["c.C", "a.A", "b.B"]
        for name in names:
            registry.add(make_class(name))
        assert [c.full_name for c in registry] == names


class TestHierarchy:
    """Tests for base and subclass lookups."""

    def test_subclasses_in_order(self) -> None:
        registry = ClassRegistry()
        registry.add(make_class("a.Base"))
        registry.add(make_class("a.Second", "a.Base"))
        registry.add(make_class("a.First", "a.Base"))
        assert [c.full_name for c in registry.subclasses_of("a.Base")] == ["a.Second", "a.First"]

    def test_subclass_always_registered(self) -> None:
        registry = ClassRegistry()
        registry.add(make_class("a.Child", "a.Missing"))
        for subclass in registry.subclasses_of("a.Missing"):
            assert registry.get(subclass.full_name) is subclass

    def test_base_of_unresolved(self) -> None:
        registry = ClassRegistry()
        child = make_class("a.Child", "a.Missing")
        registry.add(child)
        assert registry.base_of(child) is None

    def test_base_chain(self) -> None:
        registry = ClassRegistry()
        registry.add(make_class("a.A"))
        registry.add(make_class("a.B", "a.A"))
        c = make_class("a.C", "a.B")
        registry.add(c)
        assert [n.full_name for n in registry.base_chain(c)] == ["a.C", "a.B", "a.A"]

    def test_base_chain_stops_on_cycle(self) -> None:
        registry = ClassRegistry()
        a = make_class("a.A", "a.B")
        registry.add(a)
        registry.add(make_class("a.B", "a.A"))
        assert [n.full_name for n in registry.base_chain(a)] == ["a.A", "a.B"]

    def test_roots(self) -> None:
        registry = ClassRegistry()
        registry.add(make_class("a.A"))
        registry.add(make_class("a.B", "a.A"))
        registry.add(make_class("a.Orphan", "ext.Unknown"))
        assert [c.full_name for c in registry.roots()] == ["a.A", "a.Orphan"]
