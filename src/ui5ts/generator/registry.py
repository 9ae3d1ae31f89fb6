"""Class registry.

Index over every class in the declaration tree. Classes are held in a
growable table; lookups go through a name index and a base-name index that
are updated together on every insert, so a subclass listed under a base name
always has its own entry too. Classes refer to their base only by name.
"""

from __future__ import annotations

import logging
from typing import Iterator

from ui5ts.generator.nodes import ClassNode

logger = logging.getLogger(__name__)


class ClassRegistry:
    """Name-indexed store of class nodes and their direct subclasses."""

    def __init__(self) -> None:
        self._classes: list[ClassNode] = []
        self._index_by_name: dict[str, int] = {}
        self._indices_by_base: dict[str, list[int]] = {}

    def add(self, class_node: ClassNode) -> bool:
        """Register a class.

        Args:
            class_node: The class to register.

        Returns:
            True if registered, False if a class with the same full name
            was already present (the first registration wins).
        """
        if class_node.full_name in self._index_by_name:
            logger.warning(f"Duplicate class '{class_node.full_name}' ignored")
            return False

        index = len(self._classes)
        self._classes.append(class_node)
        self._index_by_name[class_node.full_name] = index
        if class_node.base_class:
            self._indices_by_base.setdefault(class_node.base_class, []).append(index)
        return True

    def get(self, name: str | None) -> ClassNode | None:
        """Look up a class by full name. Unknown names yield None."""
        if name is None:
            return None
        index = self._index_by_name.get(name)
        return self._classes[index] if index is not None else None

    def base_of(self, class_node: ClassNode) -> ClassNode | None:
        return self.get(class_node.base_class)

    def subclasses_of(self, name: str) -> list[ClassNode]:
        """Direct subclasses of the named class, in registration order."""
        return [self._classes[i] for i in self._indices_by_base.get(name, [])]

    def base_chain(self, class_node: ClassNode) -> Iterator[ClassNode]:
        """Yield the class itself followed by each resolvable ancestor.

        The walk stops at the first unresolvable base name, and at a class
        already yielded if the input contains an inheritance cycle.
        """
        seen: set[str] = set()
        current: ClassNode | None = class_node
        while current is not None and current.full_name not in seen:
            seen.add(current.full_name)
            yield current
            current = self.base_of(current)

    def roots(self) -> list[ClassNode]:
        """Classes whose base class does not resolve, in registration order."""
        return [c for c in self._classes if self.base_of(c) is None]

    def __contains__(self, name: object) -> bool:
        return name in self._index_by_name

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[ClassNode]:
        return iter(self._classes)
