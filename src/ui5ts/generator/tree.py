"""Declaration tree construction.

Generation runs in fixed phases:

1. ``build_tree`` turns api.json symbols into a ``SymbolTree`` and fills its
   ``ClassRegistry``.
2. ``SymbolTree.reconcile`` runs override reconciliation exactly once and
   returns a ``ReconciledTree``.
3. Emission (``DeclarationEmitter``, the collator) only accepts a
   ``ReconciledTree``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from ui5ts.core.config import GeneratorConfig
from ui5ts.core.models import (
    UI5API,
    Kind,
    SymbolClass,
    SymbolEnum,
    SymbolInterface,
    SymbolNamespace,
    SymbolTypedef,
)
from ui5ts.generator.errors import PhaseError
from ui5ts.generator.nodes import ClassNode, MethodNode, PropertyNode, SymbolNode
from ui5ts.generator.overrides import reconcile_overrides
from ui5ts.generator.registry import ClassRegistry

logger = logging.getLogger(__name__)


def _is_ignored(name: str, ignore: list[str]) -> bool:
    return any(name == entry or name.startswith(f"{entry}.") for entry in ignore)


def _create_node(symbol, library: str, config: GeneratorConfig) -> SymbolNode:
    name = symbol.name.rsplit(".", 1)[-1]
    common = {
        "name": name,
        "full_name": symbol.name,
        "library": library,
        "module": symbol.module,
        "description": symbol.description,
    }

    def methods(kind: Kind) -> list[MethodNode]:
        return [MethodNode.from_api(m, config, symbol.name, kind) for m in symbol.methods]

    def properties() -> list[PropertyNode]:
        return [PropertyNode.from_api(p, config, symbol.name) for p in symbol.properties]

    match symbol:
        case SymbolClass():
            return ClassNode(
                kind=Kind.CLASS,
                extends=symbol.extends,
                implements=list(symbol.implements),
                methods=methods(Kind.CLASS),
                properties=properties(),
                constructor=(
                    MethodNode.from_constructor(symbol.constructor, config, symbol.name)
                    if symbol.constructor is not None
                    else None
                ),
                **common,
            )
        case SymbolInterface():
            return SymbolNode(
                kind=Kind.INTERFACE,
                extends=symbol.extends,
                methods=methods(Kind.INTERFACE),
                properties=properties(),
                **common,
            )
        case SymbolNamespace():
            return SymbolNode(
                kind=Kind.NAMESPACE,
                methods=methods(Kind.NAMESPACE),
                properties=properties(),
                **common,
            )
        case SymbolEnum():
            return SymbolNode(kind=Kind.ENUM, properties=properties(), **common)
        case SymbolTypedef():
            return SymbolNode(kind=Kind.TYPEDEF, **common)
    raise TypeError(f"Unsupported symbol type: {type(symbol).__name__}")


class SymbolTree:
    """Declaration tree before override reconciliation."""

    def __init__(
        self, roots: list[SymbolNode], registry: ClassRegistry, config: GeneratorConfig
    ) -> None:
        self.roots = roots
        self.registry = registry
        self.config = config
        self._reconciled = False

    def reconcile(self) -> ReconciledTree:
        """Run override reconciliation and unlock emission.

        Raises:
            PhaseError: If the tree was already reconciled.
        """
        if self._reconciled:
            raise PhaseError("Override reconciliation already ran on this tree")
        reconcile_overrides(self.registry, self.config)
        self._reconciled = True
        return ReconciledTree(roots=self.roots, registry=self.registry, config=self.config)


@dataclass(frozen=True)
class ReconciledTree:
    """Declaration tree after override reconciliation; ready for emission."""

    roots: list[SymbolNode]
    registry: ClassRegistry
    config: GeneratorConfig

    def iter_nodes(self) -> Iterator[SymbolNode]:
        """Yield every node, parents before children, in declaration order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def libraries(self) -> list[str]:
        """Libraries contributing symbols, in order of first appearance."""
        seen: dict[str, None] = {}
        for node in self.iter_nodes():
            if not node.synthetic and node.library:
                seen.setdefault(node.library, None)
        return list(seen)

    def find_method(self, full_name: str) -> MethodNode | None:
        """Find a method or constructor by full name."""
        for node in self.iter_nodes():
            candidates = list(node.methods)
            if isinstance(node, ClassNode) and node.constructor is not None:
                candidates.append(node.constructor)
            for method in candidates:
                if method.full_name == full_name:
                    return method
        return None


def build_tree(apis: Iterable[UI5API], config: GeneratorConfig) -> SymbolTree:
    """Build the declaration tree from one or more api.json documents.

    Symbols are nested by their dotted names. Namespaces that only appear as
    prefixes are created as synthetic containers. Symbols listed in
    ``config.ignore`` are skipped with all their descendants.

    Args:
        apis: Parsed api.json documents, typically one per library.
        config: Generator configuration.

    Returns:
        The unreconciled tree.
    """
    nodes: dict[str, SymbolNode] = {}
    order: list[SymbolNode] = []
    registry = ClassRegistry()

    for api in apis:
        for symbol in api.symbols:
            if _is_ignored(symbol.name, config.ignore):
                logger.debug(f"Symbol '{symbol.name}' ignored by configuration")
                continue
            if symbol.name in nodes:
                logger.warning(f"Duplicate symbol '{symbol.name}' in {api.library or 'api.json'} ignored")
                continue
            node = _create_node(symbol, api.library, config)
            nodes[symbol.name] = node
            order.append(node)
            if isinstance(node, ClassNode):
                registry.add(node)

    roots: list[SymbolNode] = []
    for node in order:
        _attach(node, nodes, roots)

    logger.info(f"Built tree with {len(nodes)} symbols and {len(registry)} classes")
    return SymbolTree(roots=roots, registry=registry, config=config)


def _attach(node: SymbolNode, nodes: dict[str, SymbolNode], roots: list[SymbolNode]) -> None:
    if "." not in node.full_name:
        roots.append(node)
        return

    parent_name = node.full_name.rsplit(".", 1)[0]
    parent = nodes.get(parent_name)
    if parent is None:
        parent = SymbolNode(
            kind=Kind.NAMESPACE,
            name=parent_name.rsplit(".", 1)[-1],
            full_name=parent_name,
            library=node.library,
            synthetic=True,
        )
        nodes[parent_name] = parent
        _attach(parent, nodes, roots)
    parent.children.append(node)
