"""Declaration generator: tree, overload planning, override reconciliation, emission."""

from ui5ts.generator.collator import DeclarationCollator
from ui5ts.generator.compat import compatible
from ui5ts.generator.emitter import DeclarationEmitter
from ui5ts.generator.errors import GenerationError, PhaseError, UnsupportedKindError
from ui5ts.generator.nodes import (
    ClassNode,
    MethodNode,
    ParameterNode,
    PropertyNode,
    ReturnValue,
    SymbolNode,
)
from ui5ts.generator.overloads import plan_overloads
from ui5ts.generator.overrides import find_overridden, reconcile_overrides
from ui5ts.generator.registry import ClassRegistry
from ui5ts.generator.tree import ReconciledTree, SymbolTree, build_tree

__all__ = [
    "ClassNode",
    "ClassRegistry",
    "DeclarationCollator",
    "DeclarationEmitter",
    "GenerationError",
    "MethodNode",
    "ParameterNode",
    "PhaseError",
    "PropertyNode",
    "ReconciledTree",
    "ReturnValue",
    "SymbolNode",
    "SymbolTree",
    "UnsupportedKindError",
    "build_tree",
    "compatible",
    "find_overridden",
    "plan_overloads",
    "reconcile_overrides",
]
