"""Override reconciliation.

api.json does not always follow TypeScript's override rules: a subclass may
redeclare a method with a return type unrelated to the base method's, or
narrow a public method to protected. This pass runs once, after the whole
tree is built and before anything is printed, and fixes subclass methods to
agree with the nearest method they override.
"""

from __future__ import annotations

import logging

from ui5ts.core.config import GeneratorConfig
from ui5ts.core.models import ANY, THIS, Visibility
from ui5ts.generator.compat import compatible
from ui5ts.generator.nodes import ClassNode, MethodNode
from ui5ts.generator.registry import ClassRegistry

logger = logging.getLogger(__name__)


def find_overridden(
    class_node: ClassNode, method: MethodNode, registry: ClassRegistry
) -> tuple[ClassNode, MethodNode] | None:
    """Find the nearest ancestor method overridden by ``method``.

    Walks the base chain of ``class_node`` upward, starting at its base
    class, and returns the first method with the same name and static-ness
    together with its declaring class.
    """
    base = registry.base_of(class_node)
    if base is None:
        return None
    for ancestor in registry.base_chain(base):
        if ancestor is class_node:
            break
        overridden = ancestor.find_method(method.name, method.static)
        if overridden is not None:
            return ancestor, overridden
    return None


def reconcile_overrides(registry: ClassRegistry, config: GeneratorConfig) -> None:
    """Fix return types and visibility of every overriding method in place.

    Each inheritance root is descended depth-first so a base class is always
    fixed before its subclasses. Running the pass again changes nothing.

    Args:
        registry: The fully populated class registry.
        config: Generator configuration (self-type exclusion list).
    """
    for root in registry.roots():
        _reconcile_subclasses(root, registry, config)


def _reconcile_subclasses(
    base_class: ClassNode, registry: ClassRegistry, config: GeneratorConfig
) -> None:
    for subclass in registry.subclasses_of(base_class.full_name):
        for method in subclass.methods:
            _reconcile_method(subclass, method, registry, config)
        _reconcile_subclasses(subclass, registry, config)


def _reconcile_method(
    subclass: ClassNode,
    method: MethodNode,
    registry: ClassRegistry,
    config: GeneratorConfig,
) -> None:
    found = find_overridden(subclass, method, registry)
    if found is None:
        return
    declaring_class, overridden = found

    new_return_type: str | None = None
    if not compatible(overridden.return_type, method.return_type, registry):
        if overridden.return_type == declaring_class.full_name:
            # fluent method: the subclass returns itself
            excluded = method.full_name in config.replacements.specific.method_return_type_not_this
            if method.return_type != subclass.full_name and not excluded:
                new_return_type = subclass.full_name
        else:
            new_return_type = overridden.return_type

    if new_return_type and new_return_type != ANY and method.return_type != THIS:
        logger.debug(
            f"{method.full_name}: return type '{method.return_type}' replaced with "
            f"'{new_return_type}' to match '{overridden.full_name}'"
        )
        method.return_type = new_return_type

    if overridden.visibility == Visibility.PUBLIC and method.visibility == Visibility.PROTECTED:
        logger.debug(f"{method.full_name}: visibility widened to public")
        method.visibility = Visibility.PUBLIC
