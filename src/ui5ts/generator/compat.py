"""Return type compatibility between an overridden and an overriding method."""

from __future__ import annotations

from ui5ts.core.models import ANY, THIS, VOID
from ui5ts.generator.registry import ClassRegistry


def compatible(expected: str, candidate: str, registry: ClassRegistry) -> bool:
    """Check whether ``candidate`` can stand in for ``expected``.

    Rules, in order: equal names; ``expected`` is ``void``; ``candidate`` is
    ``any`` or ``this``. Otherwise both names must be registered classes and
    ``expected`` must appear (by simple name) on ``candidate``'s base chain.
    Anything not known to be related is incompatible.

    Args:
        expected: Return type of the overridden method.
        candidate: Return type of the overriding method.
        registry: Registry of all classes.

    Returns:
        True if compatible.
    """
    if expected == candidate or expected == VOID or candidate in (ANY, THIS):
        return True

    expected_class = registry.get(expected)
    candidate_class = registry.get(candidate)
    if expected_class is None or candidate_class is None:
        return False

    return any(link.name == expected_class.name for link in registry.base_chain(candidate_class))
