"""Type name replacement.

api.json types use JSDoc spelling (``int``, ``object``, ``sap.ui.core.CSSSize[]``,
``string|int``). This module maps each union member to its TypeScript
spelling using the configured replacement tables.
"""

from __future__ import annotations

import logging

from ui5ts.core.config import GeneratorConfig
from ui5ts.core.models import ANY

logger = logging.getLogger(__name__)

ARRAY_SUFFIX = "[]"


def _replace_single(type_name: str, config: GeneratorConfig) -> str:
    base = type_name.strip()
    dimensions = 0
    while base.endswith(ARRAY_SUFFIX):
        base = base[: -len(ARRAY_SUFFIX)].strip()
        dimensions += 1

    replacements = config.replacements
    if base in replacements.global_:
        base = replacements.global_[base]
    elif base in replacements.specific.namespace_as_type:
        base = replacements.specific.namespace_as_type[base]

    if base in replacements.warnings:
        logger.warning(f"Type '{base}' is marked as a warning in the configuration")

    if dimensions and "|" in base:
        base = f"({base})"
    return base + ARRAY_SUFFIX * dimensions


def replace_types(type_name: str | None, config: GeneratorConfig, full_name: str = "") -> str:
    """Convert an api.json type expression to TypeScript.

    Args:
        type_name: Type expression from api.json, possibly a ``|`` union.
        config: Generator configuration holding the replacement tables.
        full_name: Qualified name of the member being typed (for logging).

    Returns:
        The TypeScript type expression. Empty input yields ``any``.
    """
    if not type_name or not type_name.strip():
        return ANY

    parts: list[str] = []
    for member in type_name.split("|"):
        if not member.strip():
            continue
        replaced = _replace_single(member, config)
        if replaced not in parts:
            parts.append(replaced)

    result = ANY if not parts or ANY in parts else "|".join(parts)
    if result != type_name:
        logger.debug(f"{full_name}: type '{type_name}' replaced with '{result}'")
    return result
