"""Overload planning for TypeScript's parameter ordering rules.

api.json has methods where an optional parameter comes before a required
one, for example::

    attachPress(oData?, fnFunction, oListener?)
    onChange(oEvent, mParameters?, sNewValue)

TypeScript does not allow that, so such a method is split into overloads:
one without the leading optionals and one where they become required.

There are also methods where two adjacent optional parameters have unrelated
types, such as ``constructor(sId?: string, mSettings?: object)``, where
callers pass the second in place of the first. The earlier parameter is
widened to ``any`` so both call styles type-check.
"""

from __future__ import annotations

import logging

from ui5ts.generator.nodes import ParameterNode

logger = logging.getLogger(__name__)


def plan_overloads(parameters: list[ParameterNode]) -> list[list[ParameterNode]]:
    """Plan the overload parameter lists for one method.

    Only the leftmost optional-before-required pair is split per call; each
    half is planned again recursively, which handles the remaining pairs.

    Args:
        parameters: The method's parameters in declaration order.

    Returns:
        A non-empty list of parameter lists, one per overload.
    """
    if len(parameters) <= 1:
        return [parameters]

    for i in range(1, len(parameters)):
        previous, current = parameters[i - 1], parameters[i]
        if previous.is_optional() and current.is_required():
            without_optionals = [
                p for k, p in enumerate(parameters) if k >= i or p.is_required()
            ]
            all_required = [
                p if k >= i or p.is_required() else p.as_required()
                for k, p in enumerate(parameters)
            ]
            return plan_overloads(without_optionals) + plan_overloads(all_required)

    for i in range(1, len(parameters)):
        previous, current = parameters[i - 1], parameters[i]
        if previous.is_optional() and current.is_optional() and not current.is_compatible(previous):
            logger.debug(
                f"Parameter '{previous.name}: {previous.type}' widened to any "
                f"to accept '{current.name}: {current.type}' in its place"
            )
            previous.widen_to_any()
            break

    return [parameters]
