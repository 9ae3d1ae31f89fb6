"""Method declaration emitter.

Turns a reconciled method into TypeScript declaration blocks, one per
planned overload. Each block is a TSDoc comment followed by the signature.
Blocks carry no indentation; the collator indents them.
"""

from __future__ import annotations

import re
from typing import Iterable

from ui5ts.core.config import matches_name
from ui5ts.core.models import ANY, VOID, Kind, Visibility
from ui5ts.generator.errors import PhaseError, UnsupportedKindError
from ui5ts.generator.nodes import MethodNode, ParameterNode, ReturnValue
from ui5ts.generator.overloads import plan_overloads
from ui5ts.generator.tree import ReconciledTree

_NEWLINES = re.compile(r"\r\n|\r|\n")

COMPATIBILITY_DESCRIPTION = (
    "This method overload is here just for compatibility reasons to avoid compiler errors, "
    "because the UI5 API doesn't follow all TypeScript method override rules. Don't use it."
)


def format_tsdoc(description: str, tags: Iterable[str] = ()) -> list[str]:
    """Format a TSDoc comment.

    Args:
        description: Free text, possibly spanning several lines.
        tags: Tag lines such as ``@param``; line breaks inside are flattened.

    Returns:
        The comment lines, from ``/**`` to `` */``.
    """
    lines = ["/**"]
    if description.strip():
        for line in _NEWLINES.split(description.strip()):
            lines.append(f" * {line.rstrip()}".replace("*/", "*\\/").rstrip())
    for tag in tags:
        lines.append(f" * {_NEWLINES.sub(' ', tag)}".replace("*/", "*\\/"))
    lines.append(" */")
    return lines


def visibility_keyword(visibility: Visibility) -> str:
    """TypeScript keyword for a visibility; restricted is rendered as protected."""
    if visibility == Visibility.RESTRICTED:
        return Visibility.PROTECTED.value
    return visibility.value


class DeclarationEmitter:
    """Emits method declarations from a reconciled tree.

    Only a ReconciledTree is accepted, so emission can never observe return
    types or visibility that reconciliation has yet to fix.
    """

    def __init__(self, tree: ReconciledTree) -> None:
        if not isinstance(tree, ReconciledTree):
            raise PhaseError("Declarations can only be emitted from a reconciled tree")
        self._config = tree.config

    def should_ignore(self, method: MethodNode) -> bool:
        """Check whether the configuration drops this method."""
        if method.parent_kind == Kind.CLASS and method.static:
            if method.full_name in self._config.ignore_static:
                return True
        return matches_name(
            self._config.replacements.specific.filter_methods, method.full_name, method.name
        )

    def emit_method(self, method: MethodNode) -> list[str]:
        """Emit the declaration blocks of a method.

        Args:
            method: A method from the reconciled tree.

        Returns:
            One block per planned overload, plus the compatibility overload
            when configured. Empty if the method is ignored.

        Raises:
            UnsupportedKindError: If the method's enclosing kind cannot
                declare methods.
        """
        if self.should_ignore(method):
            return []

        blocks = [
            self._block(method, method.description, parameters, method.return_value)
            for parameters in plan_overloads(method.parameters)
        ]

        if method.full_name in self._config.replacements.specific.method_overrides_not_compatible:
            args = ParameterNode(name="args", type=f"{ANY}[]", spread=True)
            blocks.append(
                self._block(method, COMPATIBILITY_DESCRIPTION, [args], ReturnValue(type=ANY))
            )
        return blocks

    def _block(
        self,
        method: MethodNode,
        description: str,
        parameters: list[ParameterNode],
        return_value: ReturnValue,
    ) -> str:
        tags = [p.to_tsdoc() for p in parameters]
        if return_value.type != VOID:
            tags.append(f"@returns {{{return_value.type}}} {return_value.description}".rstrip())
        lines = format_tsdoc(description, tags)
        lines.append(self._signature(method, parameters, return_value.type))
        return "\n".join(lines)

    def _signature(
        self, method: MethodNode, parameters: list[ParameterNode], return_type: str
    ) -> str:
        match method.parent_kind:
            case Kind.NAMESPACE:
                declaration = "function "
            case Kind.INTERFACE:
                declaration = ""
            case Kind.CLASS:
                static = "static " if method.static else ""
                declaration = f"{visibility_keyword(method.visibility)} {static}"
            case _:
                raise UnsupportedKindError(method.parent_kind.value, method.full_name)

        params = ", ".join(p.to_typescript() for p in parameters)
        annotation = "" if method.is_constructor else f": {return_type}"
        return f"{declaration}{method.name}({params}){annotation};"
