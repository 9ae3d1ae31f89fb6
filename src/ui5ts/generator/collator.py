"""Declaration file collation.

Wraps the emitted method blocks and the remaining members (properties, enum
members, constructors) in namespace, class, interface and enum containers,
producing the text of a ``.d.ts`` file.
"""

from __future__ import annotations

import logging

from ui5ts.core.models import Kind
from ui5ts.generator.emitter import DeclarationEmitter, format_tsdoc, visibility_keyword
from ui5ts.generator.nodes import ClassNode, PropertyNode, SymbolNode
from ui5ts.generator.tree import ReconciledTree

logger = logging.getLogger(__name__)


class DeclarationCollator:
    """Renders a reconciled tree into declaration text."""

    def __init__(self, tree: ReconciledTree) -> None:
        self._tree = tree
        self._emitter = DeclarationEmitter(tree)
        self._indentation = tree.config.output.indentation

    def render_definitions(self, library: str | None = None) -> str:
        """Render the ambient declarations.

        Args:
            library: If given, only symbols of this library are rendered;
                their enclosing namespaces are still emitted as containers.

        Returns:
            The declaration file text.
        """
        lines: list[str] = []
        for root in self._tree.roots:
            if self._contains(root, library):
                lines.extend(self._render_node(root, 0, library, top_level=True))
                lines.append("")
        return "\n".join(lines)

    def render_exports(self, library: str | None = None) -> str:
        """Render ES module declarations for classes and enums with a module."""
        lines: list[str] = []
        for node in self._tree.iter_nodes():
            if node.kind not in (Kind.CLASS, Kind.ENUM) or not node.module:
                continue
            if library is not None and node.library != library:
                continue
            lines.append(f'declare module "{node.module}" {{')
            lines.append(f"{self._indentation}export default {node.full_name};")
            lines.append("}")
            lines.append("")
        return "\n".join(lines)

    def _contains(self, node: SymbolNode, library: str | None) -> bool:
        if library is None or (not node.synthetic and node.library == library):
            return True
        return any(self._contains(child, library) for child in node.children)

    def _owned(self, node: SymbolNode, library: str | None) -> bool:
        return not node.synthetic and (library is None or node.library == library)

    def _indent(self, text: str, level: int) -> list[str]:
        prefix = self._indentation * level
        return [f"{prefix}{line}" if line else line for line in text.split("\n")]

    def _doc(self, description: str, level: int) -> list[str]:
        if not description.strip():
            return []
        return self._indent("\n".join(format_tsdoc(description)), level)

    def _render_node(
        self, node: SymbolNode, level: int, library: str | None, top_level: bool = False
    ) -> list[str]:
        declare = "declare " if top_level else ""
        lines: list[str] = []

        if self._owned(node, library):
            match node.kind:
                case Kind.NAMESPACE:
                    lines.extend(self._render_namespace(node, level, library, declare))
                    return lines
                case Kind.CLASS:
                    lines.extend(self._render_class(node, level, declare))
                case Kind.INTERFACE:
                    lines.extend(self._render_interface(node, level, declare))
                case Kind.ENUM:
                    lines.extend(self._render_enum(node, level, declare))
                case Kind.TYPEDEF:
                    logger.debug(f"Typedef '{node.full_name}' has no declaration output")

        children = [c for c in node.children if self._contains(c, library)]
        if children:
            lines.extend(self._indent(f"{declare}namespace {node.name} {{", level))
            for child in children:
                lines.extend(self._render_node(child, level + 1, library))
            lines.extend(self._indent("}", level))
        return lines

    def _render_namespace(
        self, node: SymbolNode, level: int, library: str | None, declare: str
    ) -> list[str]:
        lines = self._doc(node.description, level)
        lines.extend(self._indent(f"{declare}namespace {node.name} {{", level))
        for prop in node.properties:
            lines.extend(self._render_property(prop, node.kind, level + 1))
        for method in node.methods:
            for block in self._emitter.emit_method(method):
                lines.extend(self._indent(block, level + 1))
        for child in node.children:
            if self._contains(child, library):
                lines.extend(self._render_node(child, level + 1, library))
        lines.extend(self._indent("}", level))
        return lines

    def _render_class(self, node: SymbolNode, level: int, declare: str) -> list[str]:
        header = f"{declare}class {node.name}"
        if node.extends:
            header += f" extends {node.extends}"
        if node.implements:
            header += f" implements {', '.join(node.implements)}"

        lines = self._doc(node.description, level)
        lines.extend(self._indent(f"{header} {{", level))
        if isinstance(node, ClassNode) and node.constructor is not None:
            for block in self._emitter.emit_method(node.constructor):
                lines.extend(self._indent(block, level + 1))
        for prop in node.properties:
            lines.extend(self._render_property(prop, node.kind, level + 1))
        for method in node.methods:
            for block in self._emitter.emit_method(method):
                lines.extend(self._indent(block, level + 1))
        lines.extend(self._indent("}", level))
        return lines

    def _render_interface(self, node: SymbolNode, level: int, declare: str) -> list[str]:
        header = f"{declare}interface {node.name}"
        if node.extends:
            header += f" extends {node.extends}"

        lines = self._doc(node.description, level)
        lines.extend(self._indent(f"{header} {{", level))
        for prop in node.properties:
            lines.extend(self._render_property(prop, node.kind, level + 1))
        for method in node.methods:
            for block in self._emitter.emit_method(method):
                lines.extend(self._indent(block, level + 1))
        lines.extend(self._indent("}", level))
        return lines

    def _render_enum(self, node: SymbolNode, level: int, declare: str) -> list[str]:
        lines = self._doc(node.description, level)
        lines.extend(self._indent(f"{declare}enum {node.name} {{", level))
        for member in node.properties:
            lines.extend(self._doc(member.description, level + 1))
            lines.extend(self._indent(f'{member.name} = "{member.name}",', level + 1))
        lines.extend(self._indent("}", level))
        return lines

    def _render_property(self, prop: PropertyNode, owner_kind: Kind, level: int) -> list[str]:
        match owner_kind:
            case Kind.NAMESPACE:
                declaration = f"var {prop.name}: {prop.type};"
            case Kind.INTERFACE:
                declaration = f"{prop.name}: {prop.type};"
            case _:
                static = "static " if prop.static else ""
                declaration = f"{visibility_keyword(prop.visibility)} {static}{prop.name}: {prop.type};"
        lines = self._doc(prop.description, level)
        lines.extend(self._indent(declaration, level))
        return lines
