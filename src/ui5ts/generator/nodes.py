"""Declaration tree nodes.

Nodes are built once from the read-only api.json symbols. Configured
replacements (forced types, static removal, self-type inference) are applied
at construction time; after that only the override reconciliation pass may
change a method's return type or visibility.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ui5ts.core.config import GeneratorConfig, lookup_name, matches_name
from ui5ts.core.models import (
    ANY,
    THIS,
    VOID,
    ApiMethod,
    ApiParameter,
    ApiProperty,
    ClassConstructor,
    Kind,
    Visibility,
)
from ui5ts.generator.types import replace_types

logger = logging.getLogger(__name__)

CONSTRUCTOR = "constructor"


def _array_of(type_name: str) -> str:
    if type_name.endswith("[]"):
        return type_name
    if "|" in type_name:
        return f"({type_name})[]"
    return f"{type_name}[]"


@dataclass
class ParameterNode:
    """A method parameter."""

    name: str
    type: str = ANY
    optional: bool = False
    spread: bool = False
    description: str = ""
    has_default: bool = False

    @classmethod
    def from_api(
        cls, parameter: ApiParameter, config: GeneratorConfig, method_full_name: str
    ) -> ParameterNode:
        full_name = f"{method_full_name}.{parameter.name}"
        forced = lookup_name(
            config.replacements.specific.method_parameter_type, full_name, parameter.name
        )
        return cls(
            name=parameter.name,
            type=forced or replace_types(parameter.type, config, full_name),
            optional=parameter.optional,
            spread=parameter.spread,
            description=parameter.description,
            has_default=parameter.default_value is not None,
        )

    def is_optional(self) -> bool:
        return self.optional

    def is_required(self) -> bool:
        return not self.optional

    def is_compatible(self, other: ParameterNode) -> bool:
        """Check whether either parameter can be passed in place of the other.

        Only raw type identity is considered; ``any`` is compatible with
        everything.
        """
        return self.type == other.type or self.type == ANY or other.type == ANY

    def as_required(self) -> ParameterNode:
        """Return a required copy of this parameter. The original is untouched."""
        return replace(self, optional=False)

    def widen_to_any(self) -> None:
        """Widen the declared type to ``any`` in place.

        This loses call-site type safety. It is the fallback for adjacent
        optional parameters of unrelated types; a union type would be more
        precise where the output format allows it.
        """
        self.type = ANY

    def to_typescript(self) -> str:
        if self.spread:
            return f"...{self.name}: {_array_of(self.type)}"
        marker = "?" if self.optional else ""
        return f"{self.name}{marker}: {self.type}"

    def to_tsdoc(self) -> str:
        name = f"[{self.name}]" if self.optional else self.name
        return f"@param {{{self.type}}} {name} {self.description}".rstrip()


@dataclass
class ReturnValue:
    """Return descriptor of a method."""

    type: str = VOID
    description: str = ""


@dataclass
class MethodNode:
    """A method, function or constructor.

    ``parent_kind`` is captured when the node is built and decides the
    declaration shape; there is no link back to the parent node.
    """

    name: str
    full_name: str
    parent_name: str
    parent_kind: Kind
    static: bool = False
    visibility: Visibility = Visibility.PUBLIC
    description: str = ""
    parameters: list[ParameterNode] = field(default_factory=list)
    return_value: ReturnValue = field(default_factory=ReturnValue)

    @property
    def return_type(self) -> str:
        return self.return_value.type

    @return_type.setter
    def return_type(self, value: str) -> None:
        self.return_value.type = value

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR

    @classmethod
    def from_api(
        cls,
        method: ApiMethod,
        config: GeneratorConfig,
        parent_name: str,
        parent_kind: Kind,
    ) -> MethodNode:
        """Build a method node, applying the configured replacements.

        Args:
            method: The api.json method.
            config: Generator configuration.
            parent_name: Full name of the enclosing symbol.
            parent_kind: Kind of the enclosing symbol.

        Returns:
            The method node.
        """
        specific = config.replacements.specific
        full_name = f"{parent_name}.{method.name}"

        is_static = method.static
        if is_static and matches_name(specific.method_remove_static, full_name, method.name):
            logger.debug(f"{full_name}: static modifier removed by configuration")
            is_static = False

        return_info = method.return_value
        description = (return_info and return_info.description) or ""
        forced = lookup_name(specific.method_return_type, full_name, method.name)
        return_type = forced or (return_info and return_info.type) or (ANY if description else VOID)
        return_type = replace_types(return_type, config, full_name)

        if (
            not is_static
            and method.name != CONSTRUCTOR
            and parent_kind == Kind.CLASS
            and return_type == parent_name
            and full_name not in specific.method_return_type_not_this
        ):
            return_type = THIS

        return cls(
            name=method.name,
            full_name=full_name,
            parent_name=parent_name,
            parent_kind=parent_kind,
            static=is_static,
            visibility=method.visibility,
            description=method.description,
            parameters=[ParameterNode.from_api(p, config, full_name) for p in method.parameters],
            return_value=ReturnValue(type=return_type, description=description),
        )

    @classmethod
    def from_constructor(
        cls, constructor: ClassConstructor, config: GeneratorConfig, parent_name: str
    ) -> MethodNode:
        full_name = f"{parent_name}.{CONSTRUCTOR}"
        return cls(
            name=CONSTRUCTOR,
            full_name=full_name,
            parent_name=parent_name,
            parent_kind=Kind.CLASS,
            visibility=constructor.visibility,
            description=constructor.description,
            parameters=[ParameterNode.from_api(p, config, full_name) for p in constructor.parameters],
        )


@dataclass
class PropertyNode:
    """A property, namespace field or enum member."""

    name: str
    full_name: str
    type: str = ANY
    static: bool = False
    visibility: Visibility = Visibility.PUBLIC
    description: str = ""

    @classmethod
    def from_api(
        cls, prop: ApiProperty, config: GeneratorConfig, parent_name: str
    ) -> PropertyNode:
        full_name = f"{parent_name}.{prop.name}"
        forced = lookup_name(config.replacements.specific.property_type, full_name, prop.name)
        return cls(
            name=prop.name,
            full_name=full_name,
            type=forced or replace_types(prop.type, config, full_name),
            static=prop.static,
            visibility=prop.visibility,
            description=prop.description,
        )


@dataclass
class SymbolNode:
    """A namespace, class, interface, enum or typedef in the declaration tree.

    ``synthetic`` marks namespaces created only to hold nested symbols whose
    parent namespace is not described in api.json.
    """

    kind: Kind
    name: str
    full_name: str
    library: str = ""
    module: str | None = None
    description: str = ""
    extends: str | None = None
    implements: list[str] = field(default_factory=list)
    methods: list[MethodNode] = field(default_factory=list)
    properties: list[PropertyNode] = field(default_factory=list)
    children: list[SymbolNode] = field(default_factory=list)
    synthetic: bool = False


@dataclass
class ClassNode(SymbolNode):
    """A class symbol, the unit indexed by ClassRegistry."""

    constructor: MethodNode | None = None

    @property
    def base_class(self) -> str | None:
        return self.extends

    def find_method(self, name: str, static: bool) -> MethodNode | None:
        """Find an own method by name and static-ness."""
        for method in self.methods:
            if method.name == name and method.static == static:
                return method
        return None
