"""API description models for the ui5ts declaration generator.

This module defines the read-only data structures parsed from an OpenUI5
``api.json`` file: symbols (a closed tagged union over namespace, class,
enum, interface and typedef), their members, and the root document.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Universal type markers shared by the generator.
VOID = "void"
ANY = "any"
THIS = "this"


class Kind(str, Enum):
    """Kind of API symbol."""

    NAMESPACE = "namespace"
    CLASS = "class"
    ENUM = "enum"
    INTERFACE = "interface"
    TYPEDEF = "typedef"


class Visibility(str, Enum):
    """Visibility of a symbol or member."""

    PUBLIC = "public"
    PROTECTED = "protected"
    RESTRICTED = "restricted"


class ApiModel(BaseModel):
    """Base class for all api.json models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ApiParameter(ApiModel):
    """A method or constructor parameter."""

    name: str
    type: str = ANY
    optional: bool = False
    spread: bool = False
    description: str = ""
    default_value: Any = Field(None, description="Default value, if documented")


class ReturnValueInfo(ApiModel):
    """Return value descriptor of a method."""

    type: str | None = None
    description: str | None = None


class ApiMethod(ApiModel):
    """A method declared on a namespace, class or interface."""

    name: str
    visibility: Visibility = Visibility.PUBLIC
    static: bool = False
    description: str = ""
    parameters: list[ApiParameter] = Field(default_factory=list)
    return_value: ReturnValueInfo | None = None


class ApiProperty(ApiModel):
    """A property or enum member."""

    name: str
    type: str = ANY
    visibility: Visibility = Visibility.PUBLIC
    static: bool = False
    description: str = ""


class ApiEvent(ApiModel):
    """An event fired by a class."""

    name: str
    visibility: Visibility = Visibility.PUBLIC
    description: str = ""
    parameters: dict[str, Any] = Field(default_factory=dict)


class ClassConstructor(ApiModel):
    """Constructor descriptor of a class."""

    visibility: Visibility = Visibility.PUBLIC
    description: str = ""
    parameters: list[ApiParameter] = Field(default_factory=list)


class SymbolBase(ApiModel):
    """Fields shared by every symbol kind."""

    name: str = Field(..., description="Fully qualified name")
    basename: str = Field(..., description="Simple name")
    visibility: Visibility = Visibility.PUBLIC
    module: str | None = None
    resource: str | None = None
    description: str = ""


class SymbolNamespace(SymbolBase):
    """A namespace with functions and fields."""

    kind: Literal["namespace"]
    extends: str | None = None
    methods: list[ApiMethod] = Field(default_factory=list)
    properties: list[ApiProperty] = Field(default_factory=list)
    events: list[ApiEvent] = Field(default_factory=list)


class SymbolClass(SymbolBase):
    """A class, optionally extending another class."""

    kind: Literal["class"]
    extends: str | None = None
    implements: list[str] = Field(default_factory=list)
    abstract: bool = False
    constructor: ClassConstructor | None = None
    methods: list[ApiMethod] = Field(default_factory=list)
    properties: list[ApiProperty] = Field(default_factory=list)
    events: list[ApiEvent] = Field(default_factory=list)


class SymbolEnum(SymbolBase):
    """An enumeration; its properties are the enum members."""

    kind: Literal["enum"]
    properties: list[ApiProperty] = Field(default_factory=list)


class SymbolInterface(SymbolBase):
    """An interface."""

    kind: Literal["interface"]
    extends: str | None = None
    methods: list[ApiMethod] = Field(default_factory=list)
    properties: list[ApiProperty] = Field(default_factory=list)
    events: list[ApiEvent] = Field(default_factory=list)


class SymbolTypedef(SymbolBase):
    """A typedef. Typedefs carry no members."""

    kind: Literal["typedef"]


Symbol = Annotated[
    Union[SymbolNamespace, SymbolClass, SymbolEnum, SymbolInterface, SymbolTypedef],
    Field(discriminator="kind"),
]


class UI5API(ApiModel):
    """Root of an api.json document."""

    library: str = ""
    version: str = ""
    symbols: list[Symbol] = Field(default_factory=list)
