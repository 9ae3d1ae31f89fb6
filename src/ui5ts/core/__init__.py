"""Core module containing api.json models, configuration and serializer."""

from ui5ts.core.config import (
    ConfigError,
    GeneratorConfig,
    Ui5tsSettings,
    get_settings,
    load_generator_config,
    reload_settings,
)
from ui5ts.core.models import (
    ANY,
    THIS,
    UI5API,
    VOID,
    ApiMethod,
    ApiParameter,
    ApiProperty,
    ClassConstructor,
    Kind,
    ReturnValueInfo,
    SymbolClass,
    SymbolEnum,
    SymbolInterface,
    SymbolNamespace,
    SymbolTypedef,
    Visibility,
)
from ui5ts.core.serializer import SerializationError, dump_api, parse_api, parse_api_dict

__all__ = [
    "ANY",
    "ApiMethod",
    "ApiParameter",
    "ApiProperty",
    "ClassConstructor",
    "ConfigError",
    "GeneratorConfig",
    "Kind",
    "ReturnValueInfo",
    "SerializationError",
    "SymbolClass",
    "SymbolEnum",
    "SymbolInterface",
    "SymbolNamespace",
    "SymbolTypedef",
    "THIS",
    "UI5API",
    "Ui5tsSettings",
    "VOID",
    "Visibility",
    "dump_api",
    "get_settings",
    "load_generator_config",
    "parse_api",
    "parse_api_dict",
    "reload_settings",
]
