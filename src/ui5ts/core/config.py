"""Configuration for ui5ts.

Two layers are provided here:

* ``Ui5tsSettings`` holds process-level settings (where the generator config
  lives, fetch timeouts, log level) with support for environment variables
  and sensible defaults.
* ``GeneratorConfig`` holds the generator's JSON configuration: where the
  api.json files come from, where declarations are written, and the
  replacement rules applied while generating.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings


class Ui5tsSettings(BaseSettings):
    """ui5ts runtime settings.

    Values can be overridden via environment variables with UI5TS_ prefix.
    Example: UI5TS_FETCH_RETRIES=5 overrides fetch_retries.
    """

    config_path: Path = Field(
        default=Path("ui5ts.config.json"),
        description="Path of the generator JSON configuration file",
    )

    # Remote fetch
    fetch_timeout: float = Field(
        default=30.0,
        ge=1,
        le=300,
        description="Timeout in seconds for a single api.json request",
    )
    fetch_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum number of attempts per api.json request",
    )
    fetch_retry_delay: float = Field(
        default=1.0,
        ge=0,
        description="Base delay between attempts (exponential backoff)",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level used by the CLI",
    )

    model_config = {
        "env_prefix": "UI5TS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Ui5tsSettings:
    """Get cached settings instance.

    Returns:
        Ui5tsSettings singleton instance.
    """
    return Ui5tsSettings()


def reload_settings() -> Ui5tsSettings:
    """Reload settings (clears cache).

    Returns:
        Fresh Ui5tsSettings instance.
    """
    get_settings.cache_clear()
    return get_settings()


class ConfigError(Exception):
    """Error while loading the generator configuration."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigSection(BaseModel):
    """Base class for generator config sections (camelCase keys in JSON)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class LocalConfig(ConfigSection):
    """Local api.json cache."""

    run_local: bool = False
    path: str = "./apis"


class OutputConfig(ConfigSection):
    """Where and how declarations are written."""

    exports_path: str = "./exports"
    definitions_path: str = "./declarations"
    indentation: str = "    "


class InputConfig(ConfigSection):
    """Where api.json files are fetched from."""

    api_base_url: str = "https://openui5.hana.ondemand.com/{{VERSION}}/test-resources"
    json_location: str = "designtime/api.json"
    versions: list[str] = Field(default_factory=list)
    namespaces: list[str] = Field(default_factory=list)


class SpecificReplacements(ConfigSection):
    """Replacement rules keyed by qualified name or ``*.<name>``."""

    namespace_as_type: dict[str, str] = Field(default_factory=dict)
    method_parameter_type: dict[str, str] = Field(default_factory=dict)
    method_return_type: dict[str, str] = Field(default_factory=dict)
    property_type: dict[str, str] = Field(default_factory=dict)
    method_overrides_not_compatible: list[str] = Field(default_factory=list)
    method_remove_static: list[str] = Field(default_factory=list)
    method_return_type_not_this: list[str] = Field(default_factory=list)
    filter_methods: list[str] = Field(default_factory=list)


class Replacements(ConfigSection):
    """Type replacement rules."""

    global_: dict[str, str] = Field(default_factory=dict, alias="global")
    warnings: list[str] = Field(default_factory=list)
    specific: SpecificReplacements = Field(default_factory=SpecificReplacements)


class GeneratorConfig(ConfigSection):
    """The generator JSON configuration."""

    local: LocalConfig = Field(default_factory=LocalConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    ignore: list[str] = Field(default_factory=list)
    ignore_static: list[str] = Field(default_factory=list)
    replacements: Replacements = Field(default_factory=Replacements)


def load_generator_config(path: Path) -> GeneratorConfig:
    """Load the generator configuration from a JSON file.

    Args:
        path: Path of the JSON configuration file.

    Returns:
        The validated GeneratorConfig.

    Raises:
        ConfigError: If the file is missing, is not JSON, or fails validation.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(
            message=f"Cannot read config file '{path}'",
            details=str(e),
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigError(
            message="Invalid JSON format",
            details=f"Line {e.lineno}, column {e.colno}: {e.msg}",
        ) from e

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        error_details = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            error_details.append(f"{loc}: {err['msg']}")
        raise ConfigError(
            message="Config validation failed",
            details="; ".join(error_details),
        ) from e


def matches_name(names: Iterable[str], full_name: str, name: str) -> bool:
    """Check a name list for a full name or its ``*.<name>`` wildcard."""
    names = set(names)
    return full_name in names or f"*.{name}" in names


def lookup_name(mapping: Mapping[str, str], full_name: str, name: str) -> str | None:
    """Look up a replacement by full name, falling back to ``*.<name>``."""
    return mapping.get(full_name) or mapping.get(f"*.{name}")
