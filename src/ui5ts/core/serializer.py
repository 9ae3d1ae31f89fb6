"""api.json parsing and serialization.

This module converts between the raw api.json text and the UI5API model,
reporting malformed input with the location of every validation error.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from ui5ts.core.models import UI5API


class SerializationError(Exception):
    """Error during serialization or deserialization."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


def _validation_details(error: ValidationError) -> str:
    error_details = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"])
        error_details.append(f"{loc}: {err['msg']}")
    return "; ".join(error_details)


def parse_api(json_str: str) -> UI5API:
    """Parse an api.json document.

    Args:
        json_str: JSON text of an api.json file.

    Returns:
        The parsed API description.

    Raises:
        SerializationError: If parsing fails with detailed error info.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise SerializationError(
            message="Invalid JSON format",
            details=f"Line {e.lineno}, column {e.colno}: {e.msg}",
        ) from e
    return parse_api_dict(data)


def parse_api_dict(data: dict[str, Any]) -> UI5API:
    """Validate an already decoded api.json document.

    Raises:
        SerializationError: If validation fails.
    """
    try:
        return UI5API.model_validate(data)
    except ValidationError as e:
        raise SerializationError(
            message="api.json validation failed",
            details=_validation_details(e),
        ) from e


def dump_api(api: UI5API, indent: str | int | None = 2) -> str:
    """Serialize an API description back to api.json text.

    Args:
        api: The API description.
        indent: Indentation passed to json.dumps.

    Returns:
        JSON text using the api.json (camelCase) key names.
    """
    data = api.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, indent=indent, ensure_ascii=False)
