"""Shared pytest fixtures for ui5ts tests."""

import pytest
from dotenv import load_dotenv
from hypothesis import settings

from ui5ts.core.config import GeneratorConfig

# Load environment variables from .env file
load_dotenv()

# Configure hypothesis for property-based testing
settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.load_profile("dev")


@pytest.fixture
def generator_config() -> GeneratorConfig:
    """Provide a generator config with the usual JSDoc type replacements."""
    return GeneratorConfig.model_validate(
        {
            "replacements": {
                "global": {
                    "object": "any",
                    "function": "Function",
                    "int": "number",
                    "float": "number",
                },
            },
        }
    )


@pytest.fixture
def sample_api_data() -> dict:
    """Provide a small api.json document as decoded JSON."""
    return {
        "library": "sap.test",
        "version": "1.60.0",
        "symbols": [
            {
                "kind": "namespace",
                "name": "sap.test",
                "basename": "test",
                "description": "Test library.",
                "methods": [
                    {
                        "name": "getCore",
                        "visibility": "public",
                        "static": True,
                        "returnValue": {"type": "sap.test.Base", "description": "The core"},
                    }
                ],
            },
            {
                "kind": "class",
                "name": "sap.test.Base",
                "basename": "Base",
                "module": "sap/test/Base",
                "visibility": "public",
                "description": "Base class.",
                "constructor": {
                    "visibility": "public",
                    "parameters": [
                        {"name": "sId", "type": "string", "optional": True},
                        {"name": "mSettings", "type": "object", "optional": True},
                    ],
                },
                "methods": [
                    {
                        "name": "setText",
                        "visibility": "public",
                        "parameters": [{"name": "sText", "type": "string"}],
                        "returnValue": {"type": "sap.test.Base", "description": "this"},
                    },
                    {
                        "name": "attachPress",
                        "visibility": "public",
                        "parameters": [
                            {"name": "oData", "type": "object", "optional": True},
                            {"name": "fnFunction", "type": "function"},
                            {"name": "oListener", "type": "object", "optional": True},
                        ],
                    },
                    {
                        "name": "getModel",
                        "visibility": "public",
                        "returnValue": {"type": "sap.test.Model"},
                    },
                ],
            },
            {
                "kind": "class",
                "name": "sap.test.Derived",
                "basename": "Derived",
                "module": "sap/test/Derived",
                "extends": "sap.test.Base",
                "methods": [
                    {
                        "name": "getModel",
                        "visibility": "protected",
                        "returnValue": {"type": "string"},
                    },
                ],
            },
            {
                "kind": "class",
                "name": "sap.test.Model",
                "basename": "Model",
                "properties": [
                    {"name": "name", "type": "string", "visibility": "public"},
                ],
            },
            {
                "kind": "interface",
                "name": "sap.test.IFormattable",
                "basename": "IFormattable",
                "methods": [
                    {
                        "name": "format",
                        "visibility": "public",
                        "parameters": [{"name": "iValue", "type": "int"}],
                        "returnValue": {"type": "string"},
                    }
                ],
            },
            {
                "kind": "enum",
                "name": "sap.test.ButtonType",
                "basename": "ButtonType",
                "module": "sap/test/ButtonType",
                "properties": [
                    {"name": "Accept", "static": True, "visibility": "public"},
                    {"name": "Reject", "static": True, "visibility": "public"},
                ],
            },
            {
                "kind": "typedef",
                "name": "sap.test.Options",
                "basename": "Options",
            },
        ],
    }
