"""Unit tests for GeneratorService."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ui5ts.core.config import GeneratorConfig
from ui5ts.core.serializer import parse_api_dict
from ui5ts.services.fetcher import FetchError
from ui5ts.services.generator_service import EXPORTS_FILE, GeneratorService


@pytest.fixture
def config(tmp_path: Path) -> GeneratorConfig:
    return GeneratorConfig.model_validate(
        {
            "output": {
                "definitionsPath": str(tmp_path / "declarations"),
                "exportsPath": str(tmp_path / "exports"),
            },
            "input": {"namespaces": ["sap/test"]},
            "replacements": {"global": {"object": "any", "function": "Function", "int": "number"}},
        }
    )


@pytest.fixture
def fetcher(sample_api_data) -> MagicMock:
    mock = MagicMock()
    mock.get_api.return_value = parse_api_dict(sample_api_data)
    return mock


class TestGenerate:
    """Tests for GeneratorService.generate."""

    def test_writes_files(self, tmp_path: Path, config: GeneratorConfig, fetcher: MagicMock) -> None:
        result = GeneratorService(config, fetcher).generate("1.60.0")

        assert result.success
        assert result.libraries == ["sap.test"]
        assert result.classes_count == 3
        assert result.symbols_count == 7
        fetcher.get_api.assert_called_once_with("sap/test", "1.60.0")

        definitions = tmp_path / "declarations" / "1.60.0" / "sap.test.d.ts"
        exports = tmp_path / "exports" / "1.60.0" / EXPORTS_FILE
        assert result.files_written == [definitions, exports]
        assert "class Derived extends sap.test.Base {" in definitions.read_text(encoding="utf-8")
        assert 'declare module "sap/test/Base"' in exports.read_text(encoding="utf-8")

    def test_fetch_error_collected(self, config: GeneratorConfig) -> None:
        fetcher = MagicMock()
        fetcher.get_api.side_effect = FetchError("Failed to fetch", url="http://x")

        result = GeneratorService(config, fetcher).generate("1.60.0")
        assert not result.success
        assert result.errors == ["Error fetching sap/test: Failed to fetch"]
        assert result.files_written == []

    def test_no_namespaces(self, tmp_path: Path, fetcher: MagicMock) -> None:
        result = GeneratorService(GeneratorConfig(), fetcher).generate("1.60.0")
        assert result.errors == ["No namespaces configured"]
        fetcher.get_api.assert_not_called()

    def test_write_error_collected(
        self, tmp_path: Path, config: GeneratorConfig, fetcher: MagicMock
    ) -> None:
        blocker = tmp_path / "exports"
        blocker.write_text("not a directory")

        result = GeneratorService(config, fetcher).generate("1.60.0")
        assert not result.success
        assert len(result.files_written) == 1
        assert result.errors[0].startswith("Error writing")
