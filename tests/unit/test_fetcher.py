"""Unit tests for ApiFetcher."""

import json
from pathlib import Path

import httpx
import pytest

from ui5ts.core.config import GeneratorConfig, Ui5tsSettings
from ui5ts.core.serializer import SerializationError
from ui5ts.services.fetcher import ApiFetcher, FetchError

BASE_URL = "https://ui5.example.com/{{VERSION}}/test-resources"


@pytest.fixture
def settings() -> Ui5tsSettings:
    return Ui5tsSettings(_env_file=None, fetch_retries=3, fetch_retry_delay=0)


def make_config(tmp_path: Path | None = None, run_local: bool = False) -> GeneratorConfig:
    data = {"input": {"apiBaseUrl": BASE_URL}}
    if tmp_path is not None:
        data["local"] = {"runLocal": run_local, "path": str(tmp_path / "apis")}
    return GeneratorConfig.model_validate(data)


def make_fetcher(config, settings, handler) -> ApiFetcher:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ApiFetcher(config, settings=settings, client=client)


class TestLocations:
    """Tests for URL and cache path construction."""

    def test_remote_url(self, settings: Ui5tsSettings) -> None:
        fetcher = ApiFetcher(make_config(), settings=settings)
        assert (
            fetcher.remote_url("sap/m", "1.60.0")
            == "https://ui5.example.com/1.60.0/test-resources/sap/m/designtime/api.json"
        )

    def test_local_path(self, tmp_path: Path, settings: Ui5tsSettings) -> None:
        fetcher = ApiFetcher(make_config(tmp_path), settings=settings)
        assert fetcher.local_path("sap/m", "1.60.0") == tmp_path / "apis/sap/m/designtime/api.json"


class TestServerFetch:
    """Tests for fetching from the server."""

    def test_success(self, sample_api_data, settings: Ui5tsSettings) -> None:
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, json=sample_api_data)

        with make_fetcher(make_config(), settings, handler) as fetcher:
            api = fetcher.get_api("sap/test", "1.60.0")

        assert api.library == "sap.test"
        assert requested == [
            "https://ui5.example.com/1.60.0/test-resources/sap/test/designtime/api.json"
        ]

    def test_retries_server_errors(self, sample_api_data, settings: Ui5tsSettings) -> None:
        responses = [httpx.Response(503), httpx.Response(502), httpx.Response(200, json=sample_api_data)]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        api = make_fetcher(make_config(), settings, handler).get_server_api("sap/test", "1.60.0")
        assert api.library == "sap.test"
        assert responses == []

    def test_retries_transport_errors(self, sample_api_data, settings: Ui5tsSettings) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=sample_api_data)

        api = make_fetcher(make_config(), settings, handler).get_server_api("sap/test", "1.60.0")
        assert api.library == "sap.test"
        assert len(calls) == 2

    def test_gives_up_after_retries(self, settings: Ui5tsSettings) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        fetcher = make_fetcher(make_config(), settings, handler)
        with pytest.raises(FetchError) as exc_info:
            fetcher.get_server_api("sap/test", "1.60.0")
        assert len(calls) == 3
        assert "500" in exc_info.value.message
        assert exc_info.value.url.endswith("/sap/test/designtime/api.json")

    def test_client_error_not_retried(self, settings: Ui5tsSettings) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(404)

        with pytest.raises(FetchError):
            make_fetcher(make_config(), settings, handler).get_server_api("sap/test", "1.60.0")
        assert len(calls) == 1

    def test_invalid_document(self, settings: Ui5tsSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        with pytest.raises(SerializationError):
            make_fetcher(make_config(), settings, handler).get_server_api("sap/test", "1.60.0")


class TestLocalCache:
    """Tests for the local api.json cache."""

    def test_fetches_and_writes_missing_file(
        self, tmp_path: Path, sample_api_data, settings: Ui5tsSettings
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=sample_api_data)

        fetcher = make_fetcher(make_config(tmp_path, run_local=True), settings, handler)
        api = fetcher.get_api("sap/test", "1.60.0")

        path = fetcher.local_path("sap/test", "1.60.0")
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8"))["library"] == api.library

    def test_reads_existing_file(
        self, tmp_path: Path, sample_api_data, settings: Ui5tsSettings
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("server must not be contacted")

        fetcher = make_fetcher(make_config(tmp_path, run_local=True), settings, handler)
        path = fetcher.local_path("sap/test", "1.60.0")
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps(sample_api_data), encoding="utf-8")

        assert fetcher.get_api("sap/test", "1.60.0").library == "sap.test"

    def test_cache_disabled(self, tmp_path: Path, sample_api_data, settings: Ui5tsSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=sample_api_data)

        fetcher = make_fetcher(make_config(tmp_path), settings, handler)
        fetcher.get_api("sap/test", "1.60.0")
        assert not fetcher.local_path("sap/test", "1.60.0").exists()
