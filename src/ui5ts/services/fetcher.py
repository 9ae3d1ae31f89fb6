"""api.json retrieval from a local cache or the UI5 SDK server.

Fetching completes, retries included, before any tree is built; the
generator itself never touches the network or the cache.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import httpx

from ui5ts.core.config import GeneratorConfig, Ui5tsSettings, get_settings
from ui5ts.core.models import UI5API
from ui5ts.core.serializer import dump_api, parse_api

logger = logging.getLogger(__name__)

VERSION_MARKER = "{{VERSION}}"


class FetchError(Exception):
    """Raised when an api.json document cannot be retrieved."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class ApiFetcher:
    """Retrieves api.json documents.

    With ``local.run_local`` enabled, documents are read from the cache
    directory and fetched (then cached) only when missing.

    Example:
        >>> with ApiFetcher(config) as fetcher:
        ...     api = fetcher.get_api("sap/m", "1.60.0")
    """

    def __init__(
        self,
        config: GeneratorConfig,
        settings: Ui5tsSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Generator configuration (input and cache locations).
            settings: Runtime settings. If None, loads from environment.
            client: HTTP client to use. If None, one is created on demand.
        """
        self._config = config
        self._settings = settings or get_settings()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._settings.fetch_timeout)
        return self._client

    def local_path(self, namespace: str, version: str) -> Path:
        """Cache file path of a namespace's api.json."""
        location = f"{self._config.local.path}/{namespace}/{self._config.input.json_location}"
        return Path(location.replace(VERSION_MARKER, version))

    def remote_url(self, namespace: str, version: str) -> str:
        """Server URL of a namespace's api.json."""
        url = f"{self._config.input.api_base_url}/{namespace}/{self._config.input.json_location}"
        return url.replace(VERSION_MARKER, version)

    def get_api(self, namespace: str, version: str) -> UI5API:
        """Get the api.json of a namespace for a version.

        Args:
            namespace: Library namespace path, e.g. ``sap/m``.
            version: UI5 version, e.g. ``1.60.0``.

        Returns:
            The parsed API description.

        Raises:
            FetchError: If the server cannot deliver the document.
            SerializationError: If the document is not a valid api.json.
        """
        if not self._config.local.run_local:
            return self.get_server_api(namespace, version)

        path = self.local_path(namespace, version)
        if not path.exists():
            logger.info(f"Making local file '{path}'")
            api = self.get_server_api(namespace, version)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                dump_api(api, indent=self._config.output.indentation), encoding="utf-8"
            )
            return api

        logger.info(f"Reading local file '{path}'")
        return parse_api(path.read_text(encoding="utf-8"))

    def get_server_api(self, namespace: str, version: str) -> UI5API:
        """Fetch an api.json from the server, retrying transient failures.

        Transport errors and 5xx responses are retried with exponential
        backoff; any other non-200 response fails immediately.

        Raises:
            FetchError: If all attempts fail.
        """
        url = self.remote_url(namespace, version)
        retries = self._settings.fetch_retries
        delay = self._settings.fetch_retry_delay
        last_error = ""

        for attempt in range(retries):
            logger.info(f"Making request to '{url}' (attempt {attempt + 1}/{retries})")
            try:
                response = self.client.get(url)
            except httpx.TransportError as e:
                last_error = str(e)
            else:
                if response.status_code == 200:
                    logger.info(f"Got response from '{url}'")
                    return parse_api(response.text)
                last_error = f"{response.status_code} - {response.reason_phrase}"
                if response.status_code < 500:
                    break

            logger.warning(f"Got error from '{url}': {last_error}")
            if attempt < retries - 1:
                time.sleep(delay * (2**attempt))

        raise FetchError(f"Failed to fetch '{url}': {last_error}", url=url)

    def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> ApiFetcher:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
