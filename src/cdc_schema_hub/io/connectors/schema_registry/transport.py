"""
HTTP client for Confluent-compatible schema registries.
Handles session management, request encoding and error mapping.

Retries are left to callers; a failed request surfaces immediately.
"""

import threading
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from cdc_schema_hub.config.settings import get_settings
from cdc_schema_hub.infrastructure.schema import Schema, SchemaStructureError, schema_from_json
from cdc_schema_hub.utils.logging import get_logger

from .models import (
    SchemaMetadata,
    SchemaNotFoundError,
    SchemaRegistryClientError,
    SchemaRegistryTransportError,
)

logger = get_logger(__name__)

SCHEMA_REGISTRY_CONTENT_TYPE = "application/vnd.schemaregistry.v1+json"


class HttpSchemaRegistryClient:
    """
    Schema registry client over the registry REST API.

    Schemas fetched by id are kept in a bounded in-process cache; ids are
    immutable in the registry so cached entries never go stale.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_cached_schemas: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client with configuration.

        Args:
            base_url: Registry base URL. If None, uses settings default
            timeout: Request timeout in seconds. If None, uses settings default
            max_cached_schemas: Capacity of the by-id schema cache. If None,
                uses settings default
            session: Preconfigured requests session (auth, TLS, adapters)
        """
        settings = get_settings()

        self.base_url = (base_url or settings.schema_registry_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.schema_registry_timeout
        self.max_cached_schemas = (
            max_cached_schemas
            if max_cached_schemas is not None
            else settings.schema_registry_max_cached_schemas
        )

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": SCHEMA_REGISTRY_CONTENT_TYPE,
                "Content-Type": SCHEMA_REGISTRY_CONTENT_TYPE,
            }
        )

        self._schemas_by_id: Dict[int, Schema] = {}
        self._lock = threading.Lock()

        logger.info(
            "schema_registry.client_initialized",
            base_url=self.base_url,
            timeout=self.timeout,
            max_cached_schemas=self.max_cached_schemas,
        )

    def register(self, subject: str, schema: Schema) -> int:
        url = f"{self.base_url}/subjects/{quote(subject, safe='')}/versions"
        payload = self._request("POST", url, json={"schema": schema.to_json()})
        schema_id = self._require(payload, "id", url)
        self._remember(int(schema_id), schema)
        return int(schema_id)

    def get_by_id(self, subject: str, schema_id: int) -> Schema:
        with self._lock:
            cached = self._schemas_by_id.get(schema_id)
        if cached is not None:
            return cached

        url = f"{self.base_url}/schemas/ids/{schema_id}"
        payload = self._request("GET", url, params={"subject": subject})
        schema = self._parse_schema(self._require(payload, "schema", url), url)
        self._remember(schema_id, schema)
        return schema

    def get_latest(self, subject: str) -> SchemaMetadata:
        url = f"{self.base_url}/subjects/{quote(subject, safe='')}/versions/latest"
        payload = self._request("GET", url)
        schema_id = int(self._require(payload, "id", url))
        schema = self._parse_schema(self._require(payload, "schema", url), url)
        self._remember(schema_id, schema)
        return SchemaMetadata(
            subject=payload.get("subject", subject),
            schema_id=schema_id,
            version=int(payload.get("version", 0)),
            schema=schema,
        )

    def _remember(self, schema_id: int, schema: Schema) -> None:
        with self._lock:
            if (
                schema_id in self._schemas_by_id
                or len(self._schemas_by_id) < self.max_cached_schemas
            ):
                self._schemas_by_id[schema_id] = schema

    def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Make an HTTP request and decode the JSON body.

        Raises:
            SchemaNotFoundError: For 404 responses
            SchemaRegistryTransportError: For connection errors, timeouts,
                non-2xx responses and undecodable bodies
        """
        logger.debug("schema_registry.request", method=method, url=url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise SchemaRegistryTransportError(f"Request timeout after {self.timeout}s: {url}") from e
        except requests.exceptions.RequestException as e:
            raise SchemaRegistryTransportError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise SchemaNotFoundError(f"Not found: {url} ({self._error_message(response)})")
        if not 200 <= response.status_code < 300:
            logger.warning(
                "schema_registry.request_failed",
                url=url,
                status_code=response.status_code,
            )
            raise SchemaRegistryTransportError(
                f"Schema registry returned {response.status_code} for {url}: "
                f"{self._error_message(response)}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise SchemaRegistryTransportError(f"Invalid JSON response from {url}") from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return str(body.get("message", body))
        return str(body)

    @staticmethod
    def _require(payload: Dict[str, Any], key: str, url: str) -> Any:
        if key not in payload:
            raise SchemaRegistryTransportError(f"Response from {url} is missing '{key}'")
        return payload[key]

    @staticmethod
    def _parse_schema(text: str, url: str) -> Schema:
        try:
            return schema_from_json(text)
        except SchemaStructureError as e:
            raise SchemaRegistryClientError(f"Unreadable schema returned by {url}: {e}") from e
