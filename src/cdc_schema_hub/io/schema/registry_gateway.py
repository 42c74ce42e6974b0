"""Schema registry gateway.

Registers derived key/value schemas for tables and resolves them again for
event serialization. The gateway keeps a process-wide cache of the last schema
id registered (or discovered) per subject:

- ``register_schemas_for_table`` derives both schemas, registers them and
  overwrites the cached ids (last write wins).
- ``get_key_schema``/``get_value_schema`` fetch by cached id, or on a miss ask
  the registry for the subject's latest version and cache its id. A miss that
  the registry cannot resolve raises ``UnresolvedSubjectError``.

Registration of the two subjects is not atomic. A failure after the key schema
was registered leaves it registered; retrying is safe because the registry
returns the existing id for an identical schema.

A single gateway may be shared across threads. Cache slots are read and written
under a lock; registry calls are made outside it.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from cdc_schema_hub.config import Settings, get_settings
from cdc_schema_hub.infrastructure.schema import (
    Schema,
    TableMetadata,
    build_key_schema,
    build_value_schema,
    key_subject,
    topic_name_for,
    value_subject,
)
from cdc_schema_hub.io.connectors.schema_registry import (
    HttpSchemaRegistryClient,
    SchemaRegistryClient,
    SchemaRegistryClientError,
)
from cdc_schema_hub.utils.logging import get_logger

from .errors import SchemaRegistryError, UnresolvedSubjectError

logger = get_logger(__name__)


class SchemaRegistryGateway:
    """Bridge between derived schema trees and a schema registry."""

    def __init__(self, client: SchemaRegistryClient, *, topic_prefix: str = ""):
        self.client = client
        self.topic_prefix = topic_prefix
        self._schema_ids: Dict[str, int] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SchemaRegistryGateway":
        """Build a gateway talking HTTP to the configured registry."""
        settings = settings or get_settings()
        client = HttpSchemaRegistryClient(
            settings.schema_registry_url,
            timeout=settings.schema_registry_timeout,
            max_cached_schemas=settings.schema_registry_max_cached_schemas,
        )
        return cls(client, topic_prefix=settings.topic_prefix)

    def topic_name(self, table: TableMetadata) -> str:
        return topic_name_for(table, self.topic_prefix)

    def cached_schema_id(self, subject: str) -> Optional[int]:
        with self._lock:
            return self._schema_ids.get(subject)

    def register_schemas_for_table(self, table: TableMetadata) -> None:
        """Derive and register the key and value schemas of ``table``.

        Raises:
            SchemaStructureError: If the table metadata is malformed
            SchemaRegistryError: If either registration fails
        """
        topic = self.topic_name(table)
        key_schema = build_key_schema(table, self.topic_prefix)
        value_schema = build_value_schema(table, self.topic_prefix)

        self._register(key_subject(topic), key_schema)
        self._register(value_subject(topic), value_schema)

    def get_key_schema(self, topic_name: str) -> Schema:
        return self._get_schema(key_subject(topic_name))

    def get_value_schema(self, topic_name: str) -> Schema:
        return self._get_schema(value_subject(topic_name))

    def _register(self, subject: str, schema: Schema) -> int:
        try:
            schema_id = self.client.register(subject, schema)
        except SchemaRegistryClientError as e:
            logger.error("schema_registry.register_failed", subject=subject, error=str(e))
            raise SchemaRegistryError(
                f"Problem when create or update schema for subject: {subject}",
                subject=subject,
                schema=schema.to_json(),
            ) from e

        with self._lock:
            self._schema_ids[subject] = schema_id

        logger.info(
            "schema_registry.schema_registered",
            subject=subject,
            schema_id=schema_id,
            schema=schema.to_json(),
        )
        return schema_id

    def _get_schema(self, subject: str) -> Schema:
        schema_id = self.cached_schema_id(subject)
        if schema_id is None:
            return self._get_latest_schema(subject)

        try:
            return self.client.get_by_id(subject, schema_id)
        except SchemaRegistryClientError as e:
            raise SchemaRegistryError(
                f"Problem when get schema for subject: {subject} and schema id: {schema_id}",
                subject=subject,
                schema_id=schema_id,
            ) from e

    def _get_latest_schema(self, subject: str) -> Schema:
        try:
            metadata = self.client.get_latest(subject)
        except SchemaRegistryClientError as e:
            logger.warning(
                "schema_registry.subject_unresolved", subject=subject, error=str(e)
            )
            raise UnresolvedSubjectError(
                "Schema requested before it was registered; there is no existing "
                f"schema for subject: {subject}",
                subject=subject,
            ) from e

        with self._lock:
            self._schema_ids[subject] = metadata.schema_id

        logger.info(
            "schema_registry.latest_schema_cached",
            subject=subject,
            schema_id=metadata.schema_id,
            version=metadata.version,
        )
        return metadata.schema
