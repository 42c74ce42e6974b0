"""
In-memory schema registry.

Behaves like a registry server for a single process: per-subject version
histories are append-only, ids are global, and re-registering an identical
schema under a subject returns the id it already has. Used for tests and for
running the CLI without a registry.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Tuple

from cdc_schema_hub.infrastructure.schema import Schema

from .models import SchemaMetadata, SchemaNotFoundError


class InMemorySchemaRegistryClient:
    """Thread-safe in-memory implementation of ``SchemaRegistryClient``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_id = 1
        self._ids_by_json: Dict[str, int] = {}
        self._schemas_by_id: Dict[int, Schema] = {}
        self._versions: Dict[str, List[int]] = {}
        self.calls: List[Tuple[str, str]] = []

    def register(self, subject: str, schema: Schema) -> int:
        canonical = schema.to_json()
        with self._lock:
            self.calls.append(("register", subject))
            schema_id = self._ids_by_json.get(canonical)
            if schema_id is None:
                schema_id = self._next_id
                self._next_id += 1
                self._ids_by_json[canonical] = schema_id
                self._schemas_by_id[schema_id] = schema

            versions = self._versions.setdefault(subject, [])
            if schema_id not in versions:
                versions.append(schema_id)
            return schema_id

    def get_by_id(self, subject: str, schema_id: int) -> Schema:
        with self._lock:
            self.calls.append(("get_by_id", subject))
            if schema_id not in self._versions.get(subject, []):
                raise SchemaNotFoundError(
                    f"Schema id {schema_id} not registered under subject '{subject}'"
                )
            return self._schemas_by_id[schema_id]

    def get_latest(self, subject: str) -> SchemaMetadata:
        with self._lock:
            self.calls.append(("get_latest", subject))
            versions = self._versions.get(subject)
            if not versions:
                raise SchemaNotFoundError(f"Subject '{subject}' not found")
            schema_id = versions[-1]
            return SchemaMetadata(
                subject=subject,
                schema_id=schema_id,
                version=len(versions),
                schema=self._schemas_by_id[schema_id],
            )

    def subjects(self) -> List[str]:
        with self._lock:
            return sorted(self._versions)

    def versions(self, subject: str) -> List[int]:
        """Schema ids registered under ``subject``, oldest first."""
        with self._lock:
            return list(self._versions.get(subject, []))
