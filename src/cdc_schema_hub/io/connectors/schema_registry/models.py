"""
Schema Registry Connector Models and Exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from cdc_schema_hub.infrastructure.schema import Schema


class SchemaRegistryClientError(Exception):
    """Base exception for schema registry client errors."""

    pass


class SchemaNotFoundError(SchemaRegistryClientError):
    """Raised when a subject, version or schema id is unknown to the registry (404)."""

    pass


class SchemaRegistryTransportError(SchemaRegistryClientError):
    """Raised on connection failures, timeouts, server errors and unexpected responses."""

    pass


@dataclass(frozen=True)
class SchemaMetadata:
    """A registered schema version as reported by the registry."""

    subject: str
    schema_id: int
    version: int
    schema: Schema


class SchemaRegistryClient(Protocol):
    """Capability the gateway needs from a schema registry.

    Every method may raise ``SchemaRegistryClientError``.
    """

    def register(self, subject: str, schema: Schema) -> int:
        """Register ``schema`` under ``subject`` and return its global id.

        Registering a schema already present under the subject returns the
        existing id.
        """
        ...

    def get_by_id(self, subject: str, schema_id: int) -> Schema:
        ...

    def get_latest(self, subject: str) -> SchemaMetadata:
        ...
