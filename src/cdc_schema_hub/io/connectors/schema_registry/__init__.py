"""
Schema registry connector package.
"""

from .memory import InMemorySchemaRegistryClient
from .models import (
    SchemaMetadata,
    SchemaNotFoundError,
    SchemaRegistryClient,
    SchemaRegistryClientError,
    SchemaRegistryTransportError,
)
from .transport import HttpSchemaRegistryClient

__all__ = [
    "HttpSchemaRegistryClient",
    "InMemorySchemaRegistryClient",
    "SchemaMetadata",
    "SchemaRegistryClient",
    "SchemaRegistryClientError",
    "SchemaNotFoundError",
    "SchemaRegistryTransportError",
]
