"""Schema registration and lookup against a schema registry."""

from .errors import SchemaRegistryError, UnresolvedSubjectError
from .registry_gateway import SchemaRegistryGateway

__all__ = [
    "SchemaRegistryGateway",
    "SchemaRegistryError",
    "UnresolvedSubjectError",
]
