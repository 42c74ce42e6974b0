"""Topic, subject and record naming for derived schemas."""

from __future__ import annotations

from .core import TableMetadata

KEY_SUFFIX = "Key"
VALUE_SUFFIX = "Value"
DATA_SUFFIX = "Data"


def topic_name_for(table: TableMetadata, prefix: str = "") -> str:
    """Topic for a table: ``<prefix>.<keyspace>.<table>``, prefix optional."""
    if prefix:
        return f"{prefix}.{table.keyspace}.{table.name}"
    return table.qualified_name


def key_subject(topic_name: str) -> str:
    return f"{topic_name}.{KEY_SUFFIX}"


def value_subject(topic_name: str) -> str:
    return f"{topic_name}.{VALUE_SUFFIX}"


def data_record_name(topic_name: str) -> str:
    return f"{topic_name}.{DATA_SUFFIX}"


__all__ = [
    "topic_name_for",
    "key_subject",
    "value_subject",
    "data_record_name",
]
