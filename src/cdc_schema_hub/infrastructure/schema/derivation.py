"""Avro schema derivation from table metadata.

Three record schemas are derived per table:

- ``<topic>.Key``: partition-key columns as required fields
- ``<topic>.Value``: envelope with ``operation``, ``timestamp`` and ``data``
- ``<topic>.Data``: nested record carrying every partition-key, clustering-key
  and regular column as a nullable wrapper field

Each data field is typed ``["null", <column record>]`` where the column record
holds a single ``value`` field, so every column has the same two-level shape
regardless of its native type. Key columns are listed both in their key group
and again among all columns, so the data record carries a full post-image.

All functions are pure; schemas are rebuilt on every call.
"""

from __future__ import annotations

from typing import Iterable, List

from .avro import Field, PrimitiveSchema, RecordSchema, UnionSchema
from .core import ColumnDef, TableMetadata
from .errors import SchemaStructureError
from .naming import data_record_name, key_subject, topic_name_for, value_subject
from .type_mapping import column_type_to_field_type

OPERATION_FIELD_NAME = "operation"
TIMESTAMP_FIELD_NAME = "timestamp"
DATA_FIELD_NAME = "data"
VALUE_FIELD_NAME = "value"

_NULL = PrimitiveSchema("null")


def _ensure_unique(columns: Iterable[ColumnDef], group: str, table: TableMetadata) -> None:
    seen = set()
    for column in columns:
        if column.name in seen:
            raise SchemaStructureError(
                f"Duplicate column '{column.name}' in {group} of table "
                f"'{table.qualified_name}'"
            )
        seen.add(column.name)


def nullable_wrapper(column: ColumnDef) -> UnionSchema:
    """Build ``["null", {record <column>: value: T}]`` for a column."""
    wrapper = RecordSchema(
        column.name,
        (Field(VALUE_FIELD_NAME, column_type_to_field_type(column.column_type)),),
    )
    return UnionSchema((_NULL, wrapper))


def build_key_schema(table: TableMetadata, topic_prefix: str = "") -> RecordSchema:
    """Derive the key record: one required field per partition-key column.

    A table without partition-key columns yields a record with no fields.
    """
    _ensure_unique(table.partition_key_columns, "partition key", table)
    topic = topic_name_for(table, topic_prefix)
    fields = tuple(
        Field(column.name, column_type_to_field_type(column.column_type))
        for column in table.partition_key_columns
    )
    return RecordSchema(key_subject(topic), fields)


def build_value_schema(table: TableMetadata, topic_prefix: str = "") -> RecordSchema:
    """Derive the value envelope record."""
    topic = topic_name_for(table, topic_prefix)
    return RecordSchema(
        value_subject(topic),
        (
            Field(OPERATION_FIELD_NAME, PrimitiveSchema("string")),
            Field(TIMESTAMP_FIELD_NAME, PrimitiveSchema("long")),
            Field(DATA_FIELD_NAME, build_data_schema(table, topic_prefix)),
        ),
    )


def build_data_schema(table: TableMetadata, topic_prefix: str = "") -> RecordSchema:
    """Derive the data record nested in the value envelope.

    Raises:
        SchemaStructureError: If a column name repeats within one column group,
            or a column's wrapper record would take the name of the key, value
            or data record
    """
    topic = topic_name_for(table, topic_prefix)
    reserved = {key_subject(topic), value_subject(topic), data_record_name(topic)}
    groups = (
        ("partition key", table.partition_key_columns),
        ("clustering key", table.clustering_key_columns),
        ("columns", table.columns),
    )
    fields: List[Field] = []
    for group, columns in groups:
        _ensure_unique(columns, group, table)
        for column in columns:
            if _wrapper_full_name(column, topic) in reserved:
                raise SchemaStructureError(
                    f"Column '{column.name}' of table '{table.qualified_name}' "
                    f"clashes with a record name of topic '{topic}'"
                )
            fields.append(_data_field(column.name, nullable_wrapper(column)))

    return RecordSchema(data_record_name(topic), tuple(fields))


def _wrapper_full_name(column: ColumnDef, topic: str) -> str:
    # Wrappers are defined inside the data record, whose namespace is the topic
    if "." in column.name:
        return column.name
    return f"{topic}.{column.name}"


def _data_field(name: str, field_type: UnionSchema) -> Field:
    if not isinstance(field_type, UnionSchema) or not field_type.is_nullable:
        raise SchemaStructureError(
            f"Data field '{name}' must be a nullable union, got {field_type!r}"
        )
    return Field(name, field_type, default=None)


__all__ = [
    "OPERATION_FIELD_NAME",
    "TIMESTAMP_FIELD_NAME",
    "DATA_FIELD_NAME",
    "VALUE_FIELD_NAME",
    "nullable_wrapper",
    "build_key_schema",
    "build_value_schema",
    "build_data_schema",
]
