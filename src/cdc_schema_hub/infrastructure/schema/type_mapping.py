"""Native column type to Avro field type mapping."""

from __future__ import annotations

from .avro import ArraySchema, MapSchema, PrimitiveSchema, Schema
from .core import ColumnKind, ColumnType

_STRING = PrimitiveSchema("string")

_PRIMITIVE_MAPPING = {
    ColumnKind.ASCII: _STRING,
    ColumnKind.TEXT: _STRING,
    ColumnKind.VARCHAR: _STRING,
    ColumnKind.INET: _STRING,
    ColumnKind.BIGINT: PrimitiveSchema("long"),
    ColumnKind.COUNTER: PrimitiveSchema("long"),
    ColumnKind.INT: PrimitiveSchema("int"),
    ColumnKind.SMALLINT: PrimitiveSchema("int"),
    ColumnKind.TINYINT: PrimitiveSchema("int"),
    ColumnKind.BLOB: PrimitiveSchema("bytes"),
    ColumnKind.BOOLEAN: PrimitiveSchema("boolean"),
    ColumnKind.DOUBLE: PrimitiveSchema("double"),
    ColumnKind.FLOAT: PrimitiveSchema("float"),
    ColumnKind.DATE: PrimitiveSchema("int", "date"),
    ColumnKind.TIME: PrimitiveSchema("long", "time-micros"),
    ColumnKind.TIMESTAMP: PrimitiveSchema("long", "timestamp-millis"),
    ColumnKind.UUID: PrimitiveSchema("string", "uuid"),
    ColumnKind.TIMEUUID: PrimitiveSchema("string", "uuid"),
    # Arbitrary precision and durations travel as their string form
    ColumnKind.DECIMAL: _STRING,
    ColumnKind.VARINT: _STRING,
    ColumnKind.DURATION: _STRING,
}


def column_type_to_field_type(column_type: ColumnType) -> Schema:
    """Map a native column type to its Avro field type.

    Collections map element-wise; Avro maps only support string keys, so the
    key type of ``map<K, V>`` is dropped.
    """
    kind = column_type.kind
    if kind in (ColumnKind.LIST, ColumnKind.SET):
        return ArraySchema(column_type_to_field_type(column_type.parameters[0]))
    if kind == ColumnKind.MAP:
        return MapSchema(column_type_to_field_type(column_type.parameters[1]))
    return _PRIMITIVE_MAPPING[kind]


__all__ = ["column_type_to_field_type"]
