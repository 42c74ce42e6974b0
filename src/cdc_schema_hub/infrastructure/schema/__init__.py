"""Infrastructure-level schema derivation.

This package has no I/O and no dependency on ``cdc_schema_hub.io``; the registry
gateway in ``cdc_schema_hub.io.schema`` builds on it.
"""

from .avro import (
    NO_DEFAULT,
    ArraySchema,
    Field,
    MapSchema,
    NamedReference,
    PrimitiveSchema,
    RecordSchema,
    Schema,
    UnionSchema,
    schema_from_avro,
    schema_from_json,
)
from .core import ColumnDef, ColumnKind, ColumnType, TableMetadata
from .derivation import (
    build_data_schema,
    build_key_schema,
    build_value_schema,
    nullable_wrapper,
)
from .errors import SchemaStructureError
from .naming import data_record_name, key_subject, topic_name_for, value_subject
from .type_mapping import column_type_to_field_type

__all__ = [
    "ColumnKind",
    "ColumnType",
    "ColumnDef",
    "TableMetadata",
    "NO_DEFAULT",
    "Schema",
    "PrimitiveSchema",
    "ArraySchema",
    "MapSchema",
    "UnionSchema",
    "NamedReference",
    "Field",
    "RecordSchema",
    "schema_from_avro",
    "schema_from_json",
    "SchemaStructureError",
    "column_type_to_field_type",
    "topic_name_for",
    "key_subject",
    "value_subject",
    "data_record_name",
    "nullable_wrapper",
    "build_key_schema",
    "build_value_schema",
    "build_data_schema",
]
