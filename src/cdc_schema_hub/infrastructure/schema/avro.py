"""Avro schema tree model.

Schema trees are immutable dataclasses so derived schemas can be compared
structurally. ``to_avro()`` renders the Avro JSON form; a named record that
occurs more than once is rendered in full the first time and as a name
reference afterwards, matching Avro's rule that each full name is defined once.

Usage:
    >>> record = RecordSchema("orders.Key", (Field("order_id", PrimitiveSchema("int")),))
    >>> record.to_json()
    '{"type":"record","name":"orders.Key","fields":[{"name":"order_id","type":"int"}]}'
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import SchemaStructureError

PRIMITIVE_TYPES = frozenset(
    ["null", "boolean", "int", "long", "float", "double", "bytes", "string"]
)


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


def _full_name(name: str, namespace: Optional[str]) -> str:
    if "." in name or not namespace:
        return name
    return f"{namespace}.{name}"


def _namespace_of(full_name: str) -> Optional[str]:
    if "." not in full_name:
        return None
    return full_name.rsplit(".", 1)[0]


class Schema:
    """Base class of all schema tree nodes."""

    def to_avro(self) -> Any:
        """Render this tree as Avro JSON-compatible Python data."""
        return self._render({}, None)

    def to_json(self) -> str:
        """Render this tree as a compact Avro JSON string."""
        return json.dumps(self.to_avro(), separators=(",", ":"), ensure_ascii=False)

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class PrimitiveSchema(Schema):
    type: str
    logical_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type not in PRIMITIVE_TYPES:
            raise SchemaStructureError(f"Unknown primitive type '{self.type}'")

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        if self.logical_type is None:
            return self.type
        return {"type": self.type, "logicalType": self.logical_type}


@dataclass(frozen=True)
class ArraySchema(Schema):
    items: Schema

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        return {"type": "array", "items": self.items._render(names, namespace)}


@dataclass(frozen=True)
class MapSchema(Schema):
    values: Schema

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        return {"type": "map", "values": self.values._render(names, namespace)}


@dataclass(frozen=True)
class UnionSchema(Schema):
    types: Tuple[Schema, ...]

    @property
    def is_nullable(self) -> bool:
        return any(isinstance(t, PrimitiveSchema) and t.type == "null" for t in self.types)

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        return [t._render(names, namespace) for t in self.types]


@dataclass(frozen=True)
class NamedReference(Schema):
    """Reference to a record defined elsewhere in the same tree."""

    name: str

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        return self.name


@dataclass(frozen=True)
class Field:
    name: str
    type: Schema
    default: Any = NO_DEFAULT

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        rendered: Dict[str, Any] = {
            "name": self.name,
            "type": self.type._render(names, namespace),
        }
        if self.has_default:
            rendered["default"] = self.default
        return rendered


@dataclass(frozen=True)
class RecordSchema(Schema):
    """Named record with ordered fields.

    Field names are not checked for uniqueness here; callers that assemble
    records from grouped columns validate uniqueness per group.
    """

    name: str
    fields: Tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        # A reference to this record would otherwise read back as a primitive
        if self.name.rsplit(".", 1)[-1] in PRIMITIVE_TYPES:
            raise SchemaStructureError(
                f"Record name '{self.name}' collides with a primitive type"
            )

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> Field:
        """Return the first field called ``name``."""
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        raise KeyError(f"Record '{self.name}' has no field '{name}'")

    def _render(self, names: Dict[str, "RecordSchema"], namespace: Optional[str]) -> Any:
        full_name = _full_name(self.name, namespace)
        existing = names.get(full_name)
        if existing is not None:
            if existing != self:
                raise SchemaStructureError(f"Can't redefine record '{full_name}'")
            if _namespace_of(full_name) == namespace:
                return full_name.rsplit(".", 1)[-1]
            return full_name

        names[full_name] = self
        inner_namespace = _namespace_of(full_name) or namespace
        return {
            "type": "record",
            "name": self.name,
            "fields": [f._render(names, inner_namespace) for f in self.fields],
        }


def schema_from_json(text: str) -> Schema:
    """Parse an Avro JSON schema string into a schema tree."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaStructureError(f"Invalid schema JSON: {e}")
    return schema_from_avro(data)


def schema_from_avro(data: Any) -> Schema:
    """Build a schema tree from Avro JSON-compatible Python data.

    Name references to records defined earlier in the document resolve to the
    defined record, so ``schema_from_avro(s.to_avro()) == s`` for derived trees.
    Names not (yet) defined, such as recursive self-references, become
    ``NamedReference`` nodes.
    """
    return _parse(data, {}, None)


def _parse(data: Any, names: Dict[str, RecordSchema], namespace: Optional[str]) -> Schema:
    if isinstance(data, str):
        if data in PRIMITIVE_TYPES:
            return PrimitiveSchema(data)
        full_name = _full_name(data, namespace)
        if full_name in names:
            return names[full_name]
        return NamedReference(data)

    if isinstance(data, list):
        return UnionSchema(tuple(_parse(member, names, namespace) for member in data))

    if not isinstance(data, dict):
        raise SchemaStructureError(f"Unsupported schema node: {data!r}")

    node_type = data.get("type")
    if isinstance(node_type, (dict, list)):
        return _parse(node_type, names, namespace)
    if node_type in PRIMITIVE_TYPES:
        return PrimitiveSchema(node_type, data.get("logicalType"))
    if node_type == "array":
        return ArraySchema(_parse(data["items"], names, namespace))
    if node_type == "map":
        return MapSchema(_parse(data["values"], names, namespace))
    if node_type == "record":
        return _parse_record(data, names, namespace)
    raise SchemaStructureError(f"Unsupported schema type: {node_type!r}")


def _parse_record(
    data: Dict[str, Any], names: Dict[str, RecordSchema], namespace: Optional[str]
) -> RecordSchema:
    name = data.get("name")
    if not name:
        raise SchemaStructureError("Record schema requires a name")
    record_namespace = data.get("namespace", namespace)
    full_name = _full_name(name, record_namespace)
    inner_namespace = _namespace_of(full_name) or record_namespace

    fields = []
    for raw_field in data.get("fields", []):
        field_type = _parse(raw_field["type"], names, inner_namespace)
        fields.append(
            Field(raw_field["name"], field_type, raw_field.get("default", NO_DEFAULT))
        )

    record = RecordSchema(name, tuple(fields))
    names[full_name] = record
    return record


__all__ = [
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
]
