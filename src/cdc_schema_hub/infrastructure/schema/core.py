"""Core table metadata types for CDC schema derivation.

Tables are described the way a wide-column store reports them: an ordered
partition key, an ordered clustering key, and the full column list. Column types
are native (CQL-style) types, optionally parameterized for collections.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from .errors import SchemaStructureError


class ColumnKind(Enum):
    """Supported native column types."""

    ASCII = "ascii"
    BIGINT = "bigint"
    BLOB = "blob"
    BOOLEAN = "boolean"
    COUNTER = "counter"
    DATE = "date"
    DECIMAL = "decimal"
    DOUBLE = "double"
    DURATION = "duration"
    FLOAT = "float"
    INET = "inet"
    INT = "int"
    SMALLINT = "smallint"
    TEXT = "text"
    TIME = "time"
    TIMESTAMP = "timestamp"
    TIMEUUID = "timeuuid"
    TINYINT = "tinyint"
    UUID = "uuid"
    VARCHAR = "varchar"
    VARINT = "varint"
    LIST = "list"
    SET = "set"
    MAP = "map"


_COLLECTION_ARITY = {
    ColumnKind.LIST: 1,
    ColumnKind.SET: 1,
    ColumnKind.MAP: 2,
}

_TOKEN_PATTERN = re.compile(r"\s*([A-Za-z_]+|<|>|,)")


@dataclass(frozen=True)
class ColumnType:
    """A native column type, e.g. ``int`` or ``map<text, list<int>>``."""

    kind: ColumnKind
    parameters: Tuple["ColumnType", ...] = ()

    def __post_init__(self) -> None:
        expected = _COLLECTION_ARITY.get(self.kind, 0)
        if len(self.parameters) != expected:
            raise SchemaStructureError(
                f"Column type '{self.kind.value}' expects {expected} type "
                f"parameter(s), got {len(self.parameters)}"
            )

    @property
    def is_collection(self) -> bool:
        return self.kind in _COLLECTION_ARITY

    @classmethod
    def parse(cls, text: str) -> "ColumnType":
        """Parse a type string such as ``"set<frozen<list<text>>>"``.

        ``frozen<...>`` only affects storage and is unwrapped.
        """
        tokens = _tokenize(text)
        parsed, position = _parse_tokens(tokens, 0, text)
        if position != len(tokens):
            raise SchemaStructureError(f"Unexpected trailing input in column type '{text}'")
        return parsed

    def __str__(self) -> str:
        if not self.parameters:
            return self.kind.value
        inner = ", ".join(str(p) for p in self.parameters)
        return f"{self.kind.value}<{inner}>"


def _tokenize(text: str) -> List[str]:
    tokens: List[str] = []
    position = 0
    stripped = text.rstrip()
    while position < len(stripped):
        match = _TOKEN_PATTERN.match(stripped, position)
        if not match:
            raise SchemaStructureError(f"Invalid column type '{text}'")
        tokens.append(match.group(1).lower())
        position = match.end()
    if not tokens:
        raise SchemaStructureError("Column type must not be empty")
    return tokens


def _parse_tokens(tokens: List[str], position: int, text: str) -> Tuple[ColumnType, int]:
    if position >= len(tokens):
        raise SchemaStructureError(f"Incomplete column type '{text}'")
    name = tokens[position]
    position += 1

    if name == "frozen":
        if position >= len(tokens) or tokens[position] != "<":
            raise SchemaStructureError(f"Expected '<' after frozen in '{text}'")
        inner, position = _parse_tokens(tokens, position + 1, text)
        if position >= len(tokens) or tokens[position] != ">":
            raise SchemaStructureError(f"Unclosed frozen<> in column type '{text}'")
        return inner, position + 1

    try:
        kind = ColumnKind(name)
    except ValueError:
        raise SchemaStructureError(f"Unsupported column type '{name}' in '{text}'")

    parameters: List[ColumnType] = []
    if position < len(tokens) and tokens[position] == "<":
        position += 1
        while True:
            parameter, position = _parse_tokens(tokens, position, text)
            parameters.append(parameter)
            if position >= len(tokens):
                raise SchemaStructureError(f"Unclosed type parameters in '{text}'")
            if tokens[position] == ",":
                position += 1
                continue
            if tokens[position] == ">":
                position += 1
                break
            raise SchemaStructureError(f"Unexpected token '{tokens[position]}' in '{text}'")

    return ColumnType(kind, tuple(parameters)), position


@dataclass(frozen=True)
class ColumnDef:
    """Definition of a single table column."""

    name: str
    column_type: ColumnType

    @classmethod
    def of(cls, name: str, column_type: str) -> "ColumnDef":
        return cls(name, ColumnType.parse(column_type))


@dataclass(frozen=True)
class TableMetadata:
    """Structural metadata of one table.

    ``columns`` holds every column of the table, key columns included.
    """

    keyspace: str
    name: str
    partition_key_columns: Tuple[ColumnDef, ...] = ()
    clustering_key_columns: Tuple[ColumnDef, ...] = ()
    columns: Tuple[ColumnDef, ...] = field(default_factory=tuple)

    @property
    def qualified_name(self) -> str:
        return f"{self.keyspace}.{self.name}"


__all__ = [
    "ColumnKind",
    "ColumnType",
    "ColumnDef",
    "TableMetadata",
]
