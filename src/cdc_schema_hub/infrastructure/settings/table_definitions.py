"""
Schema validation for table definition files.

Table definitions describe the tables whose CDC schemas should be derived,
for use by the CLI and by deployments without a live metadata source:

    tables:
      - keyspace: shop
        name: orders
        partition_key: [order_id]
        clustering_key: [created_at]
        columns:
          - {name: order_id, type: int}
          - {name: created_at, type: timestamp}
          - {name: status, type: text}

Key columns are resolved by name against ``columns``; ``columns`` lists every
column of the table, key columns included.
"""

import logging
from pathlib import Path
from typing import List, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from cdc_schema_hub.infrastructure.schema import (
    ColumnDef,
    ColumnType,
    SchemaStructureError,
    TableMetadata,
)

logger = logging.getLogger(__name__)


class TableDefinitionsError(Exception):
    """Raised when a table definitions file is missing or invalid."""

    pass


class ColumnConfig(BaseModel):
    """Schema for a single column entry."""

    name: str = Field(..., min_length=1, description="Column name")
    type: str = Field(..., description="Native column type, e.g. 'list<text>'")

    @field_validator("type")
    @classmethod
    def _parseable_type(cls, value: str) -> str:
        try:
            ColumnType.parse(value)
        except SchemaStructureError as e:
            raise ValueError(str(e))
        return value

    def to_column(self) -> ColumnDef:
        return ColumnDef.of(self.name, self.type)


class TableConfig(BaseModel):
    """Schema for a single table entry."""

    keyspace: str = Field(..., min_length=1, description="Keyspace of the table")
    name: str = Field(..., min_length=1, description="Table name")
    partition_key: List[str] = Field(
        ..., min_length=1, description="Partition key column names, in order"
    )
    clustering_key: List[str] = Field(
        default_factory=list, description="Clustering key column names, in order"
    )
    columns: List[ColumnConfig] = Field(..., min_length=1, description="All columns")

    @model_validator(mode="after")
    def _keys_reference_columns(self) -> "TableConfig":
        known = {c.name for c in self.columns}
        missing = [k for k in self.partition_key + self.clustering_key if k not in known]
        if missing:
            raise ValueError(
                f"Key columns {missing} of table '{self.keyspace}.{self.name}' "
                "are not listed in columns"
            )
        return self

    def to_table(self) -> TableMetadata:
        by_name = {c.name: c.to_column() for c in self.columns}
        return TableMetadata(
            keyspace=self.keyspace,
            name=self.name,
            partition_key_columns=tuple(by_name[k] for k in self.partition_key),
            clustering_key_columns=tuple(by_name[k] for k in self.clustering_key),
            columns=tuple(c.to_column() for c in self.columns),
        )


class TableDefinitions(BaseModel):
    """Schema for a complete table definitions file."""

    tables: List[TableConfig] = Field(..., min_length=1)

    def to_tables(self) -> List[TableMetadata]:
        return [t.to_table() for t in self.tables]


def load_table_definitions(config_path: Union[str, Path]) -> List[TableMetadata]:
    """
    Load and validate a table definitions YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Table metadata in file order

    Raises:
        TableDefinitionsError: If the file is missing, not YAML, or invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise TableDefinitionsError(f"Table definitions file not found: {config_path}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TableDefinitionsError(f"Invalid YAML in table definitions file: {e}")

    if not isinstance(data, dict):
        raise TableDefinitionsError(
            f"Table definitions file must contain a mapping with 'tables': {config_path}"
        )

    try:
        definitions = TableDefinitions(**data)
    except ValidationError as e:
        raise TableDefinitionsError(f"Table definitions validation failed: {e}")

    tables = definitions.to_tables()
    logger.info(f"Loaded {len(tables)} table definitions from {config_file}")
    return tables
