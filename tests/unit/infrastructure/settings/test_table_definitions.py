"""
Unit tests for table definitions loading and validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cdc_schema_hub.infrastructure.schema import ColumnKind, TableMetadata
from cdc_schema_hub.infrastructure.settings import (
    TableDefinitionsError,
    load_table_definitions,
)

VALID_YAML = """
tables:
  - keyspace: shop
    name: orders
    partition_key: [order_id]
    clustering_key: [created_at]
    columns:
      - {name: order_id, type: int}
      - {name: created_at, type: timestamp}
      - {name: status, type: text}
  - keyspace: shop
    name: tags
    partition_key: [id]
    columns:
      - {name: id, type: uuid}
      - {name: labels, type: "frozen<set<text>>"}
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "tables.yml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadTableDefinitions:
    def test_loads_tables_in_order(self, tmp_path: Path, orders_table: TableMetadata) -> None:
        tables = load_table_definitions(_write(tmp_path, VALID_YAML))

        assert [t.qualified_name for t in tables] == ["shop.orders", "shop.tags"]
        assert tables[0] == orders_table

    def test_clustering_key_defaults_to_empty(self, tmp_path: Path) -> None:
        tags = load_table_definitions(_write(tmp_path, VALID_YAML))[1]
        assert tags.clustering_key_columns == ()
        assert tags.columns[1].column_type.kind == ColumnKind.SET

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TableDefinitionsError) as exc_info:
            load_table_definitions(tmp_path / "missing.yml")
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TableDefinitionsError) as exc_info:
            load_table_definitions(_write(tmp_path, "tables: [unclosed"))
        assert "Invalid YAML" in str(exc_info.value)

    def test_non_mapping_document_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TableDefinitionsError):
            load_table_definitions(_write(tmp_path, "- just\n- a list\n"))

    def test_unknown_key_column_raises(self, tmp_path: Path) -> None:
        content = """
tables:
  - keyspace: ks
    name: t
    partition_key: [nope]
    columns:
      - {name: id, type: int}
"""
        with pytest.raises(TableDefinitionsError) as exc_info:
            load_table_definitions(_write(tmp_path, content))
        assert "nope" in str(exc_info.value)

    def test_unsupported_type_raises(self, tmp_path: Path) -> None:
        content = """
tables:
  - keyspace: ks
    name: t
    partition_key: [id]
    columns:
      - {name: id, type: geometry}
"""
        with pytest.raises(TableDefinitionsError) as exc_info:
            load_table_definitions(_write(tmp_path, content))
        assert "geometry" in str(exc_info.value)

    def test_empty_partition_key_rejected(self, tmp_path: Path) -> None:
        content = """
tables:
  - keyspace: ks
    name: t
    partition_key: []
    columns:
      - {name: id, type: int}
"""
        with pytest.raises(TableDefinitionsError):
            load_table_definitions(_write(tmp_path, content))
